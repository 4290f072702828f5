from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Bucket:
    """
    One of the five disjoint mismatch-percentage ranges.

    `value` is the identifier used by the range filter dropdown,
    `label` the name shown in distribution charts.
    """
    value: str
    label: str


BUCKETS: Tuple[Bucket, ...] = (
    Bucket("0", "0%"),
    Bucket("25", "1-25%"),
    Bucket("50", "26-50%"),
    Bucket("75", "51-75%"),
    Bucket("100", "76-100%"),
)

BUCKET_BY_VALUE: Dict[str, Bucket] = {b.value: b for b in BUCKETS}


def bucket_for(percent: float) -> Bucket:
    """
    Assign a percentage to exactly one bucket.

    0 is its own bucket, every other bucket is closed at its upper edge,
    and anything above 75 goes to the top bucket. Values below 0 land in
    "1-25%", which is where the `<= 25` check puts them.
    """
    if percent == 0:
        return BUCKETS[0]
    if percent <= 25:
        return BUCKETS[1]
    if percent <= 50:
        return BUCKETS[2]
    if percent <= 75:
        return BUCKETS[3]
    return BUCKETS[4]
