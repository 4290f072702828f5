import pytest

from dq_dashboard.core.buckets import BUCKET_BY_VALUE, BUCKETS, bucket_for


@pytest.mark.parametrize(
    "percent, expected",
    [
        (0, "0"),
        (0.0, "0"),
        (0.01, "25"),
        (25, "25"),
        (25.01, "50"),
        (50, "50"),
        (75, "75"),
        (75.5, "100"),
        (100, "100"),
        (130, "100"),
        (-5, "25"),
    ],
)
def test_bucket_edges(percent, expected):
    assert bucket_for(percent).value == expected


def test_every_percentage_lands_in_exactly_one_bucket():
    for p in [0, 1, 12.5, 25, 26, 49.9, 50, 51, 75, 76, 100]:
        assert sum(bucket_for(p) == b for b in BUCKETS) == 1


def test_bucket_labels_and_lookup():
    assert [b.label for b in BUCKETS] == ["0%", "1-25%", "26-50%", "51-75%", "76-100%"]
    assert BUCKET_BY_VALUE["50"].label == "26-50%"
    assert "all" not in BUCKET_BY_VALUE
