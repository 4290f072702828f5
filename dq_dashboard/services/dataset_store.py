from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, Mapping, Set

from dq_dashboard.core.dataset import Dataset, DatasetKind, Row

logger = logging.getLogger(__name__)

SOURCE_FILE = "file"
SOURCE_UPLOAD = "upload"


class DatasetStore(Mapping[DatasetKind, Dataset]):
    """
    Holds the current dataset for each kind plus the time of the last load.

    Implements the Mapping interface (dict-like) so the UI can iterate kinds
    and look datasets up directly. The only way to change a dataset is a
    whole replace; readers always see either the previous or the new rows,
    never a mix.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self._clock = clock
        self._datasets: Dict[DatasetKind, Dataset] = {k: Dataset.empty(k) for k in DatasetKind}
        self._uploaded: Set[DatasetKind] = set()
        self.last_updated: datetime = clock()

    def replace(self, kind: DatasetKind | str, rows: Iterable[Row], source: str = SOURCE_FILE) -> Dataset:
        """
        Swap in a new dataset for `kind` and bump last_updated.
        """
        kind = DatasetKind.parse(kind)
        dataset = Dataset.from_rows(kind, rows)

        self._datasets[kind] = dataset
        if source == SOURCE_UPLOAD:
            self._uploaded.add(kind)
        self.last_updated = self._clock()

        logger.info(
            "Dataset replaced",
            extra={"kind": kind.value, "n_rows": len(dataset), "source": source},
        )
        return dataset

    def touch(self) -> None:
        """Stamp last_updated without changing any dataset (a refresh that loaded nothing)."""
        self.last_updated = self._clock()

    def get(self, kind: DatasetKind | str) -> Dataset:
        """Current dataset for `kind`; an empty dataset if it was never loaded."""
        return self._datasets[DatasetKind.parse(kind)]

    def __getitem__(self, kind: DatasetKind | str) -> Dataset:
        return self.get(kind)

    def __iter__(self) -> Iterator[DatasetKind]:
        return iter(self._datasets)

    def __len__(self) -> int:
        return len(self._datasets)

    def was_uploaded(self, kind: DatasetKind | str) -> bool:
        return DatasetKind.parse(kind) in self._uploaded

    def counts(self) -> Dict[DatasetKind, int]:
        return {k: len(ds) for k, ds in self._datasets.items()}
