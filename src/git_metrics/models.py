from __future__ import annotations

import dataclasses
import datetime as dt
import enum
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclasses.dataclass(frozen=True)
class RepositoryInformation:
    total_commits: int = 0
    total_trees: int = 0
    total_blobs: int = 0
    compressed_size: int = 0
    first_commit: dt.datetime | None = None
    last_commit: dt.datetime | None = None


@dataclasses.dataclass(frozen=True)
class GrowthStatistics:
    # Cumulative counts as of the end of `year`, not per-year deltas.
    year: int = 0
    commits: int = 0
    trees: int = 0
    blobs: int = 0
    compressed: int = 0


@dataclasses.dataclass
class FileInformation:
    path: str
    blobs: int = 0
    compressed_size: int = 0
    last_change: dt.datetime | None = None


@dataclasses.dataclass
class ExtensionStatistic:
    extension: str
    size: int = 0
    files_count: int = 0
    blobs_count: int = 0


class RowKind(str, enum.Enum):
    HISTORICAL = "historical"
    CURRENT = "current"
    ESTIMATED = "estimated"


@dataclasses.dataclass(frozen=True)
class GrowthRow:
    label: str
    kind: RowKind
    statistics: GrowthStatistics
    commits_delta: float
    trees_delta: float
    blobs_delta: float
    compressed_delta: float


@dataclasses.dataclass(frozen=True)
class RollupRow:
    label: str
    values: tuple[tuple[int, float], ...]  # (value, percentage of population total) per metric


@dataclasses.dataclass(frozen=True)
class RankedRow(Generic[T]):
    label: str
    item: T
    values: tuple[tuple[int, float], ...]


@dataclasses.dataclass(frozen=True)
class RankedTable(Generic[T]):
    metrics: tuple[str, ...]
    rows: list[RankedRow[T]]
    top: RollupRow
    total: RollupRow
    population: int
