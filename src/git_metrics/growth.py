from __future__ import annotations

from collections.abc import Iterable, Sequence

from .formatting import percentage
from .models import GrowthRow, GrowthStatistics, RepositoryInformation, RowKind

CURRENT_MARKER = "^"
ESTIMATE_MARKER = "*"
ESTIMATE_WINDOW = 3


def growth_delta(
    current: GrowthStatistics,
    previous: GrowthStatistics,
    information: RepositoryInformation,
) -> tuple[float, float, float, float]:
    """
    Percentage change between two yearly rows, relative to the all-time total of each
    metric (not to the previous row). Consecutive deltas therefore add up to the
    repository's overall growth.
    """
    return (
        percentage(current.commits - previous.commits, information.total_commits),
        percentage(current.trees - previous.trees, information.total_trees),
        percentage(current.blobs - previous.blobs, information.total_blobs),
        percentage(current.compressed - previous.compressed, information.compressed_size),
    )


def classify_year(year: int, *, is_estimate: bool, current_year: int) -> RowKind:
    if is_estimate:
        if year == current_year:
            raise ValueError(f"Estimated row for the current year {year} (estimates must be future years)")
        return RowKind.ESTIMATED
    if year == current_year:
        return RowKind.CURRENT
    return RowKind.HISTORICAL


def row_label(year: int, kind: RowKind) -> str:
    if kind is RowKind.CURRENT:
        return f"{year}{CURRENT_MARKER}"
    if kind is RowKind.ESTIMATED:
        return f"{year}{ESTIMATE_MARKER}"
    return str(year)


def growth_rows(
    history: Sequence[GrowthStatistics],
    information: RepositoryInformation,
    *,
    current_year: int,
    estimates: Iterable[GrowthStatistics] = (),
) -> list[GrowthRow]:
    rows: list[GrowthRow] = []
    previous = GrowthStatistics()
    tagged = [(st, False) for st in history] + [(st, True) for st in estimates]
    for st, is_estimate in tagged:
        kind = classify_year(st.year, is_estimate=is_estimate, current_year=current_year)
        commits_d, trees_d, blobs_d, compressed_d = growth_delta(st, previous, information)
        rows.append(
            GrowthRow(
                label=row_label(st.year, kind),
                kind=kind,
                statistics=st,
                commits_delta=commits_d,
                trees_delta=trees_d,
                blobs_delta=blobs_d,
                compressed_delta=compressed_d,
            )
        )
        previous = st
    return rows


def estimate_growth(
    history: Sequence[GrowthStatistics],
    *,
    current_year: int,
    years: int,
) -> list[GrowthStatistics]:
    """
    Extrapolate `years` future rows after the current year from the average yearly
    increase over the last few complete years.

    Each metric is projected both from the last complete year and from the latest
    history row (the partial current year, if present); the larger value wins, so
    estimates never fall below the rows before them.
    """
    if years <= 0:
        return []
    complete = sorted((st for st in history if st.year < current_year), key=lambda st: st.year)
    if not complete:
        return []

    last = complete[-1]
    window = complete[-(ESTIMATE_WINDOW + 1) :]
    if len(window) == 1:
        base = GrowthStatistics(year=last.year - 1)
    else:
        base = window[0]
    span = max(1, last.year - base.year)

    commits_step = (last.commits - base.commits) / span
    trees_step = (last.trees - base.trees) / span
    blobs_step = (last.blobs - base.blobs) / span
    compressed_step = (last.compressed - base.compressed) / span

    latest = max(history, key=lambda st: st.year)

    def project(year: int, last_value: int, latest_value: int, step: float) -> int:
        from_complete = last_value + int(round(step * (year - last.year)))
        from_latest = latest_value + int(round(step * (year - latest.year)))
        return max(from_complete, from_latest)

    out: list[GrowthStatistics] = []
    for year in range(current_year + 1, current_year + years + 1):
        out.append(
            GrowthStatistics(
                year=year,
                commits=project(year, last.commits, latest.commits, commits_step),
                trees=project(year, last.trees, latest.trees, trees_step),
                blobs=project(year, last.blobs, latest.blobs, blobs_step),
                compressed=project(year, last.compressed, latest.compressed, compressed_step),
            )
        )
    return out
