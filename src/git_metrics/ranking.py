from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from .formatting import format_number, percentage
from .models import RankedRow, RankedTable, RollupRow

T = TypeVar("T")

DEFAULT_TOP_N = 10
TOP_PREFIX = "├─ Top"
TOTAL_PREFIX = "└─ Out of"


def rank_top_n(
    items: Iterable[T],
    *,
    key: Callable[[T], int],
    metrics: Sequence[tuple[str, Callable[[T], int]]],
    label: Callable[[T], str],
    top_n: int = DEFAULT_TOP_N,
) -> RankedTable[T]:
    """
    Sort `items` by `key` descending (stable, so ties keep input order) and keep the
    first `top_n`.

    Besides the displayed rows, two rollups are computed per metric:
    - top: sum over the displayed rows, as a percentage of the whole population's total
    - total: the whole population's total, always 100%
    """
    population = list(items)
    ranked = sorted(population, key=key, reverse=True)
    shown = ranked[: max(0, top_n)]

    totals = [sum(int(get(it)) for it in population) for _name, get in metrics]

    rows: list[RankedRow[T]] = []
    for it in shown:
        values = tuple((int(get(it)), percentage(int(get(it)), total)) for (_name, get), total in zip(metrics, totals))
        rows.append(RankedRow(label=label(it), item=it, values=values))

    top_sums = [sum(row.values[i][0] for row in rows) for i in range(len(metrics))]
    top = RollupRow(
        label=f"{TOP_PREFIX} {format_number(len(rows))}",
        values=tuple((s, percentage(s, total)) for s, total in zip(top_sums, totals)),
    )
    total = RollupRow(
        label=f"{TOTAL_PREFIX} {format_number(len(population))}",
        values=tuple((t, 100.0) for t in totals),
    )
    return RankedTable(
        metrics=tuple(name for name, _get in metrics),
        rows=rows,
        top=top,
        total=total,
        population=len(population),
    )
