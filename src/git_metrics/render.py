from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from pathlib import Path

from .formatting import format_number, format_size, truncate_path
from .growth import CURRENT_MARKER, ESTIMATE_MARKER
from .machine import MachineInformation
from .models import ExtensionStatistic, FileInformation, GrowthRow, RankedTable, RepositoryInformation, RollupRow, RowKind

WIDTH = 96
RULE = "-" * WIDTH
PATH_WIDTH = 44
EXTENSION_WIDTH = 28
LABEL_WIDTH = 27

GROWTH_HEADER = "Year        Commits                  Trees                  Blobs           On-disk size"
FILES_HEADER = "File path                              Last commit          Blobs           On-disk size"
EXTENSIONS_HEADER = "Extension                            Files                  Blobs           On-disk size"


def section_banner(title: str) -> str:
    return f"{title} ".ljust(WIDTH, "#")


def _section(title: str, header: str | None = None) -> list[str]:
    lines = ["", section_banner(title), ""]
    if header is not None:
        lines.append(header)
        lines.append(RULE)
    return lines


def _fmt_date(value: dt.datetime | None) -> str:
    if value is None:
        return "unknown"
    return value.strftime("%a, %d %b %Y")


def render_repository_information(path: Path, information: RepositoryInformation) -> str:
    lines = _section("REPOSITORY")
    lines.append(f"{'Git directory':<{LABEL_WIDTH}}{path}")
    lines.append(f"{'First commit':<{LABEL_WIDTH}}{_fmt_date(information.first_commit)}")
    lines.append(f"{'Most recent commit':<{LABEL_WIDTH}}{_fmt_date(information.last_commit)}")
    lines.append(f"{'Commits':<{LABEL_WIDTH}}{format_number(information.total_commits)}")
    lines.append(f"{'Trees':<{LABEL_WIDTH}}{format_number(information.total_trees)}")
    lines.append(f"{'Blobs':<{LABEL_WIDTH}}{format_number(information.total_blobs)}")
    lines.append(f"{'On-disk size':<{LABEL_WIDTH}}{format_size(information.compressed_size)}")
    return "\n".join(lines) + "\n"


def render_machine_information(machine: MachineInformation, git_version: str, started: dt.datetime) -> str:
    lines = _section("RUN")
    lines.append(f"{'Start time':<{LABEL_WIDTH}}{started.strftime('%a, %d %b %Y %H:%M %Z').strip()}")
    lines.append(
        f"{'Machine':<{LABEL_WIDTH}}{machine.cpu_count} CPU cores with {machine.memory_gb} GB memory "
        f"({machine.operating_system} on {machine.chip})"
    )
    lines.append(f"{'Git version':<{LABEL_WIDTH}}{git_version}")
    return "\n".join(lines) + "\n"


def render_growth_table(rows: Sequence[GrowthRow]) -> str:
    lines = _section("HISTORIC & ESTIMATED GROWTH", GROWTH_HEADER)
    for r in rows:
        if r.kind is RowKind.CURRENT:
            lines.append(RULE)
        st = r.statistics
        lines.append(
            f"{r.label:<5} {format_number(st.commits):>13} {r.commits_delta:+5.0f} %  "
            f"{format_number(st.trees):>13} {r.trees_delta:+5.0f} %  "
            f"{format_number(st.blobs):>13} {r.blobs_delta:+5.0f} %  "
            f"{format_size(st.compressed):>13} {r.compressed_delta:+5.0f} %"
        )
    if not rows:
        lines.append("(no commits found)")
    lines.append("")
    lines.append(f"{CURRENT_MARKER} Current year (partial data)   {ESTIMATE_MARKER} Estimated from the average growth of recent years")
    lines.append("Percentages are each year's share of the all-time total, not growth over the previous year.")
    return "\n".join(lines) + "\n"


def _metric_cells(values: Sequence[tuple[int, float]], kinds: Sequence[str]) -> str:
    cells = []
    for (value, pct), kind in zip(values, kinds):
        shown = format_size(value) if kind == "size" else format_number(value)
        cells.append(f"{shown:>13} {pct:5.1f} %")
    return "  ".join(cells)


def _rollup_lines(rollups: Sequence[RollupRow], label_width: int, kinds: Sequence[str], gap: str = " ") -> list[str]:
    return [f"{r.label:<{label_width}}{gap}{_metric_cells(r.values, kinds)}" for r in rollups]


def render_largest_files(table: RankedTable[FileInformation]) -> str:
    kinds = ("count", "size")
    lines = _section("LARGEST FILES", FILES_HEADER)
    for row in table.rows:
        year = row.item.last_change.strftime("%Y") if row.item.last_change is not None else "    "
        path = truncate_path(row.label, PATH_WIDTH)
        lines.append(f"{path:<{PATH_WIDTH}}  {year}  {_metric_cells(row.values, kinds)}")
    lines.append(RULE)
    lines.extend(_rollup_lines([table.top, table.total], PATH_WIDTH, kinds, gap=" " * 8))
    return "\n".join(lines) + "\n"


def render_largest_extensions(table: RankedTable[ExtensionStatistic]) -> str:
    kinds = ("count", "count", "size")
    lines = _section("LARGEST FILE EXTENSIONS", EXTENSIONS_HEADER)
    for row in table.rows:
        label = truncate_path(row.label, EXTENSION_WIDTH)
        lines.append(f"{label:<{EXTENSION_WIDTH}} {_metric_cells(row.values, kinds)}")
    lines.append(RULE)
    lines.extend(_rollup_lines([table.top, table.total], EXTENSION_WIDTH, kinds))
    return "\n".join(lines) + "\n"
