from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path

from .config import Settings
from .extensions import aggregate_extensions
from .git import get_git_version, get_repo_toplevel
from .growth import estimate_growth, growth_rows
from .inspect_repo import RepositoryFacts, collect_repository, resolve_last_changes
from .machine import collect_machine_information
from .models import ExtensionStatistic, FileInformation, RankedTable
from .ranking import rank_top_n
from .render import (
    render_growth_table,
    render_largest_extensions,
    render_largest_files,
    render_machine_information,
    render_repository_information,
)


def rank_files(files: list[FileInformation], top_n: int) -> RankedTable[FileInformation]:
    return rank_top_n(
        files,
        key=lambda f: f.compressed_size,
        metrics=[("blobs", lambda f: f.blobs), ("size", lambda f: f.compressed_size)],
        label=lambda f: f.path,
        top_n=top_n,
    )


def rank_extensions(files: list[FileInformation], top_n: int) -> RankedTable[ExtensionStatistic]:
    stats = aggregate_extensions(files)
    return rank_top_n(
        stats.values(),
        key=lambda s: s.size,
        metrics=[
            ("files", lambda s: s.files_count),
            ("blobs", lambda s: s.blobs_count),
            ("size", lambda s: s.size),
        ],
        label=lambda s: s.extension,
        top_n=top_n,
    )


def build_report(repo: Path, facts: RepositoryFacts, settings: Settings, *, current_year: int) -> list[str]:
    """Render every data section, in output order. Resolves last-change dates of the displayed files."""
    estimates = estimate_growth(facts.history, current_year=current_year, years=settings.estimate_years)
    rows = growth_rows(facts.history, facts.information, current_year=current_year, estimates=estimates)

    files_table = rank_files(facts.files, settings.top_files)
    resolve_last_changes(repo, [row.item for row in files_table.rows], jobs=settings.jobs)
    extensions_table = rank_extensions(facts.files, settings.top_extensions)

    return [
        render_repository_information(repo, facts.information),
        render_growth_table(rows),
        render_largest_files(files_table),
        render_largest_extensions(extensions_table),
    ]


def run_report(*, repository: Path, settings: Settings, today: dt.date | None = None) -> int:
    if today is None:
        today = dt.date.today()
    started = dt.datetime.now().astimezone()

    repo = get_repo_toplevel(repository)
    if repo is None:
        print(f"Not a git repository: {repository}", file=sys.stderr)
        return 2

    if settings.machine_info:
        print(render_machine_information(collect_machine_information(), get_git_version(repo), started), end="")
        sys.stdout.flush()

    print(f"Note: listing objects in {repo} (this can take a while for large repositories)...", file=sys.stderr)
    facts = collect_repository(repo, current_year=today.year, jobs=settings.jobs)
    for err in facts.errors:
        print(f"Warning: {err}", file=sys.stderr)
    if facts.information.total_commits == 0:
        print(f"Warning: no commits found in {repo}", file=sys.stderr)

    for section in build_report(repo, facts, settings, current_year=today.year):
        print(section, end="")
    return 0
