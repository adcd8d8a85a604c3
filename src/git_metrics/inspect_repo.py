from __future__ import annotations

import dataclasses
import datetime as dt
import sys
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .git import GitObject, get_last_change, get_last_commit_date, get_root_commit_dates, list_objects
from .models import FileInformation, GrowthStatistics, RepositoryInformation


@dataclasses.dataclass
class RepositoryFacts:
    information: RepositoryInformation
    history: list[GrowthStatistics]
    files: list[FileInformation]
    errors: list[str]


def summarize_objects(objects: Iterable[GitObject], year: int = 0) -> GrowthStatistics:
    commits = trees = blobs = compressed = 0
    for o in objects:
        if o.kind == "commit":
            commits += 1
        elif o.kind == "tree":
            trees += 1
        elif o.kind == "blob":
            blobs += 1
        compressed += o.disk_size
    return GrowthStatistics(year=year, commits=commits, trees=trees, blobs=blobs, compressed=compressed)


def files_from_objects(objects: Iterable[GitObject]) -> list[FileInformation]:
    """Group blob revisions by path; order follows first appearance in `objects`."""
    by_path: dict[str, FileInformation] = {}
    for o in objects:
        if o.kind != "blob" or not o.path:
            continue
        cur = by_path.get(o.path)
        if cur is None:
            cur = FileInformation(path=o.path)
            by_path[o.path] = cur
        cur.blobs += 1
        cur.compressed_size += o.disk_size
    return list(by_path.values())


def year_end(year: int) -> str:
    return f"{year}-12-31T23:59:59"


def _year_snapshot(repo: Path, year: int) -> tuple[GrowthStatistics, list[str]]:
    objects, errors = list_objects(repo, before=year_end(year))
    return summarize_objects(objects, year=year), errors


def collect_repository(repo: Path, *, current_year: int, jobs: int = 4) -> RepositoryFacts:
    objects, errors = list_objects(repo)
    full = summarize_objects(objects)
    roots = get_root_commit_dates(repo)
    first_commit = min(roots) if roots else None
    last_commit = get_last_commit_date(repo)

    information = RepositoryInformation(
        total_commits=full.commits,
        total_trees=full.trees,
        total_blobs=full.blobs,
        compressed_size=full.compressed,
        first_commit=first_commit,
        last_commit=last_commit,
    )
    files = files_from_objects(objects)

    history: list[GrowthStatistics] = []
    if first_commit is not None:
        first_year = min(first_commit.year, current_year)
        years = list(range(first_year, current_year + 1))
        print(f"Note: collecting growth for {len(years)} year(s) ({years[0]}..{years[-1]})...", file=sys.stderr)
        by_year: dict[int, GrowthStatistics] = {}
        with ThreadPoolExecutor(max_workers=max(1, jobs)) as ex:
            futs = {ex.submit(_year_snapshot, repo, y): y for y in years}
            for fut in as_completed(futs):
                year = futs[fut]
                st, errs = fut.result()
                if errs:
                    # A failed listing is not an empty year; leave the row out.
                    errors.extend(f"growth for {year} skipped: {e}" for e in errs)
                    continue
                by_year[year] = st
        history = [by_year[y] for y in years if y in by_year]

    return RepositoryFacts(information=information, history=history, files=files, errors=errors)


def resolve_last_changes(repo: Path, files: list[FileInformation], *, jobs: int = 4) -> None:
    """Fill in `last_change` for each file; lookups that fail leave it unset."""
    pending = [f for f in files if f.last_change is None]
    if not pending:
        return
    results: dict[str, dt.datetime | None] = {}
    with ThreadPoolExecutor(max_workers=max(1, jobs)) as ex:
        futs = {ex.submit(get_last_change, repo, f.path): f.path for f in pending}
        for fut in as_completed(futs):
            results[futs[fut]] = fut.result()
    for f in pending:
        f.last_change = results.get(f.path)
