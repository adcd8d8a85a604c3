from __future__ import annotations

from pathlib import Path

import pytest

from git_metrics.git import GitObject
from git_metrics.inspect_repo import collect_repository, files_from_objects, resolve_last_changes, summarize_objects
from git_metrics.models import FileInformation, GrowthStatistics


def _objects() -> list[GitObject]:
    return [
        GitObject(kind="commit", sha="c1", disk_size=100),
        GitObject(kind="tree", sha="t1", disk_size=50),
        GitObject(kind="blob", sha="b1", disk_size=1000, path="a.py"),
        GitObject(kind="blob", sha="b2", disk_size=800, path="a.py"),
        GitObject(kind="blob", sha="b3", disk_size=20, path="Makefile"),
        GitObject(kind="tag", sha="v1", disk_size=30),
    ]


def test_summarize_objects() -> None:
    st = summarize_objects(_objects(), year=2024)
    assert st == GrowthStatistics(year=2024, commits=1, trees=1, blobs=3, compressed=2000)


def test_files_from_objects_groups_revisions_by_path() -> None:
    files = files_from_objects(_objects())
    assert files == [
        FileInformation(path="a.py", blobs=2, compressed_size=1800),
        FileInformation(path="Makefile", blobs=1, compressed_size=20),
    ]
    assert all(f.blobs >= 1 for f in files)


def test_collect_repository(fake_git: Path) -> None:
    facts = collect_repository(fake_git, current_year=2021, jobs=2)
    assert facts.errors == []
    info = facts.information
    assert (info.total_commits, info.total_trees, info.total_blobs, info.compressed_size) == (2, 2, 3, 2140)
    assert info.first_commit is not None and info.first_commit.year == 2020
    assert info.last_commit is not None and info.last_commit.year == 2021
    assert facts.history == [
        GrowthStatistics(year=2020, commits=1, trees=1, blobs=1, compressed=1150),
        GrowthStatistics(year=2021, commits=2, trees=2, blobs=3, compressed=2140),
    ]
    assert [(f.path, f.blobs, f.compressed_size) for f in facts.files] == [("a.py", 2, 1800), ("Makefile", 1, 20)]


def test_resolve_last_changes_keeps_order_and_absorbs_failures(fake_git: Path) -> None:
    files = [
        FileInformation(path="broken", blobs=1),
        FileInformation(path="a.py", blobs=2),
        FileInformation(path="Makefile", blobs=1),
    ]
    resolve_last_changes(fake_git, files, jobs=3)
    assert [f.path for f in files] == ["broken", "a.py", "Makefile"]
    assert files[0].last_change is None
    assert files[1].last_change is not None and files[1].last_change.year == 2021
    assert files[2].last_change is None


def test_collect_repository_skips_year_whose_listing_fails(
    fake_git: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("FAKE_GIT_FAIL_BEFORE", "2020-12-31T23:59:59")
    facts = collect_repository(fake_git, current_year=2021, jobs=2)
    assert facts.history == [GrowthStatistics(year=2021, commits=2, trees=2, blobs=3, compressed=2140)]
    assert len(facts.errors) == 1
    assert facts.errors[0].startswith("growth for 2020 skipped: git rev-list failed (1)")
    assert facts.information.total_commits == 2
