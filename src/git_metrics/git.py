from __future__ import annotations

import dataclasses
import datetime as dt
import subprocess
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Optional

BATCH_CHECK_FORMAT = "%(objecttype) %(objectname) %(objectsize:disk) %(rest)"


@dataclasses.dataclass(frozen=True)
class GitObject:
    kind: str  # commit, tree, blob or tag
    sha: str
    disk_size: int
    path: str = ""


def run_git(args: list[str], cwd: Path, timeout_s: int = 600, input_text: str | None = None) -> tuple[int, str, str]:
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout_s,
        )
    except subprocess.TimeoutExpired as e:
        return 124, "", f"git {' '.join(args)} timed out after {e.timeout}s"
    except OSError as e:
        return 127, "", str(e)
    return proc.returncode, proc.stdout, proc.stderr


def get_repo_toplevel(candidate: Path) -> Optional[Path]:
    code, out, _ = run_git(["rev-parse", "--show-toplevel"], cwd=candidate)
    if code != 0 or not out.strip():
        return None
    return Path(out.strip()).resolve()


def get_git_version(cwd: Path | None = None) -> str:
    code, out, _ = run_git(["--version"], cwd=cwd or Path.cwd())
    if code != 0:
        return "unknown"
    v = out.strip()
    if v.startswith("git version "):
        v = v[len("git version ") :]
    return v or "unknown"


def parse_git_iso(value: str) -> dt.datetime | None:
    s = (value or "").strip()
    if not s:
        return None
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return dt.datetime.fromisoformat(s)
    except ValueError:
        return None


def get_root_commit_dates(repo: Path) -> list[dt.datetime]:
    code, out, _ = run_git(["log", "--all", "--max-parents=0", "--format=%cI"], cwd=repo)
    if code != 0:
        return []
    dates = [parse_git_iso(line) for line in out.splitlines()]
    return [d for d in dates if d is not None]


def get_last_commit_date(repo: Path) -> dt.datetime | None:
    code, out, _ = run_git(["log", "--all", "-n", "1", "--format=%cI"], cwd=repo)
    if code != 0:
        return None
    return parse_git_iso(out)


def get_last_change(repo: Path, path: str) -> dt.datetime | None:
    code, out, _ = run_git(["log", "-1", "--format=%cD", "--", path], cwd=repo)
    if code != 0:
        return None
    line = out.strip()
    if not line:
        return None
    try:
        return parsedate_to_datetime(line)
    except (TypeError, ValueError):
        return None


def parse_batch_check(output: str) -> list[GitObject]:
    objects: list[GitObject] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split(" ", 3)
        if len(parts) < 3:
            continue
        kind, sha, size = parts[0], parts[1], parts[2]
        if kind == "missing" or not size.isdigit():
            continue
        path = parts[3] if len(parts) == 4 else ""
        objects.append(GitObject(kind=kind, sha=sha, disk_size=int(size), path=path))
    return objects


def list_objects(repo: Path, before: str | None = None) -> tuple[list[GitObject], list[str]]:
    """
    List every object reachable from any ref (optionally only from commits before
    `before`) with its on-disk size and, for trees and blobs, the path it was first
    seen at.
    """
    args = ["rev-list", "--objects", "--all"]
    if before:
        args.append(f"--before={before}")
    code, out, err = run_git(args, cwd=repo)
    if code != 0:
        return [], [f"git rev-list failed ({code}): {err.strip()}"]
    if not out.strip():
        return [], []

    code, out, err = run_git(["cat-file", f"--batch-check={BATCH_CHECK_FORMAT}"], cwd=repo, input_text=out)
    if code != 0:
        return [], [f"git cat-file failed ({code}): {err.strip()}"]
    return parse_batch_check(out), []
