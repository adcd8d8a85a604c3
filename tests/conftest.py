from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

FAKE_GIT = r'''
import os
import sys

OBJECTS = {
    "c1": ("commit", 100),
    "t1": ("tree", 50),
    "b1": ("blob", 1000),
    "c2": ("commit", 110),
    "t2": ("tree", 60),
    "b2": ("blob", 800),
    "b3": ("blob", 20),
}
LISTING_2020 = ["c1", "t1 ", "b1 a.py"]
LISTING_ALL = ["c2", "c1", "t2 ", "b2 a.py", "b3 Makefile", "t1 ", "b1 a.py"]


def main() -> int:
    args = sys.argv[1:]
    if os.path.basename(os.getcwd()) == "not-a-repo":
        sys.stderr.write("fatal: not a git repository\n")
        return 128
    if args == ["--version"]:
        print("git version 2.45.0")
        return 0
    if args[:2] == ["rev-parse", "--show-toplevel"]:
        print(os.getcwd())
        return 0
    if args and args[0] == "rev-list":
        before = [a for a in args if a.startswith("--before=")]
        if before and before[0] == "--before=" + os.environ.get("FAKE_GIT_FAIL_BEFORE", ""):
            sys.stderr.write("fatal: listing failed\n")
            return 1
        listing = LISTING_2020 if before and before[0].startswith("--before=2020") else LISTING_ALL
        if before and before[0] < "--before=2020":
            listing = []
        for line in listing:
            print(line)
        return 0
    if args and args[0] == "cat-file":
        for line in sys.stdin.read().splitlines():
            sha, _, rest = line.partition(" ")
            kind, size = OBJECTS[sha]
            print(f"{kind} {sha} {size} {rest}")
        return 0
    if args and args[0] == "log":
        if "--max-parents=0" in args:
            print("2020-06-01T10:00:00+00:00")
            return 0
        if "--" in args:
            path = args[args.index("--") + 1]
            if path == "a.py":
                print("Mon, 1 Mar 2021 10:00:00 +0000")
                return 0
            if path == "broken":
                return 1
            return 0
        print("2021-03-01T10:00:00+00:00")
        return 0
    sys.stderr.write("unexpected args: " + " ".join(sys.argv) + "\n")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
'''


@pytest.fixture
def fake_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Put a scripted `git` first on PATH and return a repository directory for it."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    git = bin_dir / "git"
    git.write_text(f"#!{sys.executable}" + FAKE_GIT, encoding="utf-8")
    git.chmod(0o755)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))

    repo = tmp_path / "repo"
    repo.mkdir()
    return repo
