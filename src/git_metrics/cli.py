from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import DEFAULT_CONFIG_PATH, load_config, resolve_settings
from .report import run_report


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-metrics",
        description="Report the size and growth of a git repository: yearly growth, largest files and extensions.",
    )
    parser.add_argument("-r", "--repository", type=Path, default=Path("."), help="Path to the git repository.")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to a JSON config file.")
    parser.add_argument("--top", type=int, default=None, help="Number of largest files to show (default: 10).")
    parser.add_argument(
        "--top-extensions",
        type=int,
        default=None,
        help="Number of largest file extensions to show (default: 10).",
    )
    parser.add_argument(
        "--estimate-years",
        type=int,
        default=None,
        help="Future years to estimate from recent growth (default: 5, 0 disables estimates).",
    )
    parser.add_argument("--jobs", type=int, default=None, help="Parallel git jobs.")
    parser.add_argument("--no-machine-info", action="store_true", help="Do not print the machine/run section.")
    return parser


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)
    settings = resolve_settings(args, load_config(args.config))
    return run_report(repository=args.repository, settings=settings)


if __name__ == "__main__":
    raise SystemExit(main())
