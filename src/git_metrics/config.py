from __future__ import annotations

import argparse
import dataclasses
import json
import os
from pathlib import Path

DEFAULT_CONFIG_PATH = Path("git-metrics.json")


@dataclasses.dataclass(frozen=True)
class Settings:
    top_files: int = 10
    top_extensions: int = 10
    estimate_years: int = 5
    jobs: int = max(1, min(8, (os.cpu_count() or 4)))
    machine_info: bool = True


def load_config(config_path: Path) -> dict:
    if not config_path.exists():
        return {}
    try:
        config = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(f"Invalid config file {config_path}: {e}")
    if not isinstance(config, dict):
        raise SystemExit(f"Invalid config file {config_path}: expected a JSON object")
    return config


def _pick_int(cli_value: int | None, config: dict, key: str, default: int) -> int:
    if cli_value is not None:
        return int(cli_value)
    value = config.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise SystemExit(f"Config value {key!r} must be an integer, got: {value!r}")


def resolve_settings(args: argparse.Namespace, config: dict) -> Settings:
    defaults = Settings()
    return Settings(
        top_files=max(0, _pick_int(getattr(args, "top", None), config, "top_files", defaults.top_files)),
        top_extensions=max(
            0, _pick_int(getattr(args, "top_extensions", None), config, "top_extensions", defaults.top_extensions)
        ),
        estimate_years=max(
            0, _pick_int(getattr(args, "estimate_years", None), config, "estimate_years", defaults.estimate_years)
        ),
        jobs=max(1, _pick_int(getattr(args, "jobs", None), config, "jobs", defaults.jobs)),
        machine_info=not bool(getattr(args, "no_machine_info", False)),
    )
