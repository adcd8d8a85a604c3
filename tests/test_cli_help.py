from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def test_help_describes_options(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["PYTHONPATH"] = str((Path(__file__).resolve().parents[1] / "src"))
    cmd = [sys.executable, "-m", "git_metrics", "--help"]
    proc = subprocess.run(cmd, cwd=str(tmp_path), env=env, text=True, capture_output=True)
    assert proc.returncode == 0, proc.stderr
    out = proc.stdout
    assert "git-metrics" in out
    assert "--top" in out
    assert "--estimate-years" in out
    assert "--no-machine-info" in out
