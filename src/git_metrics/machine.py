from __future__ import annotations

import dataclasses
import os
import platform
import subprocess
from pathlib import Path


@dataclasses.dataclass(frozen=True)
class MachineInformation:
    cpu_count: int
    memory_gb: int
    operating_system: str
    chip: str


def _run(cmd: list[str]) -> str:
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=5)
    except (OSError, subprocess.TimeoutExpired):
        return ""
    if proc.returncode != 0:
        return ""
    return proc.stdout.strip()


def memory_in_gigabytes() -> int:
    if platform.system() == "Darwin":
        out = _run(["sysctl", "-n", "hw.memsize"])
        return int(out) // (1024**3) if out.isdigit() else 0
    try:
        pages = os.sysconf("SC_PHYS_PAGES")
        page_size = os.sysconf("SC_PAGE_SIZE")
    except (AttributeError, ValueError, OSError):
        return 0
    if pages <= 0 or page_size <= 0:
        return 0
    return int(round(pages * page_size / (1024**3)))


def operating_system_information() -> str:
    system = platform.system()
    if system == "Darwin":
        version = _run(["sw_vers", "-productVersion"])
        return f"macOS {version}".strip()
    if system == "Linux":
        os_release = Path("/etc/os-release")
        try:
            for line in os_release.read_text(encoding="utf-8").splitlines():
                if line.startswith("PRETTY_NAME="):
                    return line.split("=", 1)[1].strip().strip('"')
        except OSError:
            pass
    name = f"{system} {platform.release()}".strip()
    return name or "unknown"


def chip_information() -> str:
    if platform.system() == "Darwin":
        chip = _run(["sysctl", "-n", "machdep.cpu.brand_string"])
        if chip:
            return chip
    cpuinfo = Path("/proc/cpuinfo")
    if cpuinfo.exists():
        try:
            for line in cpuinfo.read_text(encoding="utf-8", errors="replace").splitlines():
                if line.lower().startswith("model name"):
                    return line.split(":", 1)[1].strip()
        except OSError:
            pass
    return platform.processor() or platform.machine() or "unknown"


def collect_machine_information() -> MachineInformation:
    return MachineInformation(
        cpu_count=os.cpu_count() or 0,
        memory_gb=memory_in_gigabytes(),
        operating_system=operating_system_information(),
        chip=chip_information(),
    )
