from __future__ import annotations

SIZE_UNITS = ("KB", "MB", "GB", "TB", "PB", "EB")
ELLIPSIS = "..."


def format_size(n: int) -> str:
    """Render a byte count with binary units, e.g. `1023 B`, `1.0 KB`, `3.4 GB`."""
    n = int(n)
    sign = "-" if n < 0 else ""
    value = abs(n)
    if value < 1024:
        return f"{sign}{value} B"
    div = 1024
    exp = 0
    while round(value / div, 1) >= 1024 and exp < len(SIZE_UNITS) - 1:
        div *= 1024
        exp += 1
    return f"{sign}{value / div:.1f} {SIZE_UNITS[exp]}"


def format_number(n: int) -> str:
    return f"{int(n):,}"


def truncate_path(path: str, max_width: int) -> str:
    """Shorten `path` to exactly `max_width` chars by replacing its middle with `...`."""
    if len(path) <= max_width:
        return path
    if max_width <= len(ELLIPSIS):
        return path[: max(0, max_width)]
    keep = max_width - len(ELLIPSIS)
    head = keep // 2
    tail = keep - head
    return path[:head] + ELLIPSIS + path[-tail:]


def percentage(value: float, total: float) -> float:
    if not total:
        return 0.0
    return value / total * 100.0
