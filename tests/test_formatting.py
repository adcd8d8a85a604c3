from __future__ import annotations

from git_metrics.formatting import format_number, format_size, percentage, truncate_path


def test_format_size_units() -> None:
    assert format_size(0) == "0 B"
    assert format_size(1) == "1 B"
    assert format_size(1023) == "1023 B"
    assert format_size(1024) == "1.0 KB"
    assert format_size(1536) == "1.5 KB"
    assert format_size(1024 * 1024) == "1.0 MB"
    assert format_size(5 * 1024**3) == "5.0 GB"
    assert format_size(2 * 1024**4) == "2.0 TB"


def test_format_size_negative() -> None:
    assert format_size(-10) == "-10 B"
    assert format_size(-2048) == "-2.0 KB"


def test_format_number_grouping() -> None:
    assert format_number(0) == "0"
    assert format_number(999) == "999"
    assert format_number(1000) == "1,000"
    assert format_number(1_234_567) == "1,234,567"
    assert format_number(-1000) == "-1,000"


def test_truncate_path_identity_under_limit() -> None:
    assert truncate_path("", 10) == ""
    assert truncate_path("src/main.py", 44) == "src/main.py"
    assert truncate_path("abcdefghij", 10) == "abcdefghij"


def test_truncate_path_exact_width() -> None:
    path = "assets/very/deeply/nested/directory/structure/with/a/large/file.bin"
    for width in (4, 5, 10, 20, 44):
        out = truncate_path(path, width)
        assert len(out) == width
    out = truncate_path(path, 20)
    assert out == "assets/v.../file.bin"
    assert out.startswith("assets/")
    assert out.endswith("file.bin")
    assert "..." in out


def test_truncate_path_tiny_width() -> None:
    assert truncate_path("abcdef", 3) == "abc"
    assert truncate_path("abcdef", 0) == ""


def test_percentage_zero_total() -> None:
    assert percentage(5, 0) == 0.0
    assert percentage(0, 0) == 0.0
    assert percentage(1, 4) == 25.0


def test_format_size_rounds_up_into_next_unit() -> None:
    assert format_size(1024 * 1024 - 1) == "1.0 MB"
    assert format_size(1024**3 - 1) == "1.0 GB"
    assert format_size(-(1024 * 1024 - 1)) == "-1.0 MB"
    assert format_size(1023 * 1024) == "1023.0 KB"
