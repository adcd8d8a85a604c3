from __future__ import annotations

from collections.abc import Iterable

from .models import ExtensionStatistic, FileInformation

NO_EXTENSION = "No Extension"


def file_extension(path: str) -> str:
    base = path.replace("\\", "/").rsplit("/", 1)[-1]
    i = base.rfind(".")
    if i < 0:
        return NO_EXTENSION
    return base[i:]


def add_file(dst: ExtensionStatistic, f: FileInformation) -> None:
    dst.size += f.compressed_size
    dst.files_count += 1
    dst.blobs_count += f.blobs


def aggregate_extensions(files: Iterable[FileInformation]) -> dict[str, ExtensionStatistic]:
    agg: dict[str, ExtensionStatistic] = {}
    for f in files:
        ext = file_extension(f.path)
        cur = agg.get(ext)
        if cur is None:
            cur = ExtensionStatistic(extension=ext)
            agg[ext] = cur
        add_file(cur, f)
    return agg
