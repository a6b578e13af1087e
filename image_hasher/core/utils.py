import os
from pathlib import Path

IMG_EXTS = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp"}


def is_image(p: Path, exts=IMG_EXTS) -> bool:
    return p.suffix.lower() in exts


def cpu_threads() -> int:
    try:
        return len(os.sched_getaffinity(0))
    except AttributeError:
        # not available on macOS / Windows
        return os.cpu_count() or 4
