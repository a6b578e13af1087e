from pathlib import Path
from typing import Iterable, Iterator, List

from .utils import IMG_EXTS, is_image


def discover_images(root: Path, exts=IMG_EXTS) -> Iterator[Path]:
    """Yield image files below ``root`` in a stable, sorted order."""
    for p in sorted(Path(root).rglob("*")):
        if p.is_file() and is_image(p, exts):
            yield p


def expand_sources(sources: Iterable) -> List[Path]:
    """Replace directories with the images they contain; keep files as given.

    Paths that do not exist are kept so the caller reports them as errors.
    """
    out: List[Path] = []
    seen = set()
    for s in sources:
        p = Path(s)
        found = discover_images(p) if p.is_dir() else [p]
        for f in found:
            key = str(f.resolve())
            if key in seen:
                continue
            seen.add(key)
            out.append(f)
    return out
