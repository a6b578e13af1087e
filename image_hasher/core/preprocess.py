"""Pillow boundary: file -> decoded image -> grayscale intensity buffer.

The preprocessing pipeline is pinned. Every stored hash depends on it bit for
bit, so any change here (orientation handling, luma conversion or the resize
filter) invalidates previously computed hashes.

The EXIF orientation step is not performed by the `imagehash` package. A JPEG
carrying an orientation tag therefore hashes differently here than there,
even though the hex string layout is the same. The resize filter is
`RESAMPLE_FILTER` (LANCZOS).
"""

from __future__ import annotations

from pathlib import Path
from typing import Tuple, Union

import numpy as np
import structlog
from PIL import Image, ImageOps, UnidentifiedImageError

from .errors import SourceUnavailable, UnsupportedOrCorruptImage

logger = structlog.get_logger(__name__)

RESAMPLE_FILTER = Image.Resampling.LANCZOS

PathLike = Union[str, Path]

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, Image.DecompressionBombError)


def open_image(path: PathLike) -> Image.Image:
    """Open and fully decode ``path``.

    The returned image is loaded and can be used as a context manager to
    release any file handle Pillow still holds (multi-frame formats).
    """
    p = Path(path)
    try:
        im = Image.open(p)
    except UnidentifiedImageError as exc:
        raise UnsupportedOrCorruptImage(f"cannot identify image file: {p}", source=str(p)) from exc
    except Image.DecompressionBombError as exc:
        raise UnsupportedOrCorruptImage(f"image too large to decode: {p}", source=str(p)) from exc
    except OSError as exc:
        raise SourceUnavailable(f"cannot read {p}: {exc.strerror or exc}", source=str(p)) from exc

    try:
        im.load()
    except _DECODE_ERRORS as exc:
        im.close()
        raise UnsupportedOrCorruptImage(f"cannot decode {p}: {exc}", source=str(p)) from exc
    logger.debug("image_opened", path=str(p), format=im.format, mode=im.mode, size=im.size)
    return im


def to_grey(im: Image.Image, size: Tuple[int, int]) -> Image.Image:
    """Orient by EXIF, convert to 8-bit luma and resize to ``size`` (w, h)."""
    im = ImageOps.exif_transpose(im)
    return im.convert("L").resize(size, RESAMPLE_FILTER)


def intensity_buffer(im: Image.Image, width: int, height: int) -> np.ndarray:
    """Return ``width * height`` uint8 intensities of ``im`` in row-major order."""
    try:
        grey = to_grey(im, (width, height))
    except _DECODE_ERRORS as exc:
        source = getattr(im, "filename", None) or None
        raise UnsupportedOrCorruptImage(f"cannot convert image to grayscale: {exc}", source=source) from exc
    return np.asarray(grey, dtype=np.uint8).reshape(-1)
