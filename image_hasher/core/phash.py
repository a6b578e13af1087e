"""Perceptual (DCT) image hashing."""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import structlog
from PIL import Image
from pydantic import ValidationError

from .config import HasherConfig
from .dct import dct2_2d
from .errors import ContractViolation
from .hashes import ImageHash
from .matrix import build_sample_matrix, low_frequencies, threshold
from .preprocess import PathLike, intensity_buffer, open_image

logger = structlog.get_logger(__name__)


@runtime_checkable
class ImageHasher(Protocol):
    """Capabilities shared by every hash variant."""

    def hash_from_pixels(self, buffer, width: int, height: int) -> ImageHash: ...

    def hash_from_image(self, im: Image.Image) -> ImageHash: ...

    def hash_from_source(self, path: PathLike) -> ImageHash: ...


class PerceptualHasher:
    """pHash: DCT of an oversampled grayscale image, thresholded at the median
    of its low-frequency block.

    A hasher holds nothing but its configuration and can be shared freely
    between threads.
    """

    def __init__(self, config: Optional[HasherConfig] = None, **overrides):
        if config is not None and overrides:
            raise TypeError("pass either a HasherConfig or keyword overrides, not both")
        if config is None:
            try:
                config = HasherConfig(**overrides)
            except ValidationError as exc:
                raise ContractViolation(str(exc)) from exc
        self.config = config

    @classmethod
    def default(cls) -> "PerceptualHasher":
        return cls(HasherConfig())

    def hash_from_pixels(self, buffer, width: int, height: int) -> ImageHash:
        """Hash a row-major grayscale buffer of ``width * height`` samples."""
        cfg = self.config
        if width < cfg.width or height < cfg.height:
            raise ContractViolation(
                f"{width}x{height} samples cannot yield a {cfg.width}x{cfg.height} hash"
            )
        samples = build_sample_matrix(buffer, width, height)
        coefficients = dct2_2d(samples)
        block = low_frequencies(coefficients, cfg.width, cfg.height)
        return ImageHash(threshold(block))

    def hash_from_image(self, im: Image.Image) -> ImageHash:
        cfg = self.config
        buf = intensity_buffer(im, cfg.sample_width, cfg.sample_height)
        return self.hash_from_pixels(buf, cfg.sample_width, cfg.sample_height)

    def hash_from_source(self, path: PathLike) -> ImageHash:
        """Decode ``path`` and hash it.

        Raises SourceUnavailable or UnsupportedOrCorruptImage when Pillow
        cannot produce pixels. Nothing is retried.
        """
        with open_image(path) as im:
            h = self.hash_from_image(im)
        logger.debug("image_hashed", path=str(path), hash=h.to_hex())
        return h

    def __repr__(self) -> str:
        cfg = self.config
        return f"PerceptualHasher(width={cfg.width}, height={cfg.height}, factor={cfg.factor})"
