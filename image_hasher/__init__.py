"""Perceptual image hashing: DCT of an oversampled grayscale image,
thresholded at the median of its low-frequency block."""

from .core.config import HasherConfig, Settings
from .core.errors import (
    ContractViolation,
    ImageHasherError,
    ImageSourceError,
    SourceUnavailable,
    UnsupportedOrCorruptImage,
)
from .core.hashes import ImageHash
from .core.phash import ImageHasher, PerceptualHasher

__version__ = "0.1.0"

__all__ = [
    "ContractViolation",
    "HasherConfig",
    "ImageHash",
    "ImageHasher",
    "ImageHasherError",
    "ImageSourceError",
    "PerceptualHasher",
    "Settings",
    "SourceUnavailable",
    "UnsupportedOrCorruptImage",
]
