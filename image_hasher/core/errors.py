"""Error taxonomy for the hashing pipeline."""

from typing import Optional


class ImageHasherError(Exception):
    """Base class for everything raised by image_hasher."""


class ImageSourceError(ImageHasherError):
    """The image collaborator could not produce pixel data."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class SourceUnavailable(ImageSourceError):
    """Missing file, permission denied or another I/O failure."""


class UnsupportedOrCorruptImage(ImageSourceError):
    """Bytes were read but could not be decoded into pixels."""


class ContractViolation(ImageHasherError, ValueError):
    """Programmer error: bad dimensions or a mismatched buffer."""
