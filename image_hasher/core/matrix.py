"""Sample matrix construction, low-frequency selection and median thresholding."""

from __future__ import annotations

import numpy as np

from .errors import ContractViolation


def build_sample_matrix(buffer, width: int, height: int) -> np.ndarray:
    """Reshape a flat row-major intensity buffer into a (height, width) float matrix.

    Intensities are widened to float64 without scaling. The buffer must hold
    exactly ``width * height`` samples; it is never truncated or padded.
    """
    if width <= 0 or height <= 0:
        raise ContractViolation(f"matrix dimensions must be positive, got {width}x{height}")
    if isinstance(buffer, (bytes, bytearray)):
        flat = np.frombuffer(buffer, dtype=np.uint8)
    else:
        flat = np.asarray(buffer)
    flat = flat.reshape(-1)
    if flat.size != width * height:
        raise ContractViolation(
            f"buffer holds {flat.size} samples, expected {width}x{height}={width * height}"
        )
    return flat.astype(np.float64).reshape(height, width)


def low_frequencies(coefficients: np.ndarray, width: int, height: int) -> np.ndarray:
    """Top-left ``height`` x ``width`` block of a coefficient matrix."""
    rows, cols = coefficients.shape
    if not (0 < height <= rows and 0 < width <= cols):
        raise ContractViolation(
            f"cannot take a {height}x{width} block from a {rows}x{cols} matrix"
        )
    return coefficients[:height, :width]


def median(values) -> float:
    """Median; the mean of the two middle values for an even count."""
    v = np.sort(np.asarray(values, dtype=np.float64).reshape(-1))
    n = v.size
    if n == 0:
        raise ContractViolation("median of an empty sequence")
    mid = n // 2
    if n % 2:
        return float(v[mid])
    return float((v[mid - 1] + v[mid]) / 2.0)


def threshold(block: np.ndarray) -> np.ndarray:
    """Boolean matrix: True where a coefficient is strictly above the block median."""
    med = median(block)
    return np.asarray(block) > med
