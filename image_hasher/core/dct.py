"""Unnormalized type-II discrete cosine transform.

    y[k] = sum_{n=0}^{N-1} x[n] * cos(pi / N * (n + 0.5) * k)

scipy's unnormalized DCT-II is exactly twice this sum. Halving is exact in
binary floating point, so the result only differs from scipy by the exponent.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
from scipy.fft import dct as _dct

from .errors import ContractViolation


class Axis(Enum):
    COLUMN = 0
    ROW = 1


def dct2(samples) -> np.ndarray:
    """1D DCT-II of a sequence of real samples."""
    x = np.asarray(samples, dtype=np.float64)
    if x.ndim != 1 or x.size == 0:
        raise ContractViolation(f"expected a non-empty 1D sequence, got shape {x.shape}")
    return _dct(x, type=2, norm=None) * 0.5


def dct2_over_matrix(matrix: np.ndarray, axis: Axis) -> np.ndarray:
    """Apply ``dct2`` to every column (Axis.COLUMN) or every row (Axis.ROW)."""
    m = np.asarray(matrix, dtype=np.float64)
    if m.ndim != 2 or m.size == 0:
        raise ContractViolation(f"expected a non-empty 2D matrix, got shape {m.shape}")
    return np.ascontiguousarray(_dct(m, type=2, norm=None, axis=axis.value) * 0.5)


def dct2_2d(matrix: np.ndarray) -> np.ndarray:
    # columns first, then rows; the order is part of the hash definition
    return dct2_over_matrix(dct2_over_matrix(matrix, Axis.COLUMN), Axis.ROW)
