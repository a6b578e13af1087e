"""ImageHash: the bit matrix produced by a hasher."""

from __future__ import annotations

import string

import numpy as np

from .errors import ContractViolation


class ImageHash:
    """Immutable ``height`` x ``width`` boolean matrix.

    Bits are ordered row-major. ``to_int`` and ``to_hex`` read them in that
    order with the first bit as the most significant, which matches the string
    form used by the ``imagehash`` package.
    """

    __slots__ = ("_bits",)

    def __init__(self, bits):
        arr = np.array(bits, dtype=bool)
        if arr.ndim != 2 or arr.size == 0:
            raise ContractViolation(f"hash must be a non-empty 2D bit matrix, got shape {arr.shape}")
        arr.setflags(write=False)
        self._bits = arr

    @property
    def matrix(self) -> np.ndarray:
        return self._bits

    @property
    def shape(self):
        return self._bits.shape

    @property
    def width(self) -> int:
        return self._bits.shape[1]

    @property
    def height(self) -> int:
        return self._bits.shape[0]

    def rows(self):
        return [[bool(b) for b in row] for row in self._bits]

    def to_int(self) -> int:
        val = 0
        for b in self._bits.ravel():
            val = (val << 1) | int(b)
        return val

    def to_hex(self) -> str:
        width = -(-self._bits.size // 4)
        return f"{self.to_int():0{width}x}"

    @classmethod
    def from_hex(cls, text: str, width: int = 8, height: int = 8) -> "ImageHash":
        n = width * height
        if width <= 0 or height <= 0:
            raise ContractViolation(f"hash dimensions must be positive, got {width}x{height}")
        if not text or any(c not in string.hexdigits for c in text):
            raise ContractViolation(f"not a hexadecimal hash: {text!r}")
        val = int(text, 16)
        if len(text) != -(-n // 4) or val >> n:
            raise ContractViolation(f"{text!r} does not encode a {height}x{width} hash")
        bits = [(val >> (n - 1 - i)) & 1 for i in range(n)]
        return cls(np.array(bits, dtype=bool).reshape(height, width))

    def hamming(self, other: "ImageHash") -> int:
        if self.shape != other.shape:
            raise ContractViolation(f"cannot compare hashes of shape {self.shape} and {other.shape}")
        return int(np.count_nonzero(self._bits != other._bits))

    def __sub__(self, other: "ImageHash") -> int:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self.hamming(other)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ImageHash):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._bits, other._bits))

    def __hash__(self) -> int:
        return hash((self.shape, self._bits.tobytes()))

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"ImageHash({self.height}x{self.width}, {self.to_hex()})"
