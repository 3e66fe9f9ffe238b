"""Enumeration classes for axis labels and pixel element types."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .exceptions import UnsupportedElementTypeError


class AxisKind(Enum):
    """Semantic axis labels accepted in axis order strings.

    Attributes:
        X: Image width
        Y: Image height
        CHANNEL: Channel (``c``)
        Z: Depth level
        TIME: Frame (``t``)
    """

    X = "x"
    Y = "y"
    CHANNEL = "c"
    Z = "z"
    TIME = "t"


class ElementKind(Enum):
    """Pixel element types that can be read from or written to a dataset.

    ARGB32 is an in-memory kind only: pixels are packed ``0xAARRGGBB`` words
    and are expanded to four uint8 channels when written.

    Attributes:
        UINT8: 8-bit unsigned integer
        UINT16: 16-bit unsigned integer
        UINT32: 32-bit unsigned integer
        FLOAT32: 32-bit IEEE float
        ARGB32: packed 4x8-bit colour
    """

    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    FLOAT32 = "float32"
    ARGB32 = "argb32"

    @property
    def dtype(self) -> np.dtype:
        """Native numpy dtype holding one element of this kind."""
        if self is ElementKind.ARGB32:
            return np.dtype(np.uint32)
        return np.dtype(self.value)

    @property
    def bit_depth(self) -> int:
        """Valid bits per stored sample (ARGB32 is stored as 8-bit channels)."""
        return _BIT_DEPTHS[self]

    @classmethod
    def from_dtype(cls, dtype) -> "ElementKind":
        """Map a numpy/HDF5 dtype to its grayscale element kind.

        Byte order is ignored, so big-endian datasets map to the same kind.
        ARGB32 is never returned since packed colour is indistinguishable from
        UINT32 on disk.

        Raises:
            UnsupportedElementTypeError: for any other dtype
        """
        dtype = np.dtype(dtype)
        key = (dtype.kind, dtype.itemsize)
        try:
            return _DTYPE_KINDS[key]
        except KeyError:
            raise UnsupportedElementTypeError(
                f"Unsupported element type {dtype}. "
                "Supported types are uint8, uint16, uint32 and float32"
            ) from None


_BIT_DEPTHS = {
    ElementKind.UINT8: 8,
    ElementKind.UINT16: 16,
    ElementKind.UINT32: 32,
    ElementKind.FLOAT32: 32,
    ElementKind.ARGB32: 8,
}

_DTYPE_KINDS = {
    ("u", 1): ElementKind.UINT8,
    ("u", 2): ElementKind.UINT16,
    ("u", 4): ElementKind.UINT32,
    ("f", 4): ElementKind.FLOAT32,
}
