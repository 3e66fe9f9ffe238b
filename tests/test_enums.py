"""Tests for enumeration classes."""

import numpy as np
import pytest

from hdf5stack.enums import AxisKind, ElementKind
from hdf5stack.exceptions import UnsupportedElementTypeError


def test_axis_kind_values():
    assert [kind.value for kind in AxisKind] == ["x", "y", "c", "z", "t"]
    assert AxisKind("c") is AxisKind.CHANNEL


def test_element_kind_has_five_members():
    assert len(ElementKind) == 5


@pytest.mark.parametrize(
    "kind, bits",
    [
        (ElementKind.UINT8, 8),
        (ElementKind.ARGB32, 8),
        (ElementKind.FLOAT32, 32),
        (ElementKind.UINT16, 16),
        (ElementKind.UINT32, 32),
    ],
)
def test_bit_depth(kind, bits):
    assert kind.bit_depth == bits


def test_argb_is_stored_as_packed_uint32():
    assert ElementKind.ARGB32.dtype == np.dtype(np.uint32)


@pytest.mark.parametrize(
    "dtype, kind",
    [
        (np.uint8, ElementKind.UINT8),
        ("<u2", ElementKind.UINT16),
        (">u2", ElementKind.UINT16),
        (np.uint32, ElementKind.UINT32),
        (np.float32, ElementKind.FLOAT32),
    ],
)
def test_from_dtype(dtype, kind):
    assert ElementKind.from_dtype(dtype) is kind


@pytest.mark.parametrize("dtype", [np.int16, np.float64, np.bool_, np.complex64])
def test_from_dtype_unsupported(dtype):
    with pytest.raises(UnsupportedElementTypeError, match="Unsupported element type"):
        ElementKind.from_dtype(dtype)
