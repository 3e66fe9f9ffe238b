"""Remapping between on-disk flat buffers and the canonical plane layout.

A flat buffer holds the elements of a dataset in row-major order of its axis
order string: the last axis varies fastest. The stride of an axis is therefore
the product of the extents of all axes listed after it. The canonical layout
is a ``(T, Z, C, Y, X)`` array, i.e. one contiguous Y-major, X-minor plane per
(channel, z, time) triple.

Both directions are a single strided copy: a view with the canonical shape is
laid over the flat buffer using the per-axis strides, and the data is copied
into or out of it. No index arrays are built, so the extra memory is exactly
the destination buffer.
"""

from __future__ import annotations

from typing import Dict

import numpy as np
from numpy.lib.stride_tricks import as_strided

from .axes import CANONICAL_ORDER, Dimensions, axis_kinds, check_order_covers
from .enums import AxisKind
from .exceptions import ShapeMismatchError
from .logging import get_logger

logger = get_logger(__name__)


def axis_strides(dims: Dimensions, axis_order: str) -> Dict[AxisKind, int]:
    """Element strides of every axis in a flat buffer laid out in ``axis_order``.

    Axes absent from the order have extent 1 and get stride 0.

    Examples:
        >>> strides = axis_strides(Dimensions(x=4, y=5, c=3, z=6, t=7), "tzyxc")
        >>> strides[AxisKind.CHANNEL], strides[AxisKind.X], strides[AxisKind.TIME]
        (1, 3, 360)
    """
    strides = {kind: 0 for kind in AxisKind}
    stride = 1
    for kind in reversed(axis_kinds(axis_order)):
        strides[kind] = stride
        stride *= dims.extent(kind)
    return strides


def flat_offset(
    strides: Dict[AxisKind, int], x: int, y: int, c: int = 0, z: int = 0, t: int = 0
) -> int:
    """Offset of pixel (x, y, c, z, t) in a flat buffer with the given strides."""
    return (
        x * strides[AxisKind.X]
        + y * strides[AxisKind.Y]
        + c * strides[AxisKind.CHANNEL]
        + z * strides[AxisKind.Z]
        + t * strides[AxisKind.TIME]
    )


def _canonical_view(flat: np.ndarray, dims: Dimensions, axis_order: str, writeable):
    strides = axis_strides(dims, axis_order)
    byte_strides = tuple(strides[kind] * flat.itemsize for kind in CANONICAL_ORDER)
    return as_strided(
        flat, shape=dims.canonical_shape, strides=byte_strides, writeable=writeable
    )


def _check_size(n_elements: int, dims: Dimensions, what: str) -> None:
    if n_elements != dims.size:
        raise ShapeMismatchError(
            f"{what} holds {n_elements} elements but dimensions {dims} "
            f"require {dims.size}"
        )


def scatter(source, dims: Dimensions, axis_order: str) -> np.ndarray:
    """Rearrange a flat buffer in ``axis_order`` into canonical planes.

    Args:
        source: Flat (or any C-ordered) array in on-disk axis order
        dims: Extents of the five axes
        axis_order: Axis order of ``source``, slowest-varying first

    Returns:
        New C-contiguous array of shape ``(T, Z, C, Y, X)``

    Raises:
        ShapeMismatchError: if ``source`` does not hold ``dims.size`` elements
    """
    order = check_order_covers(dims, axis_order)
    flat = np.ascontiguousarray(source).reshape(-1)
    _check_size(flat.size, dims, "Source buffer")
    logger.debug("Scattering %d elements from '%s' order into %s", flat.size, order, dims)

    view = _canonical_view(flat, dims, order, writeable=False)
    return np.array(view, order="C", copy=True)


def gather(planes, dims: Dimensions, axis_order: str) -> np.ndarray:
    """Inverse of :func:`scatter`: flatten canonical planes into ``axis_order``.

    Args:
        planes: Array of shape ``(T, Z, C, Y, X)`` (or anything with the same
            number of elements in that order)
        dims: Extents of the five axes
        axis_order: Axis order of the output buffer, slowest-varying first

    Returns:
        New 1-D array with the dtype of ``planes``
    """
    order = check_order_covers(dims, axis_order)
    planes = np.asarray(planes)
    _check_size(planes.size, dims, "Plane set")
    planes = planes.reshape(dims.canonical_shape)
    logger.debug("Gathering %s into '%s' order", dims, order)

    flat = np.empty(dims.size, dtype=planes.dtype)
    view = _canonical_view(flat, dims, order, writeable=True)
    view[...] = planes
    return flat
