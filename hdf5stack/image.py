"""In-memory canonical image.

:class:`CanonicalImage` is the hand-off point to a viewer or analysis code:
a ``(T, Z, C, Y, X)`` numpy array of planes plus the metadata a viewer needs
to display it (valid bit depth and display range).
"""

from __future__ import annotations

from typing import Tuple, Union

import dask.array as da
import numpy as np
from attrs import define, field

from .axes import Dimensions, check_order_covers, parse_axis_order
from .enums import ElementKind
from .exceptions import ShapeMismatchError
from .reshape import gather, scatter


def _as_planes(value) -> np.ndarray:
    if hasattr(value, "compute"):
        value = value.compute()
    planes = np.ascontiguousarray(value)
    if planes.ndim != 5:
        raise ShapeMismatchError(
            f"Planes must be a 5D (T, Z, C, Y, X) array, got shape {planes.shape}"
        )
    return planes


def compute_display_range(planes) -> Tuple[float, float]:
    """Display range ``(0, max)`` over all elements, with max floored at 1.

    NaNs are ignored; an empty or all-NaN buffer yields ``(0, 1)``.
    """
    planes = np.asarray(planes)
    if planes.size == 0:
        return 0, 1
    if planes.dtype.kind == "f":
        high = np.nanmax(planes) if not np.isnan(planes).all() else 1
    else:
        high = planes.max()
    return 0, max(1, high.item() if hasattr(high, "item") else high)


@define
class CanonicalImage:
    """
    A stack of 2D planes, one per (channel, z, time) triple.

    Attributes:
        planes (np.ndarray): Pixel data of shape ``(T, Z, C, Y, X)``.
        element_kind (ElementKind): Pixel type. For ARGB32 the planes hold
            packed ``0xAARRGGBB`` uint32 words.
        bit_depth (int): Valid bits per sample.
        display_range_low (float): Lower end of the display window.
        display_range_high (float): Upper end of the display window.
    """

    planes: np.ndarray = field(converter=_as_planes)
    element_kind: ElementKind = field()
    bit_depth: int = field()
    display_range_low: Union[int, float] = 0
    display_range_high: Union[int, float] = 1

    @element_kind.default
    def _default_element_kind(self) -> ElementKind:
        return ElementKind.from_dtype(self.planes.dtype)

    @bit_depth.default
    def _default_bit_depth(self) -> int:
        return self.element_kind.bit_depth

    @property
    def dims(self) -> Dimensions:
        return Dimensions.from_canonical_shape(self.planes.shape)

    @property
    def dim_x(self) -> int:
        return self.planes.shape[4]

    @property
    def dim_y(self) -> int:
        return self.planes.shape[3]

    @property
    def num_channels(self) -> int:
        return self.planes.shape[2]

    @property
    def dim_z(self) -> int:
        return self.planes.shape[1]

    @property
    def num_frames(self) -> int:
        return self.planes.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.planes.dtype

    def get_plane(self, c: int = 0, z: int = 0, t: int = 0) -> np.ndarray:
        """The (Y, X) plane for channel ``c``, depth ``z`` and frame ``t`` (a view)."""
        return self.planes[t, z, c]

    def stack_index(self, c: int = 0, z: int = 0, t: int = 0) -> int:
        """1-based position of plane (c, z, t) in a hyperstack, channel fastest."""
        return 1 + c + z * self.num_channels + t * self.num_channels * self.dim_z

    def with_auto_display_range(self) -> "CanonicalImage":
        """Set the display range to ``(0, max)`` of the pixel data, in place.

        Packed ARGB32 pixels always get the full 8-bit range.
        """
        if self.element_kind is ElementKind.ARGB32:
            self.display_range_low, self.display_range_high = 0, 255
        else:
            self.display_range_low, self.display_range_high = compute_display_range(
                self.planes
            )
        return self

    @classmethod
    def from_ndarray(
        cls,
        data,
        axis_order: str,
        element_kind: ElementKind | None = None,
    ) -> "CanonicalImage":
        """
        Build an image from an axis-labelled numpy or dask array.

        Args:
            data: Array with one dimension per character of ``axis_order``
            axis_order: Axis order of ``data``, e.g. ``"yxc"`` or ``"tzcyx"``
            element_kind: Pixel type; inferred from the dtype when None

        Returns:
            CanonicalImage with the display range computed from the data
        """
        if hasattr(data, "compute"):
            data = data.compute()
        data = np.asarray(data)
        dims = parse_axis_order(data.shape, axis_order)
        planes = scatter(data, dims, axis_order)
        if element_kind is None:
            image = cls(planes)
        else:
            image = cls(planes, element_kind=element_kind)
        return image.with_auto_display_range()

    def to_ndarray(self, axis_order: str = "tzcyx") -> np.ndarray:
        """Return the pixels as a new array laid out in ``axis_order``.

        Axes of extent 1 may be left out of ``axis_order``.
        """
        dims = self.dims
        order = check_order_covers(dims, axis_order)
        return gather(self.planes, dims, order).reshape(dims.shape_for(order))

    def to_dask(self, chunks: Union[str, tuple] | None = None) -> da.Array:
        """Wrap the planes as a dask array, one (Y, X) plane per chunk by default."""
        if chunks is None:
            chunks = (1, 1, 1, self.dim_y, self.dim_x)
        return da.from_array(self.planes, chunks=chunks)
