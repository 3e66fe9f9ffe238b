"""Axis order parsing.

An axis order string names the semantic axis of every dimension of a dataset,
slowest-varying first, using one character per axis from ``x``, ``y``, ``c``,
``z`` and ``t`` (case-insensitive). ``"tzyxc"`` therefore describes a dataset
of shape ``(T, Z, Y, X, C)``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from attrs import define

from .enums import AxisKind
from .exceptions import InvalidAxisOrderError, MissingRequiredAxisError

# Host hyperstack order: one (Y, X) plane per (c, z, t), channel fastest.
CANONICAL_ORDER: Tuple[AxisKind, ...] = (
    AxisKind.TIME,
    AxisKind.Z,
    AxisKind.CHANNEL,
    AxisKind.Y,
    AxisKind.X,
)

DEFAULT_AXIS_ORDER = "tzyxc"


@define(frozen=True)
class Dimensions:
    """Extents of the five semantic axes.

    Axes that are missing from an axis order string have extent 1.
    """

    x: int
    y: int
    c: int = 1
    z: int = 1
    t: int = 1

    def extent(self, kind: AxisKind) -> int:
        return getattr(self, kind.value)

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self.x * self.y * self.c * self.z * self.t

    @property
    def canonical_shape(self) -> Tuple[int, int, int, int, int]:
        """Shape of the in-memory plane set, ``(T, Z, C, Y, X)``."""
        return (self.t, self.z, self.c, self.y, self.x)

    @property
    def num_planes(self) -> int:
        return self.c * self.z * self.t

    def shape_for(self, axis_order: str) -> Tuple[int, ...]:
        """Dataset shape when laid out in ``axis_order``."""
        return tuple(self.extent(kind) for kind in axis_kinds(axis_order))

    @classmethod
    def from_canonical_shape(cls, shape: Sequence[int]) -> "Dimensions":
        if len(shape) != 5:
            raise InvalidAxisOrderError(
                f"Expected a 5D (T, Z, C, Y, X) shape, got {tuple(shape)}"
            )
        t, z, c, y, x = (int(n) for n in shape)
        return cls(x=x, y=y, c=c, z=z, t=t)


def normalize_axis_order(axis_order: str) -> str:
    """Validate an axis order string and return it in lower case.

    Raises:
        InvalidAxisOrderError: if the string is empty, contains a character
            other than x, y, c, z, t, or repeats an axis
        MissingRequiredAxisError: if x or y is absent
    """
    if not isinstance(axis_order, str) or not axis_order:
        raise InvalidAxisOrderError(
            f"Axis order must be a non-empty string, got {axis_order!r}"
        )
    order = axis_order.lower()
    valid = {kind.value for kind in AxisKind}
    unknown = sorted(set(order) - valid)
    if unknown:
        raise InvalidAxisOrderError(
            f"Axis order '{axis_order}' contains unrecognized axes "
            f"{', '.join(repr(u) for u in unknown)}; allowed are x, y, c, z, t"
        )
    repeated = sorted({label for label in order if order.count(label) > 1})
    if repeated:
        raise InvalidAxisOrderError(
            f"Axis order '{axis_order}' repeats {', '.join(repr(r) for r in repeated)}"
        )
    for required in ("x", "y"):
        if required not in order:
            raise MissingRequiredAxisError(
                f"Axis order '{axis_order}' must contain '{required}'"
            )
    return order


def axis_kinds(axis_order: str) -> Tuple[AxisKind, ...]:
    return tuple(AxisKind(label) for label in normalize_axis_order(axis_order))


def parse_axis_order(shape: Sequence[int], axis_order: str) -> Dimensions:
    """Bind each dimension of ``shape`` to the axis at the same position.

    Args:
        shape: Dataset shape, slowest-varying dimension first
        axis_order: One axis character per dimension, e.g. ``"tzyxc"``

    Returns:
        Dimensions with channel, z and time defaulting to 1 when absent

    Examples:
        >>> parse_axis_order((7, 6, 5, 4, 3), "tzyxc")
        Dimensions(x=4, y=5, c=3, z=6, t=7)
    """
    if isinstance(axis_order, str) and len(axis_order) != len(shape):
        raise InvalidAxisOrderError(
            f"Axis order '{axis_order}' has {len(axis_order)} axes "
            f"but the data has {len(shape)} dimensions {tuple(shape)}"
        )
    kinds = axis_kinds(axis_order)
    extents = {kind.value: int(n) for kind, n in zip(kinds, shape)}
    return Dimensions(**extents)


def check_order_covers(dims: Dimensions, axis_order: str) -> str:
    """Ensure every axis with extent > 1 appears in ``axis_order``.

    Returns the normalized order string.
    """
    order = normalize_axis_order(axis_order)
    for kind in AxisKind:
        if kind.value not in order and dims.extent(kind) != 1:
            raise InvalidAxisOrderError(
                f"Axis order '{axis_order}' omits '{kind.value}' "
                f"which has extent {dims.extent(kind)}"
            )
    return order
