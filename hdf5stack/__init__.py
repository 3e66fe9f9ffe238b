from .axes import DEFAULT_AXIS_ORDER, Dimensions, normalize_axis_order, parse_axis_order
from .codec import (
    DatasetInfo,
    expand_argb,
    iter_planes,
    list_datasets,
    read_dataset,
    read_plane,
    write_dataset,
)
from .enums import AxisKind, ElementKind
from .exceptions import (
    DatasetIOError,
    Hdf5StackError,
    InvalidAxisOrderError,
    InvalidCompressionLevelError,
    MissingRequiredAxisError,
    ShapeMismatchError,
    UnsupportedElementTypeError,
)
from .image import CanonicalImage, compute_display_range
from .logging import configure_logging, get_logger
from .reshape import axis_strides, flat_offset, gather, scatter

__all__ = [
    "AxisKind",
    "CanonicalImage",
    "DatasetIOError",
    "DatasetInfo",
    "DEFAULT_AXIS_ORDER",
    "Dimensions",
    "ElementKind",
    "Hdf5StackError",
    "InvalidAxisOrderError",
    "InvalidCompressionLevelError",
    "MissingRequiredAxisError",
    "ShapeMismatchError",
    "UnsupportedElementTypeError",
    "axis_strides",
    "compute_display_range",
    "configure_logging",
    "expand_argb",
    "flat_offset",
    "gather",
    "get_logger",
    "iter_planes",
    "list_datasets",
    "normalize_axis_order",
    "parse_axis_order",
    "read_dataset",
    "read_plane",
    "scatter",
    "write_dataset",
]
