"""ImageJ TIFF hyperstacks as the viewer-side counterpart of HDF5 datasets.

tifffile labels dimensions with upper-case letters; ``T``, ``Z``, ``C``,
``Y`` and ``X`` map onto the same semantic axes and ``S`` (RGB samples) is
treated as channels. ImageJ hyperstacks are always written as ``TZCYX``.
"""

from __future__ import annotations

import tifffile

from .enums import ElementKind
from .exceptions import InvalidAxisOrderError, UnsupportedElementTypeError
from .image import CanonicalImage
from .logging import get_logger

logger = get_logger(__name__)

_TIFF_AXES = {"T": "t", "Z": "z", "C": "c", "S": "c", "Y": "y", "X": "x"}

IMAGEJ_KINDS = (ElementKind.UINT8, ElementKind.UINT16, ElementKind.FLOAT32)


def tiff_axes_to_axis_order(axes: str) -> str:
    """Translate tifffile axes (e.g. ``"TZCYX"``, ``"YXS"``) to an axis order."""
    try:
        return "".join(_TIFF_AXES[a] for a in axes.upper())
    except KeyError as err:
        raise InvalidAxisOrderError(
            f"TIFF axes '{axes}' contain unsupported axis {err.args[0]!r}"
        ) from None


def read_tiff(path) -> CanonicalImage:
    """Read the first series of a TIFF file into a CanonicalImage.

    The display range is taken from ImageJ ``min``/``max`` metadata when
    present, otherwise computed from the pixels.
    """
    with tifffile.TiffFile(str(path)) as tif:
        series = tif.series[0]
        axes = series.axes
        data = series.asarray()
        imagej_metadata = tif.imagej_metadata or {}

    axis_order = tiff_axes_to_axis_order(axes)
    logger.debug("TIFF %s has axes '%s' and shape %s", path, axes, data.shape)
    image = CanonicalImage.from_ndarray(data, axis_order)
    if "min" in imagej_metadata and "max" in imagej_metadata:
        image.display_range_low = imagej_metadata["min"]
        image.display_range_high = imagej_metadata["max"]
    return image


def write_tiff(image: CanonicalImage, path) -> str:
    """Save a CanonicalImage as an ImageJ ``TZCYX`` hyperstack.

    Raises:
        UnsupportedElementTypeError: for UINT32 and ARGB32 images, which
            ImageJ TIFF cannot hold
    """
    if image.element_kind not in IMAGEJ_KINDS:
        raise UnsupportedElementTypeError(
            f"ImageJ TIFF cannot store {image.element_kind.value} pixels"
        )
    logger.info("Writing %s hyperstack %s to %s", image.element_kind.value, image.dims, path)
    tifffile.imwrite(
        str(path),
        image.planes,
        imagej=True,
        photometric="minisblack",
        metadata={
            "axes": "TZCYX",
            "min": image.display_range_low,
            "max": image.display_range_high,
        },
    )
    return str(path)
