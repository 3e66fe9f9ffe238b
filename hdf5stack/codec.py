"""Reading and writing canonical images as HDF5 datasets.

The read path loads a whole dataset into memory, maps its axes to
(X, Y, C, Z, T) with an axis order string and scatters it into
``(T, Z, C, Y, X)`` planes. The write path gathers planes back into a flat
buffer in the requested order and stores it as one gzip-compressed, chunked
dataset tagged with the order it was written in.

Key Functions:
    read_dataset: Load a dataset into a CanonicalImage
    write_dataset: Store a CanonicalImage as a dataset
    read_plane / iter_planes: Hyperslab reads of single (Y, X) planes
    list_datasets: Enumerate datasets of an HDF5 file
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

import h5py
import numpy as np
from attrs import define

from . import h5io
from .axes import (
    DEFAULT_AXIS_ORDER,
    Dimensions,
    axis_kinds,
    check_order_covers,
    parse_axis_order,
)
from .enums import AxisKind, ElementKind
from .exceptions import (
    InvalidAxisOrderError,
    InvalidCompressionLevelError,
    ShapeMismatchError,
)
from .image import CanonicalImage, compute_display_range
from .logging import get_logger
from .reshape import gather, scatter

logger = get_logger(__name__)

DEFAULT_DATASET_NAME = "exported_data"
DEFAULT_COMPRESSION_LEVEL = 0
AXIS_ORDER_ATTRIBUTE = "axis_order"
MAX_CHUNK_BYTES = 4 * 1024 * 1024
MAX_CHUNK_Z = 16


@define(frozen=True)
class DatasetInfo:
    """Summary of one dataset found in an HDF5 file."""

    name: str
    shape: Tuple[int, ...]
    dtype: np.dtype
    axis_order: Optional[str] = None


def list_datasets(path) -> List[DatasetInfo]:
    """List every dataset in the file at ``path``, in file order."""
    found: List[DatasetInfo] = []

    def visit(name, node):
        if isinstance(node, h5py.Dataset):
            found.append(
                DatasetInfo(
                    name=name,
                    shape=tuple(node.shape),
                    dtype=node.dtype,
                    axis_order=h5io.get_attribute(node, AXIS_ORDER_ATTRIBUTE),
                )
            )

    with h5io.open_file(path, "r") as f:
        f.visititems(visit)
    return found


def _resolve_axis_order(dataset: h5py.Dataset, axis_order: Optional[str]) -> str:
    if axis_order is not None:
        return axis_order
    recorded = h5io.get_attribute(dataset, AXIS_ORDER_ATTRIBUTE)
    if recorded is None:
        raise InvalidAxisOrderError(
            f"No axis order given and dataset '{dataset.name}' has no "
            f"'{AXIS_ORDER_ATTRIBUTE}' attribute"
        )
    logger.debug("Using recorded axis order '%s'", recorded)
    return str(recorded)


def read_dataset(
    path,
    dataset_name: str = DEFAULT_DATASET_NAME,
    axis_order: Optional[str] = None,
) -> CanonicalImage:
    """
    Load an HDF5 dataset into a CanonicalImage.

    The whole dataset is read into memory at once, so memory use is about
    twice the dataset size. Use :func:`iter_planes` for plane-by-plane access.

    Args:
        path: Path to the HDF5 file
        dataset_name: Path of the dataset inside the file
        axis_order: Axis order of the dataset, e.g. ``"tzyxc"``. If None, the
            order recorded by :func:`write_dataset` is used.

    Returns:
        CanonicalImage with bit depth from the element type and display range
        ``(0, max(1, largest value))``

    Raises:
        DatasetIOError: if the file or dataset cannot be opened or read
        InvalidAxisOrderError: if the axis order is malformed, does not match
            the dataset rank, or is neither given nor recorded
        MissingRequiredAxisError: if the axis order lacks x or y
        UnsupportedElementTypeError: if the dataset type is not uint8, uint16,
            uint32 or float32
    """
    logger.info("Loading dataset '%s' from %s", dataset_name, path)
    with h5io.open_file(path, "r") as f:
        dataset = h5io.get_dataset(f, dataset_name)
        shape = tuple(dataset.shape)
        order = _resolve_axis_order(dataset, axis_order)
        dims = parse_axis_order(shape, order)
        element_kind = ElementKind.from_dtype(dataset.dtype)
        logger.debug(
            "Dataset shape %s, order '%s', %s -> %s", shape, order, element_kind, dims
        )
        flat = h5io.read_all(dataset)

    flat = np.asarray(flat).astype(element_kind.dtype, copy=False).reshape(-1)
    planes = scatter(flat, dims, order)
    low, high = compute_display_range(flat)
    logger.debug("Display range (%s, %s)", low, high)

    return CanonicalImage(
        planes,
        element_kind=element_kind,
        bit_depth=element_kind.bit_depth,
        display_range_low=low,
        display_range_high=high,
    )


def _plane_selection(order: str, c: int, z: int, t: int) -> Tuple[tuple, bool]:
    index = {"c": c, "z": z, "t": t}
    selection = tuple(
        slice(None) if label in "xy" else index[label] for label in order
    )
    # the two remaining axes come back in file order; (X, Y) needs a transpose
    transpose = order.index("x") < order.index("y")
    return selection, transpose


def read_plane(
    path,
    dataset_name: str = DEFAULT_DATASET_NAME,
    axis_order: Optional[str] = None,
    c: int = 0,
    z: int = 0,
    t: int = 0,
) -> np.ndarray:
    """Read the single (Y, X) plane (c, z, t) with a hyperslab selection.

    Raises:
        IndexError: if (c, z, t) is out of range
    """
    with h5io.open_file(path, "r") as f:
        dataset = h5io.get_dataset(f, dataset_name)
        order = _resolve_axis_order(dataset, axis_order)
        dims = parse_axis_order(dataset.shape, order)
        element_kind = ElementKind.from_dtype(dataset.dtype)
        for label, value in (("c", c), ("z", z), ("t", t)):
            extent = dims.extent(AxisKind(label))
            if not 0 <= value < extent:
                raise IndexError(
                    f"{label}={value} is out of range for extent {extent}"
                )
        order = order.lower()
        selection, transpose = _plane_selection(order, c, z, t)
        plane = h5io.read_slab(dataset, selection)

    plane = plane.T if transpose else plane
    return np.ascontiguousarray(plane, dtype=element_kind.dtype)


def iter_planes(
    path,
    dataset_name: str = DEFAULT_DATASET_NAME,
    axis_order: Optional[str] = None,
) -> Iterator[Tuple[Tuple[int, int, int], np.ndarray]]:
    """Yield ``((c, z, t), plane)`` for every plane, in hyperstack order.

    Only one plane is held in memory at a time. The file stays open until
    the iterator is exhausted or closed.
    """
    with h5io.open_file(path, "r") as f:
        dataset = h5io.get_dataset(f, dataset_name)
        order = _resolve_axis_order(dataset, axis_order)
        dims = parse_axis_order(dataset.shape, order)
        element_kind = ElementKind.from_dtype(dataset.dtype)
        order = order.lower()
        for t in range(dims.t):
            for z in range(dims.z):
                for c in range(dims.c):
                    selection, transpose = _plane_selection(order, c, z, t)
                    plane = h5io.read_slab(dataset, selection)
                    plane = plane.T if transpose else plane
                    yield (c, z, t), np.ascontiguousarray(
                        plane, dtype=element_kind.dtype
                    )


def expand_argb(planes: np.ndarray) -> np.ndarray:
    """
    Expand packed ``0xAARRGGBB`` planes into 4 uint8 channels per channel.

    The planes of each source channel become (A, R, G, B) with alpha set to
    255 regardless of the input. A ``(T, Z, C, Y, X)`` input yields
    ``(T, Z, 4 * C, Y, X)``.
    """
    packed = np.asarray(planes).astype(np.uint32, copy=False)
    t, z, c, y, x = packed.shape
    expanded = np.empty((t, z, c, 4, y, x), dtype=np.uint8)
    expanded[:, :, :, 0] = 255
    expanded[:, :, :, 1] = (packed >> 16) & 0xFF
    expanded[:, :, :, 2] = (packed >> 8) & 0xFF
    expanded[:, :, :, 3] = packed & 0xFF
    return expanded.reshape(t, z, 4 * c, y, x)


def validate_compression_level(compression_level) -> int:
    if (
        isinstance(compression_level, bool)
        or not isinstance(compression_level, (int, np.integer))
        or not 0 <= compression_level <= 9
    ):
        raise InvalidCompressionLevelError(
            f"Compression level must be an integer in [0, 9], got {compression_level!r}"
        )
    return int(compression_level)


def chunk_shape(
    dims: Dimensions, axis_order: str, itemsize: int, max_bytes: int = MAX_CHUNK_BYTES
) -> Tuple[int, ...]:
    """Chunk shape for a dataset of ``dims`` stored in ``axis_order``.

    Whole (Y, X) planes, one channel and one frame per chunk, and up to
    ``MAX_CHUNK_Z`` depth levels as long as the chunk stays under
    ``max_bytes``. Planes larger than ``max_bytes`` are split along Y, then X.
    Every chunk extent is between 1 and the dataset extent.
    """
    y, x = dims.y, dims.x
    while y * x * itemsize > max_bytes and (y > 1 or x > 1):
        if y >= x:
            y = (y + 1) // 2
        else:
            x = (x + 1) // 2
    plane_bytes = max(1, y * x * itemsize)
    z = max(1, min(dims.z, MAX_CHUNK_Z, max_bytes // plane_bytes))

    chunk: Dict[AxisKind, int] = {
        AxisKind.X: x,
        AxisKind.Y: y,
        AxisKind.CHANNEL: 1,
        AxisKind.Z: z,
        AxisKind.TIME: 1,
    }
    return tuple(chunk[kind] for kind in axis_kinds(axis_order))


def write_dataset(
    image: CanonicalImage,
    path,
    dataset_name: str = DEFAULT_DATASET_NAME,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
    element_kind: Optional[ElementKind] = None,
    axis_order: str = DEFAULT_AXIS_ORDER,
    mode: str = "w",
) -> str:
    """
    Store a CanonicalImage as a chunked, gzip-compressed HDF5 dataset.

    Args:
        image: Image to store
        path: Output HDF5 file
        dataset_name: Path of the dataset inside the file
        compression_level: gzip level, 0 to 9
        element_kind: Pixel type to store as. Defaults to
            ``image.element_kind``. ARGB32 expands every channel into four
            uint8 channels (A, R, G, B) with A set to 255; other kinds cast the
            pixels to that type.
        axis_order: Axis order of the stored dataset; every axis of extent
            greater than 1 must appear
        mode: ``"w"`` to replace the file, ``"a"`` to add the dataset to an
            existing file (fails if the dataset already exists)

    Returns:
        str: Path to the written file

    Raises:
        InvalidCompressionLevelError: if the level is outside 0..9
        InvalidAxisOrderError: if the axis order is malformed or omits an axis
        ShapeMismatchError: if the image is empty
        DatasetIOError: on any storage failure
    """
    level = validate_compression_level(compression_level)
    if mode not in ("w", "a"):
        raise ValueError(f"mode must be 'w' or 'a', got {mode!r}")

    kind = image.element_kind if element_kind is None else element_kind
    if kind is ElementKind.ARGB32:
        planes = expand_argb(image.planes)
        stored_kind = ElementKind.UINT8
    else:
        planes = image.planes.astype(kind.dtype, copy=False)
        stored_kind = kind

    dims = Dimensions.from_canonical_shape(planes.shape)
    if dims.size == 0:
        raise ShapeMismatchError(f"Cannot write an empty image with dimensions {dims}")
    order = check_order_covers(dims, axis_order)

    flat = gather(planes, dims, order)
    shape = dims.shape_for(order)
    chunks = chunk_shape(dims, order, stored_kind.dtype.itemsize)
    logger.info(
        "Writing %s image %s to '%s' in %s as '%s'",
        kind.value,
        dims,
        dataset_name,
        path,
        order,
    )
    logger.debug("Dataset shape %s, chunks %s, gzip level %d", shape, chunks, level)

    with h5io.open_file(path, mode) as f:
        dataset = h5io.create_dataset(
            f, dataset_name, shape, stored_kind.dtype, chunks, level
        )
        h5io.write_all(dataset, flat.reshape(shape))
        h5io.set_attribute(dataset, AXIS_ORDER_ATTRIBUTE, order)

    return str(path)
