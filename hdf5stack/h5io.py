"""Thin h5py layer used by the codec.

Every h5py/OS failure is re-raised as :class:`DatasetIOError` with the
original message kept and the original exception chained, so callers only
need to handle one storage error type.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Optional, Sequence

import h5py
import numpy as np

from .exceptions import DatasetIOError

_H5PY_ERRORS = (OSError, KeyError, ValueError, TypeError, RuntimeError)


@contextmanager
def open_file(path, mode: str = "r") -> Iterator[h5py.File]:
    """Open an HDF5 file, translating failures to DatasetIOError."""
    try:
        f = h5py.File(str(path), mode)
    except _H5PY_ERRORS as err:
        raise DatasetIOError(f"Cannot open HDF5 file '{path}': {err}") from err
    try:
        yield f
    finally:
        f.close()


def get_dataset(f: h5py.File, name: str) -> h5py.Dataset:
    try:
        node = f[name]
    except _H5PY_ERRORS as err:
        raise DatasetIOError(
            f"Dataset '{name}' not found in '{f.filename}': {err}"
        ) from err
    if not isinstance(node, h5py.Dataset):
        raise DatasetIOError(f"'{name}' in '{f.filename}' is a group, not a dataset")
    return node


def read_all(dataset: h5py.Dataset) -> np.ndarray:
    """Read the whole dataset in one call."""
    try:
        return dataset[()]
    except _H5PY_ERRORS as err:
        raise DatasetIOError(f"Failed to read '{dataset.name}': {err}") from err


def read_slab(dataset: h5py.Dataset, selection: tuple) -> np.ndarray:
    try:
        return dataset[selection]
    except _H5PY_ERRORS as err:
        raise DatasetIOError(
            f"Failed to read {selection} from '{dataset.name}': {err}"
        ) from err


def create_dataset(
    f: h5py.File,
    name: str,
    shape: Sequence[int],
    dtype,
    chunks: Optional[Sequence[int]],
    compression_level: int,
) -> h5py.Dataset:
    """Create a gzip-compressed, chunked dataset; fails if ``name`` exists."""
    try:
        return f.create_dataset(
            name,
            shape=tuple(shape),
            dtype=dtype,
            chunks=tuple(chunks) if chunks is not None else None,
            compression="gzip",
            compression_opts=compression_level,
        )
    except _H5PY_ERRORS as err:
        raise DatasetIOError(
            f"Cannot create dataset '{name}' in '{f.filename}': {err}"
        ) from err


def write_all(dataset: h5py.Dataset, data: np.ndarray) -> None:
    """Write the whole dataset in one call."""
    try:
        dataset[...] = data
    except _H5PY_ERRORS as err:
        raise DatasetIOError(f"Failed to write '{dataset.name}': {err}") from err


def set_attribute(node, name: str, value: Any) -> None:
    try:
        node.attrs[name] = value
    except _H5PY_ERRORS as err:
        raise DatasetIOError(
            f"Cannot set attribute '{name}' on '{node.name}': {err}"
        ) from err


def get_attribute(node, name: str, default: Any = None) -> Any:
    """Read an attribute, decoding bytes to str; ``default`` when absent."""
    if name not in node.attrs:
        return default
    value = node.attrs[name]
    if isinstance(value, bytes):
        value = value.decode()
    elif isinstance(value, np.ndarray) and value.dtype.kind == "S":
        value = b"".join(value.ravel().tolist()).decode()
    return value
