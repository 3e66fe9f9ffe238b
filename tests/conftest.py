import h5py
import numpy as np
import pytest

from hdf5stack import CanonicalImage


@pytest.fixture
def rgb_data():
    """An 8-bit 289x400 three-channel image in YXC order."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(289, 400, 3), dtype=np.uint8)


@pytest.fixture
def rgb_image(rgb_data):
    return CanonicalImage.from_ndarray(rgb_data, "yxc")


@pytest.fixture
def exported_h5(tmp_path):
    """A uint16 dataset of shape (7, 6, 5, 4, 3) with a few marked voxels.

    Read in 'tzyxc' order, pixel (x=0, y=0, c=1) holds 200 at (z=5, t=6) and
    at (z=4, t=6); everything else is 0.
    """
    path = tmp_path / "test.h5"
    data = np.zeros((7, 6, 5, 4, 3), dtype=np.uint16)
    data[6, 5, 0, 0, 1] = 200
    data[6, 4, 0, 0, 1] = 200
    with h5py.File(str(path), "w") as f:
        f.create_dataset("exported_data", data=data)
    return path
