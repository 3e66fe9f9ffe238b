"""Tests for ImageJ TIFF import and export."""

import numpy as np
import pytest
import tifffile
from numpy.testing import assert_array_equal

from hdf5stack import CanonicalImage, ElementKind
from hdf5stack.exceptions import InvalidAxisOrderError, UnsupportedElementTypeError
from hdf5stack.tiff import read_tiff, tiff_axes_to_axis_order, write_tiff


class TestTiffAxes:
    def test_hyperstack_axes(self):
        assert tiff_axes_to_axis_order("TZCYX") == "tzcyx"

    def test_rgb_samples_are_channels(self):
        assert tiff_axes_to_axis_order("YXS") == "yxc"

    def test_unsupported_axis(self):
        with pytest.raises(InvalidAxisOrderError, match="'Q'"):
            tiff_axes_to_axis_order("QYX")


class TestTiffRoundTrip:
    @pytest.mark.parametrize("dtype", [np.uint8, np.uint16, np.float32])
    def test_hyperstack(self, tmp_path, dtype):
        rng = np.random.default_rng(1)
        planes = (rng.random((2, 3, 2, 12, 9)) * 200).astype(dtype)
        image = CanonicalImage(planes).with_auto_display_range()
        path = tmp_path / "stack.tif"

        write_tiff(image, path)
        back = read_tiff(path)

        assert back.element_kind is ElementKind.from_dtype(dtype)
        assert_array_equal(back.planes, planes)
        assert back.display_range_high == pytest.approx(image.display_range_high)

    def test_single_plane(self, tmp_path):
        planes = np.arange(12, dtype=np.uint16).reshape(1, 1, 1, 3, 4)
        path = tmp_path / "plane.tif"
        write_tiff(CanonicalImage(planes), path)
        assert_array_equal(read_tiff(path).planes, planes)

    def test_rgb_tiff(self, tmp_path, rgb_data):
        path = tmp_path / "rgb.tif"
        tifffile.imwrite(str(path), rgb_data, photometric="rgb")
        image = read_tiff(path)
        assert (image.dim_x, image.dim_y, image.num_channels) == (400, 289, 3)
        assert image.bit_depth == 8
        assert_array_equal(image.get_plane(c=2), rgb_data[:, :, 2])

    @pytest.mark.parametrize("kind", [ElementKind.UINT32, ElementKind.ARGB32])
    def test_unsupported_kinds(self, tmp_path, kind):
        image = CanonicalImage(np.zeros((1, 1, 1, 2, 2), dtype=np.uint32), element_kind=kind)
        with pytest.raises(UnsupportedElementTypeError):
            write_tiff(image, tmp_path / "out.tif")
