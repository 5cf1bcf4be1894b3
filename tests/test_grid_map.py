"""Tests for the GridMap container."""

import numpy as np
import pytest

from gridmod import GridMap, UnknownLayerError


@pytest.fixture
def grid():
    """Create a 3x4 grid with two layers."""
    g = GridMap((3, 4), resolution=0.5, position=(1.0, 2.0), frame_id="odom")
    g.add("elevation", np.arange(12, dtype=np.float32).reshape(3, 4))
    g.add("variance", 0.1)
    return g


class TestConstruction:
    """Test GridMap construction and geometry."""

    def test_geometry(self, grid):
        """Test size, length, cell count and frame."""
        assert grid.size == (3, 4)
        assert grid.length == (1.5, 2.0)
        assert grid.n_cells == 12
        assert grid.position == (1.0, 2.0)
        assert grid.frame_id == "odom"

    @pytest.mark.parametrize("shape", [(0, 3), (3,), (-1, 2)])
    def test_bad_shape_raises(self, shape):
        """Test invalid shapes are rejected."""
        with pytest.raises(ValueError):
            GridMap(shape)

    def test_bad_resolution_raises(self):
        """Test non-positive resolution is rejected."""
        with pytest.raises(ValueError, match="resolution"):
            GridMap((2, 2), resolution=0.0)

    @pytest.mark.parametrize("dtype", [np.int32, np.float16, np.complex64])
    def test_unsupported_dtype_raises(self, dtype):
        """Test layers must be float32 or float64."""
        with pytest.raises(ValueError, match="float32 or float64"):
            GridMap((2, 2), dtype=dtype)

    @pytest.mark.skipif(
        np.dtype(np.longdouble) == np.dtype(np.float64),
        reason="longdouble is float64 on this platform",
    )
    def test_longdouble_raises(self):
        """Test extended precision layers are rejected."""
        with pytest.raises(ValueError, match="float32 or float64"):
            GridMap((2, 2), dtype=np.longdouble)

    @pytest.mark.parametrize("dtype", [np.float32, np.float64, "float64"])
    def test_supported_dtype(self, dtype):
        """Test float32 and float64 are accepted."""
        assert GridMap((2, 2), dtype=dtype).dtype == np.dtype(dtype)


class TestLayers:
    """Test layer management."""

    def test_default_layer_is_invalid(self):
        """Test a layer added without a value is all NaN."""
        g = GridMap((2, 2))
        g.add("elevation")
        assert np.isnan(g["elevation"]).all()
        assert not g.valid_mask().any()

    def test_layer_order(self, grid):
        """Test layers are listed in insertion order."""
        assert grid.layers == ["elevation", "variance"]
        assert len(grid) == 2
        assert "variance" in grid
        assert "color" not in grid

    def test_shape_mismatch_raises(self, grid):
        """Test all layers must share the map's shape."""
        with pytest.raises(ValueError, match="shape"):
            grid.add("bad", np.zeros((4, 3)))

    def test_add_copies_array(self, grid):
        """Test add() does not alias the caller's array."""
        data = np.zeros((3, 4), dtype=np.float32)
        grid.add("zeros", data)
        data[0, 0] = 5.0
        assert grid.at("zeros", (0, 0)) == 0.0

    def test_unknown_layer(self, grid):
        """Test missing layers raise UnknownLayerError, a KeyError."""
        with pytest.raises(UnknownLayerError) as exc:
            grid["missing"]
        assert exc.value.layer == "missing"
        with pytest.raises(KeyError):
            grid.at("missing", (0, 0))

    def test_erase(self, grid):
        """Test erasing a layer."""
        grid.erase("variance")
        assert not grid.exists("variance")
        with pytest.raises(UnknownLayerError):
            grid.erase("variance")


class TestCells:
    """Test cell access and validity."""

    def test_at_and_set_at(self, grid):
        """Test reading and writing single cells."""
        assert grid.at("elevation", (1, 2)) == 6.0
        grid.set_at("elevation", (1, 2), -1.0)
        assert grid.at("elevation", (1, 2)) == -1.0

    def test_out_of_range_index(self, grid):
        """Test negative and too-large indices are rejected."""
        with pytest.raises(IndexError):
            grid.at("elevation", (3, 0))
        with pytest.raises(IndexError):
            grid.at("elevation", (-1, 0))

    def test_is_valid_layer_subset(self, grid):
        """Test validity is evaluated only over the requested layers."""
        grid.set_at("variance", (0, 0), np.nan)
        assert grid.is_valid((0, 0), ["elevation"])
        assert not grid.is_valid((0, 0), ["variance"])
        assert not grid.is_valid((0, 0))
        assert grid.is_valid((0, 1))

    def test_valid_mask_matches_is_valid(self, grid):
        """Test valid_mask agrees with is_valid for every cell."""
        grid.set_at("elevation", (2, 3), np.nan)
        mask = grid.valid_mask(["elevation"])
        for index in grid:
            assert mask[index] == grid.is_valid(index, ["elevation"])

    def test_iteration_covers_all_cells(self, grid):
        """Test iteration yields every index once in row-major order."""
        indices = list(grid)
        assert len(indices) == grid.n_cells
        assert indices[0] == (0, 0)
        assert indices[1] == (0, 1)
        assert indices[-1] == (2, 3)


class TestCopy:
    """Test deep copy."""

    def test_copy_is_independent(self, grid):
        """Test modifying the copy leaves the original alone."""
        other = grid.copy()
        other.set_at("elevation", (0, 0), 100.0)
        other.add("new", 1.0)
        assert grid.at("elevation", (0, 0)) == 0.0
        assert not grid.exists("new")

    def test_copy_keeps_geometry(self, grid):
        """Test the copy has the same geometry and layers."""
        other = grid.copy()
        assert other.size == grid.size
        assert other.resolution == grid.resolution
        assert other.position == grid.position
        assert other.frame_id == grid.frame_id
        assert other.layers == grid.layers
        assert other.dtype == grid.dtype
