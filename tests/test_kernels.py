"""Tests for the Numba threshold kernels and apply_threshold_values."""

import numpy as np
import pytest

from gridmod import GridMap, ThresholdValues, UnknownLayerError, apply_threshold_values
from gridmod.threshold.kernels import (
    lower_threshold_numba,
    upper_threshold_numba,
    warmup_threshold_kernels,
)


class TestKernels:
    """Test kernels directly on arrays."""

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_lower(self, dtype):
        """Test the lower kernel replaces v < t and counts replacements."""
        layer = np.array([[1.0, 3.0, np.nan], [-4.0, 5.0, 2.9]], dtype=dtype)
        replaced = lower_threshold_numba(layer, ~np.isnan(layer), 3.0, 0.0)
        assert replaced == 3
        np.testing.assert_array_equal(
            layer, np.array([[0.0, 3.0, np.nan], [0.0, 5.0, 0.0]], dtype=dtype)
        )

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_upper(self, dtype):
        """Test the upper kernel replaces v > t and counts replacements."""
        layer = np.array([[1.0, 3.0, np.nan], [np.inf, 5.0, 2.9]], dtype=dtype)
        replaced = upper_threshold_numba(layer, ~np.isnan(layer), 3.0, -1.0)
        assert replaced == 2
        np.testing.assert_array_equal(
            layer, np.array([[1.0, 3.0, np.nan], [-1.0, -1.0, 2.9]], dtype=dtype)
        )

    def test_all_nan_layer(self):
        """Test a layer without valid cells is untouched."""
        layer = np.full((4, 4), np.nan, dtype=np.float32)
        valid = np.zeros(layer.shape, dtype=np.bool_)
        assert lower_threshold_numba(layer, valid, 0.0, 0.0) == 0
        assert upper_threshold_numba(layer, valid, 0.0, 0.0) == 0
        assert np.isnan(layer).all()

    def test_matches_numpy(self):
        """Test the kernel agrees with a NumPy reference on a large layer."""
        rng = np.random.default_rng(7)
        layer = rng.normal(size=(257, 131)).astype(np.float32)
        layer[rng.random(layer.shape) < 0.2] = np.nan

        expected = layer.copy()
        expected[~np.isnan(expected) & (expected.astype(np.float64) < 0.3)] = -9.0

        lower_threshold_numba(layer, ~np.isnan(layer), 0.3, -9.0)
        np.testing.assert_array_equal(layer, expected)

    def test_mask_selects_cells(self):
        """Test only cells inside the validity mask are compared."""
        layer = np.array([[1.0, 1.0], [9.0, 9.0]], dtype=np.float32)
        valid = np.array([[True, False], [False, True]])
        assert lower_threshold_numba(layer, valid, 5.0, 0.0) == 1
        assert upper_threshold_numba(layer, valid, 5.0, 0.0) == 1
        np.testing.assert_array_equal(layer, [[0.0, 1.0], [9.0, 0.0]])

    def test_warmup(self):
        """Test kernels can be compiled ahead of use."""
        warmup_threshold_kernels()


class TestApplyThresholdValues:
    """Test the per-layer apply function."""

    @pytest.fixture
    def grid(self):
        g = GridMap((2, 2))
        g.add("a", np.array([[0.0, 1.0], [2.0, 3.0]]))
        g.add("b", np.array([[0.0, 1.0], [2.0, 3.0]]))
        return g

    def test_copy_by_default(self, grid):
        """Test the input is left alone unless inplace=True."""
        values = ThresholdValues.upper(1.5, 0.0, ["a"])
        out, diagnostics = apply_threshold_values(grid, values)
        assert out is not grid
        assert diagnostics == []
        assert grid.at("a", (1, 1)) == 3.0
        assert out.at("a", (1, 1)) == 0.0

    def test_inplace(self, grid):
        """Test inplace=True modifies and returns the same map."""
        values = ThresholdValues.upper(1.5, 0.0, ["a"])
        out, _ = apply_threshold_values(grid, values, inplace=True)
        assert out is grid
        assert grid.at("a", (1, 1)) == 0.0

    def test_diagnostics_in_order(self, grid):
        """Test every unknown layer is reported in configuration order."""
        values = ThresholdValues.lower(1.5, 9.0, ["x", "a", "y"])
        out, diagnostics = apply_threshold_values(grid, values)
        assert [d.layer for d in diagnostics] == ["x", "y"]
        assert all(isinstance(d, UnknownLayerError) for d in diagnostics)
        np.testing.assert_array_equal(out["a"], [[9.0, 9.0], [2.0, 3.0]])
        np.testing.assert_array_equal(out["b"], grid["b"])

    def test_replacement_cast_to_layer_dtype(self, grid):
        """Test replacement values are stored in the layer dtype."""
        values = ThresholdValues.lower(10.0, 0.1, ["a"])
        out, _ = apply_threshold_values(grid, values)
        assert out["a"].dtype == np.float32
        np.testing.assert_array_equal(out["a"], np.float32(0.1))

    def test_validity_from_grid_map(self, grid, monkeypatch):
        """Test cells are skipped according to GridMap.valid_mask."""
        mask = np.array([[True, False], [True, True]])
        monkeypatch.setattr(GridMap, "valid_mask", lambda self, layers=None: mask)
        values = ThresholdValues.lower(10.0, -1.0, ["a"])
        out, _ = apply_threshold_values(grid, values)
        np.testing.assert_array_equal(out["a"], [[-1.0, 1.0], [-1.0, -1.0]])
