"""Equivalence checks for grid maps.

Used to verify that CPU and GPU filters produce the same maps.

Example:
    >>> from gridmod.verification import GridMapVerifier
    >>>
    >>> GridMapVerifier.assert_equivalent(cpu_result, gpu_result.to_grid_map())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from gridmod.grid_map import GridMap

if TYPE_CHECKING:
    from gridmod.torch import GridMapTensor

logger = logging.getLogger(__name__)


class GridMapVerifier:
    """Utilities for comparing grid maps."""

    @staticmethod
    def as_grid_map(data: GridMap | GridMapTensor) -> GridMap:
        """Return data as a NumPy GridMap, converting GPU maps."""
        if isinstance(data, GridMap):
            return data
        return data.to_grid_map()

    @staticmethod
    def assert_same_geometry(a: GridMap, b: GridMap) -> None:
        """Assert both maps share size, resolution, position, frame and layers.

        :raises AssertionError: On the first mismatch
        """
        if a.size != b.size:
            raise AssertionError(f"Size mismatch: {a.size} != {b.size}")
        if a.resolution != b.resolution:
            raise AssertionError(f"Resolution mismatch: {a.resolution} != {b.resolution}")
        if a.position != b.position:
            raise AssertionError(f"Position mismatch: {a.position} != {b.position}")
        if a.frame_id != b.frame_id:
            raise AssertionError(f"Frame mismatch: {a.frame_id} != {b.frame_id}")
        if a.layers != b.layers:
            raise AssertionError(f"Layer mismatch: {a.layers} != {b.layers}")

    @staticmethod
    def assert_equivalent(
        a: GridMap | GridMapTensor,
        b: GridMap | GridMapTensor,
        rtol: float = 0.0,
        atol: float = 0.0,
    ) -> None:
        """Assert two maps hold the same data.

        NaN cells must match exactly; other cells are compared with the
        given tolerances (exact by default).

        :raises AssertionError: If the maps differ
        """
        a = GridMapVerifier.as_grid_map(a)
        b = GridMapVerifier.as_grid_map(b)
        GridMapVerifier.assert_same_geometry(a, b)

        for layer in a.layers:
            np.testing.assert_array_equal(
                np.isnan(a[layer]),
                np.isnan(b[layer]),
                err_msg=f"Invalid cells differ in layer '{layer}'",
            )
            np.testing.assert_allclose(
                a[layer],
                b[layer],
                rtol=rtol,
                atol=atol,
                equal_nan=True,
                err_msg=f"Values differ in layer '{layer}'",
            )

        logger.debug(
            "[GridMapVerifier] Equivalence verified: %d layers, size=%s", len(a), a.size
        )

    @staticmethod
    def summary(data: GridMap | GridMapTensor) -> str:
        """One-line description with per-layer valid cell counts.

        Example:
            >>> GridMapVerifier.summary(grid)
            'size=(3, 3), elevation=9/9'
        """
        grid = GridMapVerifier.as_grid_map(data)
        parts = [f"size={grid.size}"]
        for layer in grid.layers:
            n_valid = int(np.count_nonzero(grid.valid_mask([layer])))
            parts.append(f"{layer}={n_valid}/{grid.n_cells}")
        return ", ".join(parts)
