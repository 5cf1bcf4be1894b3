"""
Numba-optimized kernels for threshold operations.

Kernels modify the layer in place and return the number of replaced cells.
Cells outside the validity mask (GridMap.valid_mask) are never compared.
"""

from __future__ import annotations

import logging

import numpy as np
from numba import njit, prange
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


@njit(parallel=True, cache=True, nogil=True)
def lower_threshold_numba(
    layer: NDArray[np.floating],
    valid: NDArray[np.bool_],
    threshold: float,
    set_to: float,
) -> int:
    """
    Replace valid cells strictly below the threshold.

    Args:
        layer: Layer values [rows, cols] (modified in-place)
        valid: Cell validity mask [rows, cols]
        threshold: Lower bound
        set_to: Replacement value

    Returns:
        Number of replaced cells
    """
    rows, cols = layer.shape
    replaced = np.zeros(rows, dtype=np.int64)

    for i in prange(rows):
        for j in range(cols):
            if not valid[i, j]:
                continue
            value = layer[i, j]
            if value < threshold:
                layer[i, j] = set_to
                replaced[i] += 1

    return replaced.sum()


@njit(parallel=True, cache=True, nogil=True)
def upper_threshold_numba(
    layer: NDArray[np.floating],
    valid: NDArray[np.bool_],
    threshold: float,
    set_to: float,
) -> int:
    """
    Replace valid cells strictly above the threshold.

    Args:
        layer: Layer values [rows, cols] (modified in-place)
        valid: Cell validity mask [rows, cols]
        threshold: Upper bound
        set_to: Replacement value

    Returns:
        Number of replaced cells
    """
    rows, cols = layer.shape
    replaced = np.zeros(rows, dtype=np.int64)

    for i in prange(rows):
        for j in range(cols):
            if not valid[i, j]:
                continue
            value = layer[i, j]
            if value > threshold:
                layer[i, j] = set_to
                replaced[i] += 1

    return replaced.sum()


def warmup_threshold_kernels() -> None:
    """Compile the kernels for float32 and float64 layers ahead of first use."""
    for dtype in (np.float32, np.float64):
        dummy = np.zeros((2, 2), dtype=dtype)
        valid = np.ones((2, 2), dtype=np.bool_)
        lower_threshold_numba(dummy, valid, 0.0, 0.0)
        upper_threshold_numba(dummy, valid, 0.0, 0.0)

    logger.debug("Threshold Numba kernels warmed up")
