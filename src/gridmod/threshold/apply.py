"""Apply threshold values to grid map layers.

This module provides the core per-layer threshold pass.
"""

from __future__ import annotations

import logging

from gridmod.config.values import ThresholdMode, ThresholdValues
from gridmod.errors import UnknownLayerError
from gridmod.grid_map import GridMap
from gridmod.threshold.kernels import lower_threshold_numba, upper_threshold_numba

logger = logging.getLogger(__name__)

_KERNELS = {
    ThresholdMode.LOWER: lower_threshold_numba,
    ThresholdMode.UPPER: upper_threshold_numba,
}


def apply_threshold_values(
    grid_map: GridMap,
    values: ThresholdValues,
    inplace: bool = False,
) -> tuple[GridMap, list[UnknownLayerError]]:
    """Replace violating cells of every target layer.

    Target layers are processed in configuration order. A missing layer is
    logged and reported but does not stop the remaining layers.

    :param grid_map: Input map
    :param values: Threshold configuration
    :param inplace: If True, modify grid_map; if False, work on a copy
    :returns: (output map, diagnostics for layers that do not exist)
    """
    out = grid_map if inplace else grid_map.copy()
    diagnostics: list[UnknownLayerError] = []
    kernel = _KERNELS[values.mode]

    for layer in values.layers:
        if not out.exists(layer):
            error = UnknownLayerError(layer)
            logger.error("[Threshold] Check your threshold types! %s", error)
            diagnostics.append(error)
            continue

        valid = out.valid_mask([layer])
        replaced = kernel(out.get(layer), valid, values.threshold, values.set_to)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[Threshold] %s: replaced %d/%d cells (%s %f -> %f)",
                layer,
                replaced,
                out.n_cells,
                values.mode.value,
                values.threshold,
                values.set_to,
            )

    return out, diagnostics
