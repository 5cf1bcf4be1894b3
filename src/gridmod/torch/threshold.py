"""GPU-accelerated threshold filter for grid maps."""

from __future__ import annotations

import logging

import torch

from gridmod.config.values import ThresholdMode, ThresholdValues
from gridmod.errors import UnknownLayerError
from gridmod.torch.grid_map_tensor import GridMapTensor

logger = logging.getLogger(__name__)


class ThresholdGPU:
    """Threshold filter running on the device of a GridMapTensor.

    Produces the same cells as the CPU ThresholdFilter. Comparisons are
    done in float64 so float32 layers round the same way on both backends.

    Example:
        >>> from gridmod.config import ThresholdValues
        >>> from gridmod.torch import GridMapTensor, ThresholdGPU
        >>>
        >>> gm_gpu = GridMapTensor.from_grid_map(grid, device="cuda")
        >>> f = ThresholdGPU(ThresholdValues.lower(3.0, 0.0, ["elevation"]))
        >>> result = f(gm_gpu)
    """

    def __init__(self, values: ThresholdValues, name: str = "threshold_gpu"):
        self.values = values
        self.name = name
        self.diagnostics: list[UnknownLayerError] = []

    @torch.no_grad()
    def __call__(self, data: GridMapTensor, inplace: bool = False) -> GridMapTensor:
        """Apply the threshold to every target layer.

        :param data: Input map
        :param inplace: If True, modify data; if False, work on a clone
        :returns: Output map
        """
        out = data if inplace else data.clone()
        diagnostics: list[UnknownLayerError] = []

        for layer in self.values.layers:
            if not out.exists(layer):
                error = UnknownLayerError(layer)
                logger.error("[ThresholdGPU] Check your threshold types! %s", error)
                diagnostics.append(error)
                continue

            tensor = out[layer]
            wide = tensor.to(torch.float64)
            if self.values.mode is ThresholdMode.LOWER:
                hit = wide < self.values.threshold
            else:
                hit = wide > self.values.threshold
            hit &= out.valid_mask([layer])
            tensor.masked_fill_(hit, self.values.set_to)

            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "[ThresholdGPU] %s: replaced %d cells", layer, int(hit.sum().item())
                )

        self.diagnostics = diagnostics
        return out

    def update(self, map_in: GridMapTensor) -> tuple[GridMapTensor, bool]:
        """Filter calling convention; never modifies map_in."""
        return self(map_in, inplace=False), True

    def __repr__(self) -> str:
        return f"ThresholdGPU(name={self.name!r}, values={self.values!r})"
