"""GPU grid map container backed by PyTorch tensors."""

from __future__ import annotations

import logging

import numpy as np
import torch

from gridmod.errors import UnknownLayerError
from gridmod.grid_map import GridMap

logger = logging.getLogger(__name__)


class GridMapTensor:
    """Grid map whose layers live on a torch device.

    Mirrors the parts of GridMap the GPU filters need. Geometry is kept as
    plain Python values so a round trip through to_grid_map() is lossless.

    Example:
        >>> gm_gpu = GridMapTensor.from_grid_map(grid, device="cuda")
        >>> gm_gpu["elevation"].shape
        torch.Size([100, 100])
        >>> grid_back = gm_gpu.to_grid_map()
    """

    def __init__(
        self,
        layers: dict[str, torch.Tensor],
        size: tuple[int, int],
        resolution: float = 1.0,
        position: tuple[float, float] = (0.0, 0.0),
        frame_id: str = "map",
    ):
        for name, tensor in layers.items():
            if tuple(tensor.shape) != tuple(size):
                raise ValueError(f"layer '{name}' has shape {tuple(tensor.shape)}, map is {size}")
        self.layers = dict(layers)
        self.size = (int(size[0]), int(size[1]))
        self.resolution = resolution
        self.position = position
        self.frame_id = frame_id

    @classmethod
    def from_grid_map(cls, grid_map: GridMap, device: str | torch.device = "cuda") -> GridMapTensor:
        """Copy every layer of a GridMap onto ``device``."""
        layers = {
            name: torch.from_numpy(np.array(grid_map[name], copy=True)).to(device)
            for name in grid_map.layers
        }
        return cls(
            layers,
            grid_map.size,
            resolution=grid_map.resolution,
            position=grid_map.position,
            frame_id=grid_map.frame_id,
        )

    def to_grid_map(self) -> GridMap:
        """Copy back into a NumPy GridMap."""
        arrays = {name: t.detach().cpu().numpy() for name, t in self.layers.items()}
        dtype = next(iter(arrays.values())).dtype if arrays else np.float32
        grid_map = GridMap(
            self.size,
            resolution=self.resolution,
            position=self.position,
            frame_id=self.frame_id,
            dtype=dtype,
        )
        for name, array in arrays.items():
            grid_map.add(name, array)
        return grid_map

    @property
    def device(self) -> torch.device | None:
        for tensor in self.layers.values():
            return tensor.device
        return None

    def exists(self, layer: str) -> bool:
        return layer in self.layers

    def __getitem__(self, layer: str) -> torch.Tensor:
        try:
            return self.layers[layer]
        except KeyError:
            raise UnknownLayerError(layer) from None

    def __contains__(self, layer: object) -> bool:
        return layer in self.layers

    def __len__(self) -> int:
        return len(self.layers)

    def valid_mask(self, layers=None) -> torch.Tensor:
        """Boolean tensor [rows, cols], False where any requested layer is NaN."""
        names = self.layers if layers is None else layers
        mask = torch.ones(self.size, dtype=torch.bool, device=self.device)
        for name in names:
            mask &= ~torch.isnan(self[name])
        return mask

    def clone(self) -> GridMapTensor:
        """Deep copy on the same device."""
        return GridMapTensor(
            {name: t.clone() for name, t in self.layers.items()},
            self.size,
            resolution=self.resolution,
            position=self.position,
            frame_id=self.frame_id,
        )

    def copy(self) -> GridMapTensor:
        """Alias of clone(), matching GridMap.copy()."""
        return self.clone()

    def __repr__(self) -> str:
        return f"GridMapTensor(size={self.size}, layers={list(self.layers)}, device={self.device})"
