"""
PyTorch backend for gridmod.

Runs threshold filters on grid map layers held as torch tensors, on CPU or
GPU devices.

Example:
    >>> from gridmod.torch import GridMapTensor, ThresholdGPU
    >>>
    >>> gm_gpu = GridMapTensor.from_grid_map(grid, device="cuda")
    >>> result = ThresholdGPU(values)(gm_gpu).to_grid_map()
"""

from gridmod.torch.grid_map_tensor import GridMapTensor
from gridmod.torch.threshold import ThresholdGPU

__all__ = [
    "GridMapTensor",
    "ThresholdGPU",
]
