"""Multi-layer 2-D grid map backed by NumPy arrays.

All layers share one shape, resolution and position. NaN marks a cell as
"no data" in that layer; validity is computed on demand per layer subset.

Example:
    >>> from gridmod import GridMap
    >>>
    >>> grid = GridMap((100, 100), resolution=0.05, position=(1.0, 2.0))
    >>> grid.add("elevation", 0.0)
    >>> grid.set_at("elevation", (10, 20), 1.5)
    >>> grid.is_valid((10, 20), ["elevation"])
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

import numpy as np

from gridmod.errors import UnknownLayerError

Index = tuple[int, int]

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


class GridMap:
    """Named collection of equally shaped 2-D float layers.

    :param shape: Number of cells as (rows, cols)
    :param resolution: Cell side length in metres
    :param position: Map centre (x, y) in the map frame
    :param frame_id: Name of the coordinate frame
    :param dtype: Layer dtype, float32 or float64
    """

    def __init__(
        self,
        shape: tuple[int, int],
        resolution: float = 1.0,
        position: tuple[float, float] = (0.0, 0.0),
        frame_id: str = "map",
        dtype: np.dtype | type = np.float32,
    ):
        if len(shape) != 2 or any(int(s) <= 0 for s in shape):
            raise ValueError(f"shape must be two positive integers, got {shape}")
        if resolution <= 0:
            raise ValueError("resolution must be positive")
        dtype = np.dtype(dtype)
        if dtype not in SUPPORTED_DTYPES:
            raise ValueError(f"dtype must be float32 or float64, got {dtype}")

        self._shape = (int(shape[0]), int(shape[1]))
        self.resolution = float(resolution)
        self.position = (float(position[0]), float(position[1]))
        self.frame_id = frame_id
        self.dtype = dtype
        self._layers: dict[str, np.ndarray] = {}

    # ========================================================================
    # Geometry
    # ========================================================================

    @property
    def size(self) -> tuple[int, int]:
        """Number of cells as (rows, cols)."""
        return self._shape

    @property
    def length(self) -> tuple[float, float]:
        """Physical extent of the map in metres."""
        return (self._shape[0] * self.resolution, self._shape[1] * self.resolution)

    @property
    def n_cells(self) -> int:
        return self._shape[0] * self._shape[1]

    # ========================================================================
    # Layers
    # ========================================================================

    @property
    def layers(self) -> list[str]:
        """Layer names in insertion order."""
        return list(self._layers)

    def add(self, layer: str, value: float | np.ndarray = np.nan) -> None:
        """Add a layer, or overwrite it if it already exists.

        :param layer: Layer name
        :param value: Scalar fill value or array with the map's shape (copied)
        """
        if np.isscalar(value):
            data = np.full(self._shape, value, dtype=self.dtype)
        else:
            data = np.array(value, dtype=self.dtype, copy=True)
            if data.shape != self._shape:
                raise ValueError(
                    f"layer '{layer}' has shape {data.shape}, map shape is {self._shape}"
                )
        self._layers[layer] = np.ascontiguousarray(data)

    def exists(self, layer: str) -> bool:
        return layer in self._layers

    def get(self, layer: str) -> np.ndarray:
        """Return the array of a layer (not a copy).

        :raises UnknownLayerError: If the layer does not exist
        """
        try:
            return self._layers[layer]
        except KeyError:
            raise UnknownLayerError(layer) from None

    def erase(self, layer: str) -> None:
        if layer not in self._layers:
            raise UnknownLayerError(layer)
        del self._layers[layer]

    def __getitem__(self, layer: str) -> np.ndarray:
        return self.get(layer)

    def __contains__(self, layer: object) -> bool:
        return layer in self._layers

    def __len__(self) -> int:
        return len(self._layers)

    # ========================================================================
    # Cell access
    # ========================================================================

    def _check_index(self, index: Sequence[int]) -> Index:
        row, col = int(index[0]), int(index[1])
        if not (0 <= row < self._shape[0] and 0 <= col < self._shape[1]):
            raise IndexError(f"index {(row, col)} outside map of size {self._shape}")
        return row, col

    def at(self, layer: str, index: Sequence[int]) -> float:
        """Read one cell of a layer."""
        return float(self.get(layer)[self._check_index(index)])

    def set_at(self, layer: str, index: Sequence[int], value: float) -> None:
        """Write one cell of a layer."""
        self.get(layer)[self._check_index(index)] = value

    def is_valid(self, index: Sequence[int], layers: Iterable[str] | None = None) -> bool:
        """Check whether a cell holds data in every requested layer.

        :param index: Cell index (row, col)
        :param layers: Layer names to check, all layers when None
        :returns: False if the cell is NaN in any of the layers
        """
        idx = self._check_index(index)
        names = self._layers if layers is None else layers
        return all(not np.isnan(self.get(name)[idx]) for name in names)

    def valid_mask(self, layers: Iterable[str] | None = None) -> np.ndarray:
        """Vectorised is_valid over every cell.

        :returns: Boolean array [rows, cols]
        """
        mask = np.ones(self._shape, dtype=np.bool_)
        names = self._layers if layers is None else layers
        for name in names:
            mask &= ~np.isnan(self.get(name))
        return mask

    def __iter__(self) -> Iterator[Index]:
        """Iterate over all cell indices in row-major order."""
        rows, cols = self._shape
        for row in range(rows):
            for col in range(cols):
                yield row, col

    # ========================================================================
    # Copy
    # ========================================================================

    def copy(self) -> GridMap:
        """Deep copy of geometry and every layer."""
        other = GridMap(
            self._shape,
            resolution=self.resolution,
            position=self.position,
            frame_id=self.frame_id,
            dtype=self.dtype,
        )
        other._layers = {name: data.copy() for name, data in self._layers.items()}
        return other

    def __repr__(self) -> str:
        return (
            f"GridMap(size={self._shape}, resolution={self.resolution}, "
            f"position={self.position}, layers={self.layers})"
        )
