"""
gridmod - Grid Map Filtering

Threshold filtering for multi-layer 2-D grid maps.

Features:
- GridMap: named float layers sharing one geometry, NaN marks "no data"
- ThresholdFilter: replace valid cells below a lower (or above an upper)
  bound with a fixed value, configured from a parameter mapping
- Numba-parallel CPU kernels, optional PyTorch backend (gridmod.torch)
- Pipeline: chain several filters

Example:
    >>> import numpy as np
    >>> from gridmod import GridMap, ThresholdFilter
    >>>
    >>> grid = GridMap((1, 3))
    >>> grid.add("elevation", np.array([[1.0, 5.0, 9.0]]))
    >>>
    >>> f = ThresholdFilter()
    >>> f.configure({"lower_threshold": 3.0, "set_to": 0.0, "threshold_types": ["elevation"]})
    True
    >>> out, ok = f.update(grid)
    >>> out["elevation"]
    array([[0., 5., 9.]], dtype=float32)

Example - Pipeline:
    >>> from gridmod import Pipeline
    >>>
    >>> pipe = (Pipeline()
    ...     .threshold(["elevation"], lower=0.0, set_to=0.0)
    ...     .threshold(["elevation"], upper=8.0, set_to=8.0))
    >>> clipped = pipe(grid)
"""

__version__ = "0.1.0"

from gridmod.config import THRESHOLD_PARAMS, ThresholdMode, ThresholdValues
from gridmod.errors import (
    ConflictingThresholdError,
    GridModError,
    InvalidParameterError,
    MissingReplacementError,
    MissingTargetLayersError,
    MissingThresholdError,
    NotConfiguredError,
    PipelineError,
    ThresholdConfigError,
    UnknownLayerError,
)
from gridmod.grid_map import GridMap
from gridmod.pipeline import Pipeline
from gridmod.protocols import ConfigurableFilter, GridMapFilter
from gridmod.threshold import ThresholdFilter, apply_threshold_values
from gridmod.verification import GridMapVerifier

__all__ = [
    # Data
    "GridMap",
    # Filters
    "ThresholdFilter",
    "apply_threshold_values",
    "Pipeline",
    # Config
    "ThresholdMode",
    "ThresholdValues",
    "THRESHOLD_PARAMS",
    # Protocols
    "GridMapFilter",
    "ConfigurableFilter",
    # Verification
    "GridMapVerifier",
    # Errors
    "GridModError",
    "ThresholdConfigError",
    "MissingThresholdError",
    "ConflictingThresholdError",
    "MissingReplacementError",
    "MissingTargetLayersError",
    "InvalidParameterError",
    "UnknownLayerError",
    "NotConfiguredError",
    "PipelineError",
    "__version__",
]
