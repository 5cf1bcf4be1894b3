"""
Grid map threshold module - Replace out-of-range cells with a fixed value.

Example:
    >>> from gridmod.threshold import ThresholdFilter, apply_threshold_values
    >>> from gridmod.config import ThresholdValues
    >>>
    >>> values = ThresholdValues.upper(2.0, set_to=2.0, layers=["elevation"])
    >>> out, diagnostics = apply_threshold_values(grid, values)
"""

from gridmod.threshold.apply import apply_threshold_values
from gridmod.threshold.filter import ThresholdFilter
from gridmod.threshold.kernels import (
    lower_threshold_numba,
    upper_threshold_numba,
    warmup_threshold_kernels,
)

__all__ = [
    "ThresholdFilter",
    "apply_threshold_values",
    # Kernels
    "lower_threshold_numba",
    "upper_threshold_numba",
    "warmup_threshold_kernels",
]
