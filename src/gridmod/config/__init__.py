"""Configuration module for gridmod filters.

Usage:
    from gridmod.config import ThresholdValues, THRESHOLD_PARAMS
    values = ThresholdValues.from_params(params)
    THRESHOLD_PARAMS.set_to.description
"""

from gridmod.config.params import THRESHOLD_PARAMS, ParamSpec, ThresholdParams
from gridmod.config.values import ThresholdMode, ThresholdValues

__all__ = [
    "ParamSpec",
    "ThresholdParams",
    "THRESHOLD_PARAMS",
    "ThresholdMode",
    "ThresholdValues",
]
