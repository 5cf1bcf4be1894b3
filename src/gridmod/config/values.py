"""Threshold configuration values.

ThresholdValues is the validated, immutable configuration of one threshold
filter. It is normally built once from a parameter mapping:

    >>> values = ThresholdValues.from_params({
    ...     "lower_threshold": 3.0,
    ...     "set_to": 0.0,
    ...     "threshold_types": ["elevation"],
    ... })
    >>> values.mode
    <ThresholdMode.LOWER: 'lower'>
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from gridmod.config.params import THRESHOLD_PARAMS
from gridmod.errors import (
    ConflictingThresholdError,
    MissingReplacementError,
    MissingTargetLayersError,
    MissingThresholdError,
)

logger = logging.getLogger(__name__)


class ThresholdMode(Enum):
    """Comparison direction that triggers a replacement."""

    LOWER = "lower"  # value < threshold
    UPPER = "upper"  # value > threshold


@dataclass(frozen=True)
class ThresholdValues:
    """Validated threshold configuration.

    Attributes:
        mode: Which bound is enforced
        threshold: Bound value; equality never triggers a replacement
        set_to: Value written into cells that violate the bound
        layers: Target layer names, processed in order
    """

    mode: ThresholdMode
    threshold: float
    set_to: float
    layers: tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.mode, ThresholdMode):
            raise ValueError(f"mode must be a ThresholdMode, got {self.mode!r}")
        if math.isnan(self.threshold):
            raise ValueError("threshold must not be NaN")
        # Accept any iterable of names but store a tuple
        object.__setattr__(self, "layers", tuple(self.layers))

    @classmethod
    def lower(cls, threshold: float, set_to: float, layers=()) -> ThresholdValues:
        """Replace cells below ``threshold``."""
        return cls(ThresholdMode.LOWER, float(threshold), float(set_to), tuple(layers))

    @classmethod
    def upper(cls, threshold: float, set_to: float, layers=()) -> ThresholdValues:
        """Replace cells above ``threshold``."""
        return cls(ThresholdMode.UPPER, float(threshold), float(set_to), tuple(layers))

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> ThresholdValues:
        """Build values from a parameter mapping.

        Recognised keys are lower_threshold, upper_threshold, set_to and
        threshold_types. Exactly one of the two thresholds must be given.

        :param params: Parameter mapping
        :returns: Validated ThresholdValues
        :raises MissingThresholdError: If neither threshold is given
        :raises ConflictingThresholdError: If both thresholds are given
        :raises MissingReplacementError: If set_to is missing
        :raises MissingTargetLayersError: If threshold_types is missing
        :raises InvalidParameterError: If a value has the wrong type
        """
        lower = THRESHOLD_PARAMS.lower_threshold.lookup(params)
        if lower is not None:
            logger.info("[ThresholdValues] lower threshold = %f", lower)

        upper = THRESHOLD_PARAMS.upper_threshold.lookup(params)
        if upper is not None:
            logger.info("[ThresholdValues] upper threshold = %f", upper)

        if lower is None and upper is None:
            raise MissingThresholdError()
        if lower is not None and upper is not None:
            raise ConflictingThresholdError()

        set_to = THRESHOLD_PARAMS.set_to.lookup(params)
        if set_to is None:
            raise MissingReplacementError()

        layers = THRESHOLD_PARAMS.threshold_types.lookup(params)
        if layers is None:
            raise MissingTargetLayersError()
        if not layers:
            logger.warning("[ThresholdValues] threshold_types is empty, filter is a no-op")

        if lower is not None:
            values = cls.lower(lower, set_to, layers)
        else:
            values = cls.upper(upper, set_to, layers)

        if values.violates(set_to):
            logger.warning(
                "[ThresholdValues] set_to=%f itself violates the %s threshold %f",
                set_to,
                values.mode.value,
                values.threshold,
            )
        return values

    def violates(self, value: float) -> bool:
        """Check whether a single value would be replaced."""
        if self.mode is ThresholdMode.LOWER:
            return value < self.threshold
        return value > self.threshold

    def is_neutral(self) -> bool:
        """True if applying these values can never change a map."""
        return not self.layers

    def to_params(self) -> dict[str, Any]:
        """Inverse of from_params."""
        key = "lower_threshold" if self.mode is ThresholdMode.LOWER else "upper_threshold"
        return {key: self.threshold, "set_to": self.set_to, "threshold_types": list(self.layers)}
