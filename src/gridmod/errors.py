"""Exception types raised by gridmod.

Setup failures derive from ThresholdConfigError (a ValueError) so callers
can catch a whole configuration step at once. Apply-time problems with a
single target layer are reported as UnknownLayerError diagnostics instead
of being raised out of the filter.
"""

from __future__ import annotations


class GridModError(Exception):
    """Base class for all gridmod errors."""


class ThresholdConfigError(GridModError, ValueError):
    """Threshold parameters could not be turned into a valid configuration."""


class MissingThresholdError(ThresholdConfigError):
    def __init__(self):
        super().__init__("did not find param lower_threshold or upper_threshold")


class ConflictingThresholdError(ThresholdConfigError):
    def __init__(self):
        super().__init__(
            "set either lower_threshold or upper_threshold, only one threshold can be used"
        )


class MissingReplacementError(ThresholdConfigError):
    def __init__(self):
        super().__init__("did not find param set_to")


class MissingTargetLayersError(ThresholdConfigError):
    def __init__(self):
        super().__init__("did not find param threshold_types")


class InvalidParameterError(ThresholdConfigError, TypeError):
    """A parameter was present but had the wrong type."""

    def __init__(self, name: str, value: object, expected: str):
        self.name = name
        self.value = value
        super().__init__(f"param {name}={value!r} must be {expected}")


class UnknownLayerError(GridModError, KeyError):
    """A layer name was requested that the grid map does not contain."""

    def __init__(self, layer: str):
        self.layer = layer
        super().__init__(layer)

    def __str__(self) -> str:
        return f"layer '{self.layer}' does not exist"


class NotConfiguredError(GridModError, RuntimeError):
    """A filter was used before configure() succeeded."""


class PipelineError(GridModError, RuntimeError):
    """A pipeline stage reported failure."""
