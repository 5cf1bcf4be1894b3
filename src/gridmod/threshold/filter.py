"""Threshold filter for grid maps.

Configured once from a parameter mapping, then applied to any number of
input maps. Each update returns a new map; the input is never modified.

Example:
    >>> from gridmod import GridMap, ThresholdFilter
    >>>
    >>> f = ThresholdFilter()
    >>> f.configure({
    ...     "lower_threshold": 3.0,
    ...     "set_to": 0.0,
    ...     "threshold_types": ["elevation"],
    ... })
    True
    >>> map_out, ok = f.update(map_in)
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from gridmod.config.values import ThresholdValues
from gridmod.errors import NotConfiguredError, UnknownLayerError
from gridmod.grid_map import GridMap
from gridmod.threshold.apply import apply_threshold_values

logger = logging.getLogger(__name__)


class ThresholdFilter:
    """Replace cells that violate a lower or upper bound with a fixed value.

    :param values: Already validated configuration; leave None and call
        configure() to build it from parameters
    :param name: Name used in log messages and pipeline errors
    """

    def __init__(self, values: ThresholdValues | None = None, name: str = "threshold"):
        self.name = name
        self._values = values
        self.diagnostics: list[UnknownLayerError] = []

    @property
    def values(self) -> ThresholdValues | None:
        return self._values

    @property
    def is_configured(self) -> bool:
        return self._values is not None

    def configure(self, params: Mapping[str, Any]) -> bool:
        """Validate parameters and store the resulting configuration.

        A failed call leaves the filter unconfigured, even if an earlier
        call succeeded.

        :param params: Mapping with lower_threshold or upper_threshold,
            set_to and threshold_types
        :returns: True on success, False if the parameters are invalid
        """
        self._values = None
        try:
            values = ThresholdValues.from_params(params)
        except ValueError as e:
            logger.error("[ThresholdFilter] %s: %s", self.name, e)
            return False

        self._values = values
        logger.debug("[ThresholdFilter] %s configured: %s", self.name, values)
        return True

    def apply(self, map_in: GridMap) -> tuple[GridMap, list[UnknownLayerError]]:
        """Apply the threshold and return the diagnostics of this call.

        Leaves ``diagnostics`` untouched.

        :param map_in: Input map (not modified)
        :returns: (output map, errors for target layers missing from map_in)
        :raises NotConfiguredError: If the filter is not configured
        """
        values = self._values
        if values is None:
            raise NotConfiguredError(f"ThresholdFilter '{self.name}' is not configured")
        return apply_threshold_values(map_in, values)

    def update(self, map_in: GridMap) -> tuple[GridMap, bool]:
        """Apply the threshold to a copy of map_in.

        Unknown target layers are skipped and recorded in ``diagnostics``;
        they do not make the call fail.

        :param map_in: Input map (not modified)
        :returns: (output map, False only if the filter is not configured)
        """
        try:
            map_out, diagnostics = self.apply(map_in)
        except NotConfiguredError:
            logger.error("[ThresholdFilter] %s used before configure() succeeded", self.name)
            self.diagnostics = []
            return map_in.copy(), False

        self.diagnostics = diagnostics
        return map_out, True

    def __call__(self, map_in: GridMap) -> GridMap:
        """Apply the threshold and return the output map.

        :raises NotConfiguredError: If the filter is not configured
        """
        map_out, _ = self.apply(map_in)
        return map_out

    def __repr__(self) -> str:
        return f"ThresholdFilter(name={self.name!r}, values={self._values!r})"
