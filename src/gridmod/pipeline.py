"""Filter chain for grid maps.

Provides a fluent API for running several filter stages in order.

Example:
    >>> from gridmod import Pipeline
    >>>
    >>> pipe = (Pipeline()
    ...     .threshold(["elevation"], lower=-1.0, set_to=-1.0)
    ...     .threshold(["elevation"], upper=2.0, set_to=2.0))
    >>> result = pipe(grid)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from gridmod.config.values import ThresholdValues
from gridmod.errors import PipelineError
from gridmod.grid_map import GridMap
from gridmod.protocols import GridMapFilter
from gridmod.threshold.filter import ThresholdFilter

logger = logging.getLogger(__name__)


@dataclass
class Pipeline:
    """Ordered chain of filter stages.

    Each stage receives the output of the previous one. The input map of
    a call is never modified.
    """

    _stages: list[GridMapFilter] = field(default_factory=list)

    @classmethod
    def from_params(cls, stage_params: Iterable[Mapping[str, Any]]) -> Pipeline:
        """Build a chain of threshold filters, one per parameter mapping.

        A mapping may carry an optional "name" key used in log messages.

        :raises ThresholdConfigError: If any mapping is invalid
        """
        pipe = cls()
        for i, params in enumerate(stage_params):
            name = params.get("name", f"threshold_{i}")
            pipe.add(ThresholdFilter(ThresholdValues.from_params(params), name=name))
        return pipe

    def add(self, stage: GridMapFilter) -> Pipeline:
        """Append a stage.

        :param stage: Object with ``update(map) -> (map, ok)``
        :returns: Self for chaining
        """
        if not isinstance(stage, GridMapFilter):
            raise TypeError(f"stage must provide update(map) -> (map, ok), got {type(stage)}")
        self._stages.append(stage)
        return self

    def threshold(
        self,
        layers: Sequence[str],
        set_to: float,
        lower: float | None = None,
        upper: float | None = None,
    ) -> Pipeline:
        """Append a threshold stage.

        :param layers: Target layer names
        :param set_to: Replacement value
        :param lower: Lower bound (exclusive with upper)
        :param upper: Upper bound (exclusive with lower)
        :returns: Self for chaining
        """
        params = {"lower_threshold": lower, "upper_threshold": upper, "set_to": set_to}
        params["threshold_types"] = list(layers)
        name = f"threshold_{len(self._stages)}"
        return self.add(ThresholdFilter(ThresholdValues.from_params(params), name=name))

    def __call__(self, grid_map: GridMap) -> GridMap:
        """Run every stage in order.

        :param grid_map: Input GridMap or GridMapTensor (not modified)
        :returns: Output of the last stage, or a copy of the input if empty
        :raises PipelineError: If a stage reports failure
        """
        current = grid_map.copy() if not self._stages else grid_map
        for i, stage in enumerate(self._stages):
            current, ok = stage.update(current)
            if not ok:
                name = getattr(stage, "name", type(stage).__name__)
                raise PipelineError(f"stage {i} ({name}) failed")

        logger.debug("[Pipeline] Applied %d stages", len(self._stages))
        return current

    def update(self, map_in: GridMap) -> tuple[GridMap, bool]:
        """Run the chain with the filter calling convention, so pipelines nest."""
        try:
            return self(map_in), True
        except PipelineError as e:
            logger.error("[Pipeline] %s", e)
            return map_in.copy(), False

    def reset(self) -> Pipeline:
        """Remove all stages."""
        self._stages.clear()
        return self

    def is_neutral(self) -> bool:
        return not self._stages

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        return f"Pipeline({len(self._stages)} stages)"
