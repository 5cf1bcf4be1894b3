"""
Protocol definitions for gridmod filter interfaces.

Any object with a matching ``update`` method can be chained in a Pipeline,
whether it runs on NumPy grid maps or on GPU tensors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from gridmod.grid_map import GridMap
    from gridmod.torch import GridMapTensor

# Type variable for generic map containers
T = TypeVar("T", bound="GridMap | GridMapTensor")


@runtime_checkable
class GridMapFilter(Protocol[T]):
    """
    Protocol for filter stages.

    ``update`` must not modify its input and reports success as a flag
    rather than raising.
    """

    def update(self, map_in: T) -> tuple[T, bool]:
        """
        Apply the filter.

        :param map_in: Input map (not modified)
        :returns: (output map, success flag)
        """
        ...


@runtime_checkable
class ConfigurableFilter(GridMapFilter[T], Protocol[T]):
    """Filter stage that is set up from a parameter mapping."""

    def configure(self, params) -> bool:
        """Validate parameters; False means the stage must not be used."""
        ...
