"""Parameter specifications for threshold configuration.

Each recognised key is described by a ParamSpec that knows how to look
itself up in a plain parameter mapping and coerce the value to its type.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Literal

from gridmod.errors import InvalidParameterError


@dataclass(frozen=True)
class ParamSpec:
    """Specification for one named configuration parameter.

    Attributes:
        name: Key looked up in the parameter mapping
        kind: "float" for scalars, "string_list" for lists of layer names
        description: Human-readable description
    """

    name: str
    kind: Literal["float", "string_list"]
    description: str = ""

    def lookup(self, params: Mapping[str, Any]) -> Any:
        """Fetch and coerce this parameter.

        :param params: Parameter mapping supplied by the caller
        :returns: Coerced value, or None if the key is absent or None
        :raises InvalidParameterError: If the value has the wrong type
        """
        value = params.get(self.name)
        if value is None:
            return None
        if self.kind == "float":
            return self._as_float(value)
        return self._as_string_list(value)

    def _as_float(self, value: Any) -> float:
        # bool is a Real subclass but never a meaningful threshold
        if isinstance(value, bool) or not isinstance(value, Real | str):
            raise InvalidParameterError(self.name, value, "a number")
        try:
            return float(value)
        except (ValueError, OverflowError):
            raise InvalidParameterError(self.name, value, "a number") from None

    def _as_string_list(self, value: Any) -> tuple[str, ...]:
        # an ordered sequence, so layers are processed in the order given
        if isinstance(value, str | bytes) or not isinstance(value, Sequence):
            raise InvalidParameterError(self.name, value, "a list of layer names")
        names = tuple(value)
        if not all(isinstance(name, str) for name in names):
            raise InvalidParameterError(self.name, value, "a list of layer names")
        return names

    def __repr__(self) -> str:
        return f"ParamSpec({self.name}, {self.kind})"


@dataclass(frozen=True)
class ThresholdParams:
    """All parameters understood by the threshold filter."""

    lower_threshold: ParamSpec = ParamSpec(
        name="lower_threshold",
        kind="float",
        description="Replace valid cells with value < lower_threshold",
    )

    upper_threshold: ParamSpec = ParamSpec(
        name="upper_threshold",
        kind="float",
        description="Replace valid cells with value > upper_threshold",
    )

    set_to: ParamSpec = ParamSpec(
        name="set_to",
        kind="float",
        description="Replacement value written into violating cells",
    )

    threshold_types: ParamSpec = ParamSpec(
        name="threshold_types",
        kind="string_list",
        description="Names of the layers the threshold is applied to",
    )

    def get_spec(self, name: str) -> ParamSpec:
        """Get parameter spec by name.

        :raises AttributeError: If the parameter is not known
        """
        return getattr(self, name)

    def names(self) -> list[str]:
        return [f.name for f in fields(self)]


THRESHOLD_PARAMS = ThresholdParams()
