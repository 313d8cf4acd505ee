"""Value classifier: decides how a raw inspector value is displayed.

A raw value is one of:
- a custom wrapper ``{"_custom": {...}}`` marking special rendering/editing
  (Set, Map, function, component instance, ...),
- an array (list or tuple, or an ``{"_isArray": True, "items": [...]}`` envelope
  once unwrapped),
- an object (any other mapping),
- a primitive (everything else, including values of unrecognized type).

All functions here are pure: they never mutate the value they inspect.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from inspector_tree.tree.nodes import Classification, DisplayType, RawValue

__all__ = [
    "INFINITY",
    "NAN",
    "NEGATIVE_INFINITY",
    "UNDEFINED",
    "CustomState",
    "classify",
    "custom_state",
    "get_raw",
    "value_kind",
]

# Internal tokens used by the inspected runtime for values JSON cannot carry.
UNDEFINED = "__vue_devtool_undefined__"
INFINITY = "__vue_devtool_infinity__"
NEGATIVE_INFINITY = "__vue_devtool_negative_infinity__"
NAN = "__vue_devtool_nan__"

_NUMBER_TOKENS = frozenset({INFINITY, NEGATIVE_INFINITY, NAN})

# Tag reported for custom wrappers that do not declare a type.
DEFAULT_CUSTOM_TAG = "string"


@dataclass(frozen=True, slots=True)
class CustomState:
    """Parsed ``_custom`` wrapper with safe defaults for missing fields.

    Attributes:
        type:            Declared type tag, or None when the wrapper has none.
        value:           Wrapped value (may itself be a custom wrapper).
        display:         ``displayText`` (preferred) or ``display`` label.
        state_type_name: Optional type-name annotation.
        read_only:       True when the runtime forbids editing the value.
        fields:          Flags propagated to children (``abstract``, ...).
    """

    type: str | None = None
    value: Any = None
    display: str | None = None
    state_type_name: str | None = None
    read_only: bool = False
    fields: Mapping[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> str:
        """Type tag with the ``"string"`` default applied."""
        return self.type or DEFAULT_CUSTOM_TAG

    @property
    def abstract(self) -> bool:
        """True when the wrapper's children fully describe it."""
        return bool(self.fields.get("abstract", False))


def custom_state(value: Any) -> CustomState | None:
    """Return the parsed custom wrapper of ``value``, or None if it has none."""
    if not isinstance(value, Mapping):
        return None
    data = value.get("_custom")
    if not isinstance(data, Mapping):
        return None

    fields = data.get("fields")
    display = data.get("displayText")
    if display is None:
        display = data.get("display")
    return CustomState(
        type=data.get("type") or None,
        value=data.get("value"),
        display=None if display is None else str(display),
        state_type_name=data.get("stateTypeName"),
        read_only=bool(data.get("readOnly", False)),
        fields=fields if isinstance(fields, Mapping) else {},
    )


def classify(value: Any) -> Classification:
    """Classify a raw value into its display type.

    Args:
        value: Any raw snapshot value.

    Returns:
        A Classification. ``custom_tag`` is only set for custom values.
    """
    state = custom_state(value)
    if state is not None:
        return Classification(DisplayType.CUSTOM, state.tag)
    if isinstance(value, (list, tuple)):
        return Classification(DisplayType.ARRAY)
    if isinstance(value, Mapping):
        return Classification(DisplayType.OBJECT)
    return Classification(DisplayType.PRIMITIVE)


def get_raw(value: Any) -> RawValue:
    """Unwrap custom wrappers and array envelopes.

    Nested wrappers are unwrapped recursively; the innermost wrapper's value,
    fields and type take precedence when present.

    Args:
        value: Any raw snapshot value.

    Returns:
        A RawValue whose ``value`` is a plain primitive, list or mapping.
    """
    inherit: Mapping[str, Any] = {}
    custom_type: str | None = None

    state = custom_state(value)
    if state is not None:
        nested = get_raw(state.value) if custom_state(state.value) is not None else None
        if nested is not None:
            inherit = nested.inherit or state.fields
            value = nested.value if nested.value is not None else state.value
            custom_type = nested.custom_type or state.type
        else:
            inherit = state.fields
            value = state.value
            custom_type = state.type

    if isinstance(value, Mapping) and value.get("_isArray"):
        value = list(value.get("items") or [])

    return RawValue(value=value, inherit=dict(inherit), custom_type=custom_type)


def value_kind(value: Any) -> str:
    """Return a fine-grained kind tag used for styling hooks and type inference.

    CRITICAL: bool is checked before int because bool subclasses int.
    """
    if value is None or value == UNDEFINED:
        return "null"
    if isinstance(value, str) and value in _NUMBER_TOKENS:
        return "literal"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if custom_state(value) is not None:
        return "custom"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    return "string"
