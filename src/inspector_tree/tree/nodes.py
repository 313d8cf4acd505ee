"""InspectorNode dataclass and DisplayType StrEnum for inspector state trees.

Provides the foundational data types used by the classifier and normalizer to
turn a raw inspector snapshot into addressable tree positions.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any


class DisplayType(StrEnum):
    """Enumeration of the four display categories of a raw value.

    StrEnum values are the lowercased member names:
    - PRIMITIVE -> "primitive" : str, number, bool, None or anything unrecognized
    - ARRAY     -> "array"     : list or tuple
    - OBJECT    -> "object"    : mapping without a custom wrapper
    - CUSTOM    -> "custom"    : mapping carrying a ``_custom`` wrapper
    """

    PRIMITIVE = auto()
    ARRAY = auto()
    OBJECT = auto()
    CUSTOM = auto()


@dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying a raw value.

    Attributes:
        display_type: Which display category the value falls into.
        custom_tag:   The wrapper ``type`` for custom values (``"string"`` when
                      the wrapper declares none); None for every other category.
    """

    display_type: DisplayType
    custom_tag: str | None = None


@dataclass(frozen=True, slots=True)
class RawValue:
    """Unwrapped view of a node value.

    Attributes:
        value:       The underlying primitive, list or mapping.
        inherit:     Flags that propagate to every child of this value.
        custom_type: Custom type tag of the value, used for editability and
                     codec selection.
    """

    value: Any
    inherit: Mapping[str, Any] = field(default_factory=dict)
    custom_type: str | None = None


@dataclass(slots=True)
class InspectorNode:
    """One position in an inspector state tree.

    Attributes:
        key:             Dot-delimited path, unique within a snapshot. Child keys
                         are always ``parent.key + "." + local_key``.
        value:           Raw (possibly custom-wrapped) value.
        editable:        Whether the value may be edited in place.
        state_type:      Category tag copied into outbound edit patches.
        state_type_name: Optional human label shown next to the value.
        creating:        True only for a drafted field not yet submitted.
        custom_type:     Custom type of the container this node belongs to
                         (``"set"`` for set members).
        inherit:         Flags inherited from the parent container.
    """

    key: str
    value: Any = None
    editable: bool = True
    state_type: str = ""
    state_type_name: str | None = None
    creating: bool = False
    custom_type: str | None = None
    inherit: Mapping[str, Any] = field(default_factory=dict)

    @property
    def local_key(self) -> str:
        """The part of ``key`` after the last dot."""
        return self.key.rsplit(".", 1)[-1]

    @property
    def path(self) -> list[str]:
        """The key split into path segments."""
        return self.key.split(".")

    @classmethod
    def from_field(cls, data: Mapping[str, Any]) -> InspectorNode:
        """Build a root node from a state field mapping as sent by the runtime.

        Accepts both camelCase (``stateType``) and snake_case (``state_type``)
        spellings. A missing ``editable`` flag means the field is read-only.
        """
        return cls(
            key=str(data["key"]),
            value=data.get("value"),
            editable=bool(data.get("editable", False)),
            state_type=str(data.get("stateType", data.get("state_type", ""))),
            state_type_name=data.get("stateTypeName", data.get("state_type_name")),
        )
