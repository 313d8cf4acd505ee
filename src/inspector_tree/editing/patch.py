"""EditPatch: the structured description of a single mutation.

A patch is what the viewer hands to the edit transport. Its dictionary form
matches what the inspected runtime expects on the wire::

    {
        "path": ["a", "b", "c"],
        "inspectorId": "components",
        "type": "data",
        "nodeId": "app:1",
        "state": {"newKey": "c", "type": "number", "value": 0},
    }

``state.remove`` is only present (and True) for removals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["EditPatch", "PatchState"]


@dataclass(frozen=True, slots=True)
class PatchState:
    """The ``state`` part of a patch.

    Attributes:
        new_key: Key of a newly added or renamed property; None for edits.
        type:    Type tag of the value.
        value:   Decoded value to write.
        remove:  True when the addressed property is to be deleted.
    """

    new_key: str | None
    type: str
    value: Any
    remove: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"newKey": self.new_key, "type": self.type, "value": self.value}
        if self.remove:
            data["remove"] = True
        return data


@dataclass(frozen=True, slots=True)
class EditPatch:
    """A single mutation addressed by path.

    Attributes:
        path:         Path segments of the addressed property.
        inspector_id: Inspector the state belongs to.
        type:         State type of the edited field.
        node_id:      Inspected instance owning the path.
        state:        What to write.
    """

    path: tuple[str, ...]
    inspector_id: str
    type: str
    node_id: str
    state: PatchState

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "inspectorId": self.inspector_id,
            "type": self.type,
            "nodeId": self.node_id,
            "state": self.state.to_dict(),
        }
