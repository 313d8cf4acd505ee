"""Editing subpackage: value codecs, edit patches and the edit/draft session."""

from inspector_tree.editing.codec import (
    Codec,
    CodecRegistry,
    default_registry,
    runtime_type,
    to_edit,
    to_submit,
)
from inspector_tree.editing.patch import EditPatch, PatchState
from inspector_tree.editing.session import (
    DraftState,
    EditingState,
    EditorSession,
    can_add_prop,
    can_remove,
    is_value_editable,
)

__all__ = [
    "Codec",
    "CodecRegistry",
    "DraftState",
    "EditPatch",
    "EditingState",
    "EditorSession",
    "PatchState",
    "can_add_prop",
    "can_remove",
    "default_registry",
    "is_value_editable",
    "runtime_type",
    "to_edit",
    "to_submit",
]
