"""EditorSession: the edit/draft protocol of the inspector state viewer.

Each field moves through ``Viewing -> Editing -> (Submitted | Cancelled) ->
Viewing``. A session owns exactly one editing slot and one draft slot:
- opening an edit on a field closes any other open edit first, without sending
  a patch for it,
- opening a draft discards any previous draft the same way.

Submitting decodes the edited text through the type-aware codec *before*
anything is sent. A decode failure raises ``CodecError`` and leaves the
session open with its text intact, so nothing is ever submitted half-decoded.
Cancelling always succeeds and never talks to the transport.

Drafting a new property forces its parent row expanded (when a tracker and
path id are available), so an enabled draft always has a visible parent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from inspector_tree.config import SessionContext
from inspector_tree.editing.codec import CodecRegistry, default_registry, runtime_type
from inspector_tree.editing.patch import EditPatch, PatchState
from inspector_tree.errors import EditNotAllowedError
from inspector_tree.protocols import EditTransport, ExpansionTracker
from inspector_tree.tree.classifier import custom_state, get_raw, value_kind
from inspector_tree.tree.nodes import InspectorNode

__all__ = [
    "DRAFT_INITIAL_TEXT",
    "DraftState",
    "EditingState",
    "EditorSession",
    "can_add_prop",
    "can_remove",
    "is_value_editable",
]

logger = logging.getLogger(__name__)

# Initial edit text of a drafted property, by kind.
DRAFT_INITIAL_TEXT: Mapping[str, str] = {
    "string": '""',
    "number": "0",
    "boolean": "false",
    "null": "null",
    "object": "{}",
    "array": "[]",
}

_EDITABLE_KINDS = frozenset({"string", "number", "boolean", "null", "literal", "array", "object"})


@dataclass(slots=True)
class EditingState:
    """The single in-place edit of a session.

    Attributes:
        key:          Key of the field being edited.
        editing_type: State type preserved into the submitted patch.
        editing_text: Current text buffer.
        node_id:      Inspected instance owning the field.
        custom_type:  Custom type selecting the codec.
        editing:      Always True while the state exists.
    """

    key: str
    editing_type: str
    editing_text: str
    node_id: str
    custom_type: str | None = None
    editing: bool = True


@dataclass(slots=True)
class DraftState:
    """The single drafted property of a session.

    Attributes:
        enable:     True while a draft is open.
        key:        Key typed for the new property.
        value:      Text buffer holding the new value.
        parent_key: Key of the node receiving the property.
        kind:       Kind the draft was opened with.
        path_id:    Render-position key of the parent row.
    """

    enable: bool = False
    key: str = ""
    value: str = ""
    parent_key: str | None = None
    kind: str | None = None
    path_id: str | None = None


def is_value_editable(
    node: InspectorNode,
    context: SessionContext,
    codecs: CodecRegistry | None = None,
) -> bool:
    """True when ``node``'s value may be edited in place.

    Primitives and plain containers are editable, containers as JSON text.
    Custom values only when a codec is registered for their type and the
    runtime did not mark them read-only.
    """
    if context.disable_edit or not node.editable or node.creating:
        return False
    state = custom_state(node.value)
    if state is not None:
        registry = codecs or default_registry()
        return not state.read_only and state.type in registry
    return value_kind(node.value) in _EDITABLE_KINDS


def can_add_prop(node: InspectorNode, context: SessionContext) -> bool:
    """True when new properties (or set members) may be drafted under ``node``."""
    if context.disable_edit or not node.editable or node.creating:
        return False
    state = custom_state(node.value)
    if state is not None and state.read_only:
        return False
    return isinstance(get_raw(node.value).value, (list, tuple, Mapping))


def can_remove(node: InspectorNode, context: SessionContext) -> bool:
    """True when ``node`` may be removed from its parent container.

    Set members are removable even though they are never editable in place.
    Root fields have no parent container and are never removable.
    """
    if context.disable_edit or node.creating or "." not in node.key:
        return False
    return node.editable or node.custom_type == "set"


class EditorSession:
    """Single-writer owner of the editing and draft slots.

    Args:
        context:   Session context supplying ids and the global edit switch.
        transport: Where finished patches are sent.
        codecs:    Codec registry. Defaults to ``default_registry()``.
        tracker:   Expansion tracker used to open a parent before drafting.
    """

    def __init__(
        self,
        context: SessionContext,
        transport: EditTransport,
        codecs: CodecRegistry | None = None,
        tracker: ExpansionTracker | None = None,
    ) -> None:
        self.context = context
        self._transport = transport
        self._codecs = codecs or default_registry()
        self._tracker = tracker
        self._editing: EditingState | None = None
        self._draft = DraftState()
        self._draft_parent: InspectorNode | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def editing(self) -> EditingState | None:
        """The open in-place edit, or None."""
        return self._editing

    @property
    def draft(self) -> DraftState:
        """The draft slot (``enable`` is False when no draft is open)."""
        return self._draft

    @property
    def codecs(self) -> CodecRegistry:
        return self._codecs

    def is_editing(self, key: str) -> bool:
        return self._editing is not None and self._editing.key == key

    # ------------------------------------------------------------------
    # In-place editing
    # ------------------------------------------------------------------

    def start_editing(self, node: InspectorNode) -> EditingState:
        """Enter editing on ``node``, closing any other open edit first.

        Raises:
            EditNotAllowedError: When the value is not editable.
        """
        if not is_value_editable(node, self.context, self._codecs):
            raise EditNotAllowedError(f"Field {node.key!r} is not editable")
        if self._editing is not None:
            if self._editing.key == node.key:
                return self._editing
            logger.debug(f"Closing stale edit on {self._editing.key!r} without submitting")
            self._editing = None

        raw = get_raw(node.value)
        self._editing = EditingState(
            key=node.key,
            editing_type=node.state_type,
            editing_text=self._codecs.to_edit(raw.value, raw.custom_type),
            node_id=self.context.node_id,
            custom_type=raw.custom_type,
        )
        logger.debug(f"Editing {node.key!r}")
        return self._editing

    def update_text(self, text: str) -> None:
        self._require_editing().editing_text = text

    def cancel_editing(self) -> None:
        """Discard the open edit, if any. Never contacts the transport."""
        if self._editing is not None:
            logger.debug(f"Cancelled edit on {self._editing.key!r}")
        self._editing = None

    def submit_editing(self) -> EditPatch:
        """Decode the edit buffer, send the patch and close the edit.

        Raises:
            EditNotAllowedError: When no edit is open.
            CodecError: When the buffer does not decode; the edit stays open.
        """
        state = self._require_editing()
        value = self._codecs.to_submit(state.editing_text, state.custom_type)
        patch = EditPatch(
            path=tuple(state.key.split(".")),
            inspector_id=self.context.inspector_id,
            type=state.editing_type,
            node_id=state.node_id,
            state=PatchState(new_key=None, type=state.editing_type, value=value),
        )
        self._send(patch)
        self._editing = None
        return patch

    # ------------------------------------------------------------------
    # Drafting new properties
    # ------------------------------------------------------------------

    def add_new_prop(
        self,
        parent: InspectorNode,
        kind: str = "string",
        path_id: str | None = None,
    ) -> DraftState:
        """Open a draft for a new property under ``parent``.

        Any open draft is discarded first. The parent row is expanded through
        the tracker before the draft opens. Array-like parents get the next
        index as the prefilled key.

        Raises:
            ValueError: For an unknown ``kind``.
            EditNotAllowedError: When ``parent`` does not accept new properties.
        """
        if kind not in DRAFT_INITIAL_TEXT:
            msg = f"kind must be one of {sorted(DRAFT_INITIAL_TEXT)}, got {kind!r}"
            raise ValueError(msg)
        if not can_add_prop(parent, self.context):
            raise EditNotAllowedError(f"Field {parent.key!r} does not accept new properties")

        if self._draft.enable:
            logger.debug(f"Discarding stale draft under {self._draft.parent_key!r}")
            self.cancel_draft()

        if path_id is not None and self._tracker is not None and not self._tracker.is_expanded(path_id):
            self._tracker.toggle(path_id)

        raw_value = get_raw(parent.value).value
        key = str(len(raw_value)) if isinstance(raw_value, (list, tuple)) else ""
        self._draft = DraftState(
            enable=True,
            key=key,
            value=DRAFT_INITIAL_TEXT[kind],
            parent_key=parent.key,
            kind=kind,
            path_id=path_id,
        )
        self._draft_parent = parent
        logger.debug(f"Drafting new {kind} property under {parent.key!r}")
        return self._draft

    def update_draft(self, key: str | None = None, value: str | None = None) -> None:
        draft = self._require_draft()
        if key is not None:
            draft.key = key
        if value is not None:
            draft.value = value

    def cancel_draft(self) -> None:
        """Clear the draft slot. Never contacts the transport."""
        self._draft = DraftState()
        self._draft_parent = None

    def submit_draft(self) -> EditPatch:
        """Decode the draft, send it as a new-property patch and clear the slot.

        The value type is inferred from the decoded value, not from the
        parent's declared type.

        Raises:
            EditNotAllowedError: When no draft is open or its key is empty.
            CodecError: When the draft value does not decode; the draft stays open.
        """
        draft = self._require_draft()
        parent = self._draft_parent
        if parent is None:
            raise EditNotAllowedError("No draft is open")
        if not draft.key:
            raise EditNotAllowedError("A new property needs a key")

        value = self._codecs.to_submit(draft.value)
        patch = EditPatch(
            path=(*parent.key.split("."), draft.key),
            inspector_id=self.context.inspector_id,
            type=parent.state_type,
            node_id=self.context.node_id,
            state=PatchState(new_key=draft.key, type=runtime_type(value), value=value),
        )
        self._send(patch)
        self.cancel_draft()
        return patch

    # ------------------------------------------------------------------
    # Quick actions
    # ------------------------------------------------------------------

    def toggle_boolean(self, node: InspectorNode) -> EditPatch:
        """Flip a boolean field."""
        value = self._editable_raw(node)
        if not isinstance(value, bool):
            raise EditNotAllowedError(f"Field {node.key!r} is not a boolean")
        return self._send_value(node, not value)

    def increment(self, node: InspectorNode, delta: int | float = 1) -> EditPatch:
        """Add ``delta`` to a numeric field."""
        value = self._editable_raw(node)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EditNotAllowedError(f"Field {node.key!r} is not a number")
        return self._send_value(node, value + delta)

    def remove_field(self, node: InspectorNode) -> EditPatch:
        """Remove ``node`` from its parent container."""
        if not can_remove(node, self.context):
            raise EditNotAllowedError(f"Field {node.key!r} cannot be removed")
        raw = get_raw(node.value)
        patch = EditPatch(
            path=tuple(node.path),
            inspector_id=self.context.inspector_id,
            type=node.state_type,
            node_id=self.context.node_id,
            state=PatchState(new_key=None, type=runtime_type(raw.value), value=None, remove=True),
        )
        self._send(patch)
        return patch

    def rename_field(self, node: InspectorNode, new_key: str) -> EditPatch:
        """Move ``node``'s value to ``new_key`` within the same parent."""
        if not new_key:
            raise EditNotAllowedError("A renamed property needs a key")
        if self.context.disable_edit or not node.editable or "." not in node.key:
            raise EditNotAllowedError(f"Field {node.key!r} cannot be renamed")
        raw = get_raw(node.value)
        patch = EditPatch(
            path=tuple(node.path),
            inspector_id=self.context.inspector_id,
            type=node.state_type,
            node_id=self.context.node_id,
            state=PatchState(new_key=new_key, type=runtime_type(raw.value), value=raw.value),
        )
        self._send(patch)
        return patch

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_editing(self) -> EditingState:
        if self._editing is None:
            raise EditNotAllowedError("No field is being edited")
        return self._editing

    def _require_draft(self) -> DraftState:
        if not self._draft.enable:
            raise EditNotAllowedError("No draft is open")
        return self._draft

    def _editable_raw(self, node: InspectorNode) -> Any:
        if not is_value_editable(node, self.context, self._codecs):
            raise EditNotAllowedError(f"Field {node.key!r} is not editable")
        return get_raw(node.value).value

    def _send_value(self, node: InspectorNode, value: Any) -> EditPatch:
        patch = EditPatch(
            path=tuple(node.path),
            inspector_id=self.context.inspector_id,
            type=node.state_type,
            node_id=self.context.node_id,
            state=PatchState(new_key=None, type=node.state_type, value=value),
        )
        self._send(patch)
        return patch

    def _send(self, patch: EditPatch) -> None:
        logger.debug(f"Sending patch for {'.'.join(patch.path)!r}")
        self._transport.send(patch)
