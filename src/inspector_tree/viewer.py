"""StateViewer: one render pass over an inspector snapshot, plus user actions.

A render pass walks the root state fields depth-first and emits one TreeRow
per visible node. It only descends into rows the expansion tracker reports as
expanded, so the tree is decomposed lazily. An open draft is emitted as an
extra ``creating`` row after its parent's children.

Rows are recomputed from scratch on every pass. Rendering an unchanged
snapshot with unchanged expansion and session state yields a structurally
identical row list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from inspector_tree.config import SessionContext, ViewerConfig
from inspector_tree.editing.codec import CodecRegistry
from inspector_tree.editing.patch import EditPatch
from inspector_tree.editing.session import DraftState, EditingState, EditorSession
from inspector_tree.expansion import InMemoryExpansionTracker
from inspector_tree.formatter import NodeDisplay, format_node
from inspector_tree.protocols import EditTransport, ExpansionTracker
from inspector_tree.tree.limits import FieldLimits
from inspector_tree.tree.nodes import InspectorNode
from inspector_tree.tree.normalizer import normalize_children, remaining_count

__all__ = ["StateViewer", "TreeRow"]


@dataclass(frozen=True, slots=True)
class TreeRow:
    """One visible row of the rendered tree.

    Attributes:
        node:         The node shown on this row.
        depth:        Nesting depth, 0 for root fields.
        path_id:      ``"{depth}-{index}"`` key used with the expansion tracker.
        display:      Key label and value markup.
        has_children: Whether an expand affordance is shown.
        expanded:     Whether the row's children are shown.
        remaining:    Children hidden behind "show more".
        editing:      The open edit when this row is being edited.
        draft:        The open draft when this is the draft row.
    """

    node: InspectorNode
    depth: int
    path_id: str
    display: NodeDisplay
    has_children: bool
    expanded: bool
    remaining: int = 0
    editing: EditingState | None = None
    draft: DraftState | None = None


class StateViewer:
    """Renders inspector state fields as rows and routes user actions.

    Args:
        context:   Session context (inspector id, node id, edit switch).
        transport: Receives the patches produced by edits.
        tracker:   Expansion tracker. Defaults to an ``InMemoryExpansionTracker``.
        config:    Viewer configuration. Defaults to ``ViewerConfig()``.
        codecs:    Codec registry for edits. Defaults to ``default_registry()``.
    """

    def __init__(
        self,
        context: SessionContext,
        transport: EditTransport,
        tracker: ExpansionTracker | None = None,
        config: ViewerConfig | None = None,
        codecs: CodecRegistry | None = None,
    ) -> None:
        self.config = config or ViewerConfig()
        self.tracker: ExpansionTracker = tracker if tracker is not None else InMemoryExpansionTracker()
        self.limits = FieldLimits(self.config.page_size, self.config.limit_cache_size)
        self.session = EditorSession(context, transport, codecs=codecs, tracker=self.tracker)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, fields: Iterable[InspectorNode | Mapping[str, Any]]) -> list[TreeRow]:
        """Render root state fields into the list of visible rows.

        Args:
            fields: Root fields, as nodes or as runtime field mappings
                    (``key``, ``value``, ``editable``, ``stateType``, ...).

        Returns:
            Rows in display order.
        """
        rows: list[TreeRow] = []
        seen: set[str] = set()
        for index, field in enumerate(fields):
            node = field if isinstance(field, InspectorNode) else InspectorNode.from_field(field)
            self._render_node(node, 0, index, rows, seen)
        self.limits.retain(seen)
        return rows

    def _render_node(
        self,
        node: InspectorNode,
        depth: int,
        index: int,
        rows: list[TreeRow],
        seen: set[str],
    ) -> None:
        path_id = f"{depth}-{index}"
        seen.add(node.key)
        limit = self.limits.get(node.key)
        children = normalize_children(node, limit)
        expanded = self.tracker.is_expanded(path_id)

        rows.append(
            TreeRow(
                node=node,
                depth=depth,
                path_id=path_id,
                display=format_node(node, self.config),
                has_children=bool(children),
                expanded=expanded,
                remaining=remaining_count(node, limit) if children else 0,
                editing=self.session.editing if self.session.is_editing(node.key) else None,
            )
        )
        if not expanded:
            return

        for child_index, child in enumerate(children):
            self._render_node(child, depth + 1, child_index, rows, seen)

        draft = self.session.draft
        if draft.enable and draft.parent_key == node.key:
            draft_node = InspectorNode(
                key=f"{node.key}.{draft.key}",
                value=draft.value,
                editable=True,
                state_type=node.state_type,
                creating=True,
            )
            rows.append(
                TreeRow(
                    node=draft_node,
                    depth=depth + 1,
                    path_id=f"{depth + 1}-{len(children)}",
                    display=NodeDisplay(draft.key, ""),
                    has_children=False,
                    expanded=False,
                    draft=draft,
                )
            )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def toggle(self, path_id: str) -> None:
        """Expand or collapse a row; collapsing a draft's parent drops the draft."""
        collapsing = self.tracker.is_expanded(path_id)
        self.tracker.toggle(path_id)
        draft = self.session.draft
        if collapsing and draft.enable and draft.path_id == path_id:
            self.session.cancel_draft()

    def show_more(self, node: InspectorNode) -> int:
        """Reveal another page of ``node``'s children; returns the new limit."""
        return self.limits.show_more(node.key)

    def start_editing(self, row: TreeRow) -> EditingState:
        return self.session.start_editing(row.node)

    def submit_editing(self) -> EditPatch:
        return self.session.submit_editing()

    def cancel_editing(self) -> None:
        self.session.cancel_editing()

    def add_new_prop(self, row: TreeRow, kind: str = "string") -> DraftState:
        """Draft a new property under ``row``, expanding the row first."""
        return self.session.add_new_prop(row.node, kind, path_id=row.path_id)

    def submit_draft(self) -> EditPatch:
        return self.session.submit_draft()

    def cancel_draft(self) -> None:
        self.session.cancel_draft()
