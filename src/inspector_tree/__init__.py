"""inspector-tree - lazily-expanded inspector state trees with in-place editing."""

from __future__ import annotations

from inspector_tree.config import SessionContext, ViewerConfig
from inspector_tree.editing import (
    CodecRegistry,
    EditorSession,
    EditPatch,
    PatchState,
    to_edit,
    to_submit,
)
from inspector_tree.errors import CodecError, EditNotAllowedError, InspectorTreeError
from inspector_tree.expansion import InMemoryExpansionTracker
from inspector_tree.formatter import NodeDisplay, format_node, format_value
from inspector_tree.tree import (
    DisplayType,
    InspectorNode,
    classify,
    get_raw,
    normalize_children,
)
from inspector_tree.viewer import StateViewer, TreeRow

__version__: str = "0.1.0"
__all__: list[str] = [
    "CodecError",
    "CodecRegistry",
    "DisplayType",
    "EditNotAllowedError",
    "EditPatch",
    "EditorSession",
    "InMemoryExpansionTracker",
    "InspectorNode",
    "InspectorTreeError",
    "NodeDisplay",
    "PatchState",
    "SessionContext",
    "StateViewer",
    "TreeRow",
    "ViewerConfig",
    "classify",
    "format_node",
    "format_value",
    "get_raw",
    "normalize_children",
    "to_edit",
    "to_submit",
]
