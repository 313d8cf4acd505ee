"""Tree normalizer: decomposes a container node into ordered child nodes.

Children carry stable, addressable keys built from the parent key:
- array element ``i`` of node ``a.b``   -> ``a.b.i``
- object property ``k`` of node ``a.b`` -> ``a.b.k``

Ordering rules:
- arrays keep index order (array order is meaningful, never re-sorted),
- plain objects are sorted lexically by key before truncation,
- custom-wrapped objects keep their iteration order.

Editability is inherited: a child is editable only when its parent is, and
never when the parent container is a set (set members may be added or removed
but not edited in place).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from inspector_tree.tree.classifier import classify, get_raw
from inspector_tree.tree.limits import DEFAULT_PAGE_SIZE
from inspector_tree.tree.nodes import DisplayType, InspectorNode

__all__ = ["field_count", "has_children", "normalize_children", "remaining_count"]

# Custom types whose members cannot be edited in place.
_UNEDITABLE_MEMBER_TYPES = frozenset({"set"})


def _child(parent: InspectorNode, local_key: Any, value: Any, editable: bool,
           custom_type: str | None, inherit: Mapping[str, Any]) -> InspectorNode:
    return InspectorNode(
        key=f"{parent.key}.{local_key}",
        value=value,
        editable=editable,
        state_type=parent.state_type,
        creating=False,
        custom_type=custom_type,
        inherit=inherit,
    )


def normalize_children(node: InspectorNode, limit: int = DEFAULT_PAGE_SIZE) -> list[InspectorNode]:
    """Return the ordered, truncated child nodes of ``node``.

    Args:
        node:  The parent node.
        limit: Maximum number of children to return. Defaults to 30.

    Returns:
        Child nodes in display order. Empty for primitives and for the
        degenerate case of a container holding itself.
    """
    raw = get_raw(node.value)
    value = raw.value
    editable = node.editable and raw.custom_type not in _UNEDITABLE_MEMBER_TYPES
    inherit = dict(raw.inherit)

    if isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    elif isinstance(value, Mapping):
        items = list(value.items())
        if classify(node.value).display_type is not DisplayType.CUSTOM:
            items.sort(key=lambda item: str(item[0]))
    else:
        return []

    # A container holding itself would recurse forever when expanded.
    if any(child is value for _, child in items):
        return []

    return [
        _child(node, k, v, editable, raw.custom_type, inherit)
        for k, v in items[: max(limit, 0)]
    ]


def field_count(node: InspectorNode) -> int:
    """Total number of elements or keys of ``node`` before truncation."""
    value = get_raw(node.value).value
    if isinstance(value, (list, tuple, Mapping)):
        return len(value)
    return 0


def remaining_count(node: InspectorNode, limit: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of children hidden behind the "show more" affordance."""
    return max(0, field_count(node) - limit)


def has_children(node: InspectorNode, limit: int = DEFAULT_PAGE_SIZE) -> bool:
    """True when ``node`` shows an expand affordance."""
    return bool(normalize_children(node, limit))
