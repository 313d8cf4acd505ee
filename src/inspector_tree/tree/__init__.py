"""Tree subpackage: inspector state classification and normalization.

Re-exports the public API for the tree module:
- InspectorNode: dataclass representing one position in the tree
- DisplayType: StrEnum of the four display categories
- classify / get_raw / custom_state: the value classifier
- normalize_children / field_count / remaining_count / has_children: the normalizer
- FieldLimits: per-node "show more" limit store
"""

from inspector_tree.tree.classifier import (
    CustomState,
    classify,
    custom_state,
    get_raw,
    value_kind,
)
from inspector_tree.tree.limits import FieldLimits
from inspector_tree.tree.nodes import Classification, DisplayType, InspectorNode, RawValue
from inspector_tree.tree.normalizer import (
    field_count,
    has_children,
    normalize_children,
    remaining_count,
)

__all__ = [
    "Classification",
    "CustomState",
    "DisplayType",
    "FieldLimits",
    "InspectorNode",
    "RawValue",
    "classify",
    "custom_state",
    "field_count",
    "get_raw",
    "has_children",
    "normalize_children",
    "remaining_count",
    "value_kind",
]
