"""Tests for normalize_children and the field counting helpers.

Covers key construction, lexical sorting of plain objects, iteration order of
custom objects, truncation, editability inheritance (set members), the
self-reference guard, and has_children/field_count/remaining_count.
"""

from __future__ import annotations

from typing import Any

import pytest

from inspector_tree.tree.normalizer import (
    field_count,
    has_children,
    normalize_children,
    remaining_count,
)
from inspector_tree.tree.nodes import InspectorNode


def _node(value: Any, key: str = "root", **kwargs: Any) -> InspectorNode:
    return InspectorNode(key=key, value=value, **kwargs)


# ---------------------------------------------------------------------------
# Keys and ordering
# ---------------------------------------------------------------------------


class TestKeys:
    def test_object_child_keys_extend_parent_key(self) -> None:
        value = {"x": 1, "y": 2, "z": 3}
        children = normalize_children(_node(value, key="a.b"))
        assert {c.key for c in children} == {f"a.b.{k}" for k in value}

    def test_array_child_keys_use_indices(self) -> None:
        children = normalize_children(_node(["p", "q"], key="list"))
        assert [c.key for c in children] == ["list.0", "list.1"]
        assert [c.value for c in children] == ["p", "q"]

    def test_child_values_are_the_raw_values(self) -> None:
        inner = {"deep": True}
        children = normalize_children(_node({"inner": inner}))
        assert children[0].value is inner


class TestOrdering:
    def test_plain_object_sorted_by_key(self) -> None:
        children = normalize_children(_node({"b": 1, "a": 2}))
        assert [c.local_key for c in children] == ["a", "b"]

    def test_custom_object_keeps_iteration_order(self) -> None:
        value = {"_custom": {"type": "map", "value": {"b": 1, "a": 2}}}
        children = normalize_children(_node(value))
        assert [c.local_key for c in children] == ["b", "a"]

    def test_array_keeps_index_order(self) -> None:
        children = normalize_children(_node([3, 1, 2]))
        assert [c.value for c in children] == [3, 1, 2]

    def test_sorting_applies_before_truncation(self) -> None:
        value = {"d": 0, "c": 0, "b": 0, "a": 0}
        children = normalize_children(_node(value), limit=2)
        assert [c.local_key for c in children] == ["a", "b"]

    def test_non_string_keys_sort_without_error(self) -> None:
        children = normalize_children(_node({2: "b", 1: "a"}))
        assert [c.key for c in children] == ["root.1", "root.2"]


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


class TestTruncation:
    def test_45_elements_limit_30(self) -> None:
        node = _node(list(range(45)))
        assert len(normalize_children(node, limit=30)) == 30
        assert remaining_count(node, limit=30) == 15

    def test_after_show_more_all_shown(self) -> None:
        node = _node(list(range(45)))
        assert len(normalize_children(node, limit=60)) == 45
        assert remaining_count(node, limit=60) == 0

    def test_default_limit_is_30(self) -> None:
        assert len(normalize_children(_node(list(range(100))))) == 30

    def test_field_count_counts_before_truncation(self) -> None:
        assert field_count(_node({str(i): i for i in range(40)})) == 40

    def test_field_count_of_primitive_is_zero(self) -> None:
        assert field_count(_node("text")) == 0

    def test_field_count_of_custom_set(self) -> None:
        assert field_count(_node({"_custom": {"type": "set", "value": [1, 2, 3]}})) == 3


# ---------------------------------------------------------------------------
# Inheritance
# ---------------------------------------------------------------------------


class TestInheritance:
    def test_editable_inherited(self) -> None:
        assert all(c.editable for c in normalize_children(_node({"a": 1}, editable=True)))
        assert not any(c.editable for c in normalize_children(_node({"a": 1}, editable=False)))

    def test_set_members_never_editable(self) -> None:
        value = {"_custom": {"type": "set", "value": [1, 2]}}
        children = normalize_children(_node(value, editable=True))
        assert len(children) == 2
        assert all(c.editable is False for c in children)
        assert all(c.custom_type == "set" for c in children)

    def test_map_members_editable(self) -> None:
        value = {"_custom": {"type": "map", "value": {"k": 1}}}
        children = normalize_children(_node(value, editable=True))
        assert children[0].editable is True

    def test_state_type_and_fields_propagate(self) -> None:
        value = {"_custom": {"type": "component", "value": {"a": 1}, "fields": {"abstract": True}}}
        child = normalize_children(_node(value, state_type="setup"))[0]
        assert child.state_type == "setup"
        assert child.inherit == {"abstract": True}
        assert child.creating is False

    def test_grandchildren_of_set_stay_uneditable(self) -> None:
        value = {"_custom": {"type": "set", "value": [{"x": 1}]}}
        member = normalize_children(_node(value, editable=True))[0]
        grandchild = normalize_children(member)[0]
        assert grandchild.editable is False


# ---------------------------------------------------------------------------
# Degenerate values and has_children
# ---------------------------------------------------------------------------


class TestDegenerate:
    @pytest.mark.parametrize("value", ["x", 1, None, True])
    def test_primitives_have_no_children(self, value: Any) -> None:
        assert normalize_children(_node(value)) == []
        assert has_children(_node(value)) is False

    def test_self_referencing_list_has_no_children(self) -> None:
        value: list[Any] = [1]
        value.append(value)
        assert normalize_children(_node(value)) == []

    def test_self_referencing_dict_has_no_children(self) -> None:
        value: dict[str, Any] = {}
        value["me"] = value
        assert normalize_children(_node(value)) == []

    def test_empty_containers_have_no_children(self) -> None:
        assert has_children(_node([])) is False
        assert has_children(_node({})) is False

    def test_container_has_children(self) -> None:
        assert has_children(_node({"a": 1})) is True

    def test_custom_primitive_has_no_children(self) -> None:
        assert has_children(_node({"_custom": {"type": "function", "value": "f()"}})) is False

    def test_normalization_is_deterministic(self) -> None:
        node = _node({"b": [1, 2], "a": {"c": 3}})
        assert normalize_children(node) == normalize_children(node)
