"""Tests for the value classifier.

Covers classify() across all four display types, custom wrapper defaults,
get_raw() unwrapping (nested wrappers, array envelopes, inherited fields),
and value_kind() with bool/int dispatch ordering.
"""

from __future__ import annotations

import pytest

from inspector_tree.tree.classifier import (
    INFINITY,
    NAN,
    UNDEFINED,
    classify,
    custom_state,
    get_raw,
    value_kind,
)
from inspector_tree.tree.nodes import DisplayType

# ---------------------------------------------------------------------------
# classify()
# ---------------------------------------------------------------------------


class TestClassify:
    @pytest.mark.parametrize("value", ["text", "", 0, 1.5, True, None, UNDEFINED])
    def test_primitives(self, value: object) -> None:
        result = classify(value)
        assert result.display_type is DisplayType.PRIMITIVE
        assert result.custom_tag is None

    @pytest.mark.parametrize("value", [[], [1, 2], (1,)])
    def test_arrays(self, value: object) -> None:
        assert classify(value).display_type is DisplayType.ARRAY

    @pytest.mark.parametrize("value", [{}, {"a": 1}])
    def test_objects(self, value: object) -> None:
        assert classify(value).display_type is DisplayType.OBJECT

    def test_custom_with_type(self) -> None:
        result = classify({"_custom": {"type": "map", "value": {}}})
        assert result.display_type is DisplayType.CUSTOM
        assert result.custom_tag == "map"

    def test_custom_without_type_defaults_to_string(self) -> None:
        result = classify({"_custom": {"value": "x"}})
        assert result.display_type is DisplayType.CUSTOM
        assert result.custom_tag == "string"

    def test_non_mapping_custom_marker_is_plain_object(self) -> None:
        """A ``_custom`` key that is not a mapping is not a wrapper."""
        assert classify({"_custom": "nope"}).display_type is DisplayType.OBJECT

    def test_unrecognized_type_falls_back_to_primitive(self) -> None:
        assert classify(object()).display_type is DisplayType.PRIMITIVE

    def test_is_pure(self) -> None:
        value = {"_custom": {"type": "set", "value": [1, 2]}}
        snapshot = repr(value)
        classify(value)
        assert repr(value) == snapshot


# ---------------------------------------------------------------------------
# custom_state()
# ---------------------------------------------------------------------------


class TestCustomState:
    def test_none_for_plain_values(self) -> None:
        assert custom_state({"a": 1}) is None
        assert custom_state(3) is None

    def test_defaults(self) -> None:
        state = custom_state({"_custom": {}})
        assert state is not None
        assert state.type is None
        assert state.tag == "string"
        assert state.abstract is False
        assert state.read_only is False
        assert state.fields == {}

    def test_display_text_preferred_over_display(self) -> None:
        state = custom_state({"_custom": {"display": "a", "displayText": "b"}})
        assert state is not None
        assert state.display == "b"

    def test_abstract_fields(self) -> None:
        state = custom_state({"_custom": {"type": "component", "fields": {"abstract": True}}})
        assert state is not None
        assert state.abstract is True

    def test_malformed_fields_ignored(self) -> None:
        state = custom_state({"_custom": {"fields": ["abstract"]}})
        assert state is not None
        assert state.fields == {}
        assert state.abstract is False


# ---------------------------------------------------------------------------
# get_raw()
# ---------------------------------------------------------------------------


class TestGetRaw:
    def test_plain_value_is_returned_as_is(self) -> None:
        value = {"a": 1}
        raw = get_raw(value)
        assert raw.value is value
        assert raw.inherit == {}
        assert raw.custom_type is None

    def test_unwraps_custom(self) -> None:
        raw = get_raw({"_custom": {"type": "set", "value": [1, 2], "fields": {"abstract": True}}})
        assert raw.value == [1, 2]
        assert raw.custom_type == "set"
        assert raw.inherit == {"abstract": True}

    def test_unwraps_nested_custom(self) -> None:
        inner = {"_custom": {"type": "map", "value": {"k": "v"}, "fields": {"x": 1}}}
        raw = get_raw({"_custom": {"type": "ref", "value": inner}})
        assert raw.value == {"k": "v"}
        assert raw.custom_type == "map"
        assert raw.inherit == {"x": 1}

    def test_nested_without_type_keeps_outer_type(self) -> None:
        inner = {"_custom": {"value": 5}}
        raw = get_raw({"_custom": {"type": "ref", "value": inner, "fields": {"y": 2}}})
        assert raw.value == 5
        assert raw.custom_type == "ref"
        assert raw.inherit == {"y": 2}

    def test_custom_without_type_has_no_custom_type(self) -> None:
        assert get_raw({"_custom": {"value": "x"}}).custom_type is None

    def test_unwraps_array_envelope(self) -> None:
        raw = get_raw({"_isArray": True, "items": ["a", "b"]})
        assert raw.value == ["a", "b"]


# ---------------------------------------------------------------------------
# value_kind()
# ---------------------------------------------------------------------------


class TestValueKind:
    @pytest.mark.parametrize(
        ("value", "kind"),
        [
            (None, "null"),
            (UNDEFINED, "null"),
            (INFINITY, "literal"),
            (NAN, "literal"),
            (True, "boolean"),
            (False, "boolean"),
            (0, "number"),
            (2.5, "number"),
            ("s", "string"),
            ([1], "array"),
            ({"a": 1}, "object"),
            ({"_custom": {"type": "date"}}, "custom"),
            (object(), "string"),
        ],
    )
    def test_kinds(self, value: object, kind: str) -> None:
        assert value_kind(value) == kind
