"""Display formatter: renders an InspectorNode into a key label and value markup.

Formatting is presentation-only. It never mutates the underlying value and can
be re-derived at any time from the node alone.

Value markup priority:
1. A state type name equal to the reactive sentinel is shown alone.
2. An abstract custom wrapper shows an empty value slot.
3. Otherwise the formatted scalar, wrapped in a span tagged with its kind, with
   the state type name appended in a de-emphasized span.
"""

from __future__ import annotations

import html
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from inspector_tree.config import ViewerConfig
from inspector_tree.tree.classifier import (
    INFINITY,
    NAN,
    NEGATIVE_INFINITY,
    UNDEFINED,
    classify,
    custom_state,
    value_kind,
)
from inspector_tree.tree.nodes import DisplayType, InspectorNode

__all__ = ["NodeDisplay", "format_node", "format_value"]

_TOKEN_TEXT = {
    UNDEFINED: "undefined",
    INFINITY: "Infinity",
    NEGATIVE_INFINITY: "-Infinity",
    NAN: "NaN",
}

# "[native Type text<>extra]" strings describe runtime natives; only the text is shown.
_NATIVE_PREFIX = "[native "
_NATIVE_TYPE_RE = re.compile(r"\w+")

# "[object Type]" strings only show the type name.
_RAW_TYPE_RE = re.compile(r"^\[object (\w+)\]$")

_DEFAULT_CONFIG = ViewerConfig()


@dataclass(frozen=True, slots=True)
class NodeDisplay:
    """Text shown for one tree row.

    Attributes:
        key_label:    Local name of the node (never the full path).
        value_markup: HTML fragment for the value slot; may be empty.
    """

    key_label: str
    value_markup: str


def _format_number(value: int | float) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def _native_text(value: str) -> str | None:
    """Displayed text of a native description, or None for other strings.

    Parsed with partition rather than a regex so that arbitrary snapshot
    strings are handled in linear time.
    """
    if not (value.startswith(_NATIVE_PREFIX) and value.endswith("]")):
        return None
    type_name, sep, rest = value[len(_NATIVE_PREFIX) : -1].partition(" ")
    if not sep or not _NATIVE_TYPE_RE.fullmatch(type_name):
        return None
    return rest.partition("<>")[0]


def format_value(value: Any, quotes: bool = False) -> str:
    """Format a raw value as a short, HTML-escaped display string.

    Args:
        value:  Any raw snapshot value.
        quotes: Wrap plain strings in quote spans.

    Returns:
        The display string. Containers are summarized, never expanded.
    """
    if isinstance(value, str) and value in _TOKEN_TEXT:
        return _TOKEN_TEXT[value]

    state = custom_state(value)
    if state is not None:
        if custom_state(state.value) is not None:
            nested = format_value(state.value, quotes)
            if nested:
                return nested
        if state.display is not None:
            return html.escape(state.display)
        return format_value(state.value, quotes)

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, (list, tuple)):
        return f"Array[{len(value)}]"
    if isinstance(value, Mapping):
        if value.get("_isArray"):
            return f"Array[{len(value.get('items') or [])}]"
        return "Object" if value else "Object (empty)"
    if isinstance(value, str):
        native = _native_text(value)
        if native is not None:
            return html.escape(native)
        raw_type = _RAW_TYPE_RE.match(value)
        if raw_type:
            return html.escape(raw_type.group(1))
        if quotes:
            return f'<span>"</span>{html.escape(value)}<span>"</span>'
        return html.escape(value)
    return html.escape(str(value))


def format_node(node: InspectorNode, config: ViewerConfig | None = None) -> NodeDisplay:
    """Render ``node`` into its key label and value markup.

    Args:
        node:   The node to render.
        config: Viewer configuration (for the reactive sentinel). Defaults to
                ``ViewerConfig()`` when None.

    Returns:
        A NodeDisplay.
    """
    config = config or _DEFAULT_CONFIG
    key_label = node.local_key
    state = custom_state(node.value)

    type_name = node.state_type_name
    if type_name is None and state is not None:
        type_name = state.state_type_name

    if type_name is not None and type_name == config.reactive_sentinel:
        return NodeDisplay(key_label, type_name)
    if state is not None and state.abstract:
        return NodeDisplay(key_label, "")

    displayed = format_value(node.value)
    classification = classify(node.value)
    if classification.display_type is DisplayType.CUSTOM:
        text = f'"{displayed}"' if state is not None and state.type is None else displayed
        css = f"{classification.custom_tag}-state-type custom-type"
    else:
        text = displayed
        css = f"{value_kind(node.value)}-state-type"
    if text == "":
        text = '""'

    markup = f'<span class="{css}">{text}</span>'
    if type_name:
        markup = f'{markup} <span class="text-gray-500">({html.escape(type_name)})</span>'
    return NodeDisplay(key_label, markup)
