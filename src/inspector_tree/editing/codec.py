"""Type-directed value <-> text codec used while editing.

``to_edit`` turns a raw value into the text shown in an edit box and
``to_submit`` decodes edited text back into a value. Both are keyed by the
value's custom type tag, so Set, Map, BigInt or Date values get a textual form
suited to them while everything else round-trips through JSON.

The default JSON codec writes the runtime's internal tokens as bare
``undefined`` / ``Infinity`` / ``-Infinity`` / ``NaN`` words and maps those
words back to tokens when decoding. Words inside string literals are never
touched.

New codecs plug in through ``CodecRegistry.register`` without touching any
tree logic::

    registry = default_registry()
    registry.register("color", ColorCodec())
    registry.to_edit("#fff", "color")
"""

from __future__ import annotations

import json
import logging
import math
import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from inspector_tree.errors import CodecError
from inspector_tree.tree.classifier import INFINITY, NAN, NEGATIVE_INFINITY, UNDEFINED

__all__ = [
    "BigIntCodec",
    "Codec",
    "CodecRegistry",
    "DateCodec",
    "JsonCodec",
    "MapCodec",
    "SetCodec",
    "default_registry",
    "runtime_type",
    "to_edit",
    "to_submit",
]

logger = logging.getLogger(__name__)

_TOKEN_WORDS = {
    UNDEFINED: "undefined",
    INFINITY: "Infinity",
    NEGATIVE_INFINITY: "-Infinity",
    NAN: "NaN",
}
_WORD_TOKENS = {word: token for token, word in _TOKEN_WORDS.items()}

# A JSON string literal (group 1) or a bare token word (group 2).
# -Infinity is listed before Infinity so the sign is consumed with the word.
_STRING_OR_WORD = re.compile(r'("(?:[^"\\]|\\.)*")|(-Infinity|Infinity|NaN|undefined)')
_STRING_LITERAL = re.compile(r'"(?:[^"\\]|\\.)*"')

_BIGINT_RE = re.compile(r"[+-]?\d+")


@runtime_checkable
class Codec(Protocol):
    """Structural protocol for a value <-> text codec."""

    def to_edit(self, value: Any) -> str: ...

    def to_submit(self, text: str) -> Any: ...


def _tokenize(value: Any) -> Any:
    """Replace non-finite floats (recursively) with the runtime's tokens."""
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return NAN
        return INFINITY if value > 0 else NEGATIVE_INFINITY
    if isinstance(value, (list, tuple)):
        return [_tokenize(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _tokenize(item) for key, item in value.items()}
    return value


class JsonCodec:
    """Default codec: JSON text with bare words for the internal tokens.

    Native non-finite floats are written as their token words too, so they
    decode to the tokens rather than back to floats.
    """

    def to_edit(self, value: Any) -> str:
        try:
            text = json.dumps(_tokenize(value), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            raise CodecError(f"Value of type {type(value).__name__} cannot be edited as text") from exc

        def _unquote(match: re.Match[str]) -> str:
            literal = match.group(0)
            return _TOKEN_WORDS.get(literal[1:-1], literal)

        return _STRING_LITERAL.sub(_unquote, text)

    def to_submit(self, text: str) -> Any:
        def _quote(match: re.Match[str]) -> str:
            if match.group(1) is not None:
                return match.group(1)
            return json.dumps(_WORD_TOKENS[match.group(2)])

        try:
            return json.loads(_STRING_OR_WORD.sub(_quote, text))
        except json.JSONDecodeError as exc:
            raise CodecError(f"Invalid value: {exc.msg} at position {exc.pos}") from exc


class BigIntCodec:
    """Arbitrary-precision integers, carried as decimal strings.

    Accepts an optional trailing ``n`` (``123n``) when decoding.
    """

    def to_edit(self, value: Any) -> str:
        return str(value)

    def to_submit(self, text: str) -> str:
        stripped = text.strip()
        if stripped.endswith("n"):
            stripped = stripped[:-1]
        if not _BIGINT_RE.fullmatch(stripped):
            raise CodecError(f"Invalid bigint: {text!r}")
        return str(int(stripped))


class DateCodec:
    """ISO-8601 date strings; the edited text is validated, then kept verbatim."""

    def to_edit(self, value: Any) -> str:
        return str(value)

    def to_submit(self, text: str) -> str:
        stripped = text.strip()
        if len(stripped) >= 2 and stripped[0] == stripped[-1] == '"':
            stripped = stripped[1:-1]
        try:
            # fromisoformat only accepts a trailing Z from Python 3.11 on.
            datetime.fromisoformat(stripped)
        except ValueError as exc:
            raise CodecError(f"Invalid date: {text!r}") from exc
        return stripped


class SetCodec(JsonCodec):
    """Sets are edited as JSON arrays; duplicates are dropped, first one wins."""

    def to_submit(self, text: str) -> list[Any]:
        decoded = super().to_submit(text)
        if not isinstance(decoded, list):
            raise CodecError("A set must be written as a JSON array")
        members: list[Any] = []
        for item in decoded:
            if item not in members:
                members.append(item)
        return members


class MapCodec(JsonCodec):
    """Maps are edited as JSON objects."""

    def to_submit(self, text: str) -> dict[str, Any]:
        decoded = super().to_submit(text)
        if not isinstance(decoded, dict):
            raise CodecError("A map must be written as a JSON object")
        return decoded


class CodecRegistry:
    """Codec lookup table keyed by custom type tag.

    Tags without a registered codec (and values without a custom type) use
    the default codec.

    Args:
        codecs:  Initial tag -> codec mapping.
        default: Fallback codec. Defaults to ``JsonCodec()``.
    """

    def __init__(
        self,
        codecs: Mapping[str, Codec] | None = None,
        default: Codec | None = None,
    ) -> None:
        self._codecs: dict[str, Codec] = dict(codecs or {})
        self._default: Codec = default or JsonCodec()

    def register(self, tag: str, codec: Codec) -> None:
        if not isinstance(codec, Codec):
            msg = f"codec for {tag!r} must define to_edit() and to_submit()"
            raise TypeError(msg)
        self._codecs[tag] = codec

    def get(self, custom_type: str | None) -> Codec:
        if custom_type is None:
            return self._default
        return self._codecs.get(custom_type, self._default)

    def __contains__(self, custom_type: object) -> bool:
        return custom_type in self._codecs

    def to_edit(self, value: Any, custom_type: str | None = None) -> str:
        """Encode ``value`` into editable text for its custom type."""
        return self.get(custom_type).to_edit(value)

    def to_submit(self, text: str, custom_type: str | None = None) -> Any:
        """Decode edited ``text`` back into a value for its custom type.

        Raises:
            CodecError: When the text does not decode.
        """
        try:
            return self.get(custom_type).to_submit(text)
        except CodecError:
            logger.warning(f"Could not decode edited text for type {custom_type or 'json'!r}")
            raise


def default_registry() -> CodecRegistry:
    """A registry holding the built-in bigint, date, set and map codecs."""
    return CodecRegistry(
        {
            "bigint": BigIntCodec(),
            "date": DateCodec(),
            "set": SetCodec(),
            "map": MapCodec(),
        }
    )


def runtime_type(value: Any) -> str:
    """Runtime type name of a decoded value, as reported in edit patches.

    CRITICAL: bool is checked before int because bool subclasses int.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        if value == UNDEFINED:
            return "undefined"
        if value in (INFINITY, NEGATIVE_INFINITY, NAN):
            return "number"
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"


# Module-level registry shared by the convenience functions below.
_registry = default_registry()


def to_edit(value: Any, custom_type: str | None = None) -> str:
    """Encode ``value`` with the default registry."""
    return _registry.to_edit(value, custom_type)


def to_submit(text: str, custom_type: str | None = None) -> Any:
    """Decode ``text`` with the default registry."""
    return _registry.to_submit(text, custom_type)
