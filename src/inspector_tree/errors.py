"""Exception types raised by inspector-tree."""

from __future__ import annotations

__all__ = ["CodecError", "EditNotAllowedError", "InspectorTreeError"]


class InspectorTreeError(Exception):
    """Base class for every error raised by this package."""


class CodecError(InspectorTreeError, ValueError):
    """Edited text could not be decoded back into a value."""


class EditNotAllowedError(InspectorTreeError):
    """An edit operation was refused by the editability rules or session state."""
