"""InMemoryExpansionTracker: set-backed default ExpansionTracker."""

from __future__ import annotations

from collections.abc import Iterable


class InMemoryExpansionTracker:
    """Keeps expanded path ids in a set for the lifetime of the instance.

    Satisfies the ``ExpansionTracker`` Protocol structurally.

    Args:
        expanded: Path ids that start out expanded.
    """

    def __init__(self, expanded: Iterable[str] = ()) -> None:
        self._expanded: set[str] = set(expanded)

    def is_expanded(self, path_id: str) -> bool:
        return path_id in self._expanded

    def toggle(self, path_id: str) -> None:
        if path_id in self._expanded:
            self._expanded.remove(path_id)
        else:
            self._expanded.add(path_id)

    @property
    def expanded(self) -> frozenset[str]:
        return frozenset(self._expanded)
