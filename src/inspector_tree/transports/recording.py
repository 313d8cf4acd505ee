"""RecordingTransport: keeps every sent patch in memory."""

from __future__ import annotations

from inspector_tree.editing.patch import EditPatch


class RecordingTransport:
    """In-memory EditTransport, useful for tests and for batching patches.

    Satisfies the ``EditTransport`` Protocol structurally.
    """

    def __init__(self) -> None:
        self.patches: list[EditPatch] = []

    def send(self, patch: EditPatch) -> None:
        self.patches.append(patch)

    @property
    def last(self) -> EditPatch | None:
        return self.patches[-1] if self.patches else None

    def clear(self) -> None:
        self.patches.clear()
