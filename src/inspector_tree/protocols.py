"""Collaborator protocols for inspector-tree.

Defines the structural interfaces of the two external collaborators the viewer
talks to. Users can plug in their own implementations without inheriting from
any base class: any class with conformant methods passes ``isinstance`` checks.

Example::

    from inspector_tree.protocols import EditTransport

    class PrintTransport:
        def send(self, patch):
            print(patch.to_dict())

    assert isinstance(PrintTransport(), EditTransport)  # True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from inspector_tree.editing.patch import EditPatch


@runtime_checkable
class ExpansionTracker(Protocol):
    """Path-keyed expand/collapse state.

    ``path_id`` is the ``"{depth}-{index}"`` render-position key supplied by the
    viewer, not a node key. Persistence policy is the tracker's concern.
    """

    def is_expanded(self, path_id: str) -> bool: ...

    def toggle(self, path_id: str) -> None: ...


@runtime_checkable
class EditTransport(Protocol):
    """Applies edit patches against the live inspected runtime.

    ``send`` is fire-and-forget: the viewer never reads its return value, and
    failures are the transport's concern. The owning state store refreshes the
    snapshot once the mutation lands.
    """

    def send(self, patch: EditPatch) -> None: ...
