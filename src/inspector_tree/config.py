"""ViewerConfig and SessionContext for the inspector state viewer.

ViewerConfig is a frozen (immutable) dataclass holding the display
parameters. SessionContext carries what the surrounding inspector session
supplies: which inspector and which inspected instance own the displayed
state, and whether editing is globally disabled.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ViewerConfig:
    """Immutable configuration for the state viewer.

    Attributes:
        page_size: Children shown per node before "show more", and the
            increment applied by each "show more". Must be >= 1.
        limit_cache_size: Maximum number of per-node limits remembered.
            Must be >= 1.
        reactive_sentinel: State type name rendered alone in place of the value.
    """

    page_size: int = 30
    limit_cache_size: int = 4096
    reactive_sentinel: str = "Reactive"

    def __post_init__(self) -> None:
        if self.page_size < 1:
            msg = f"page_size must be >= 1, got {self.page_size}"
            raise ValueError(msg)
        if self.limit_cache_size < 1:
            msg = f"limit_cache_size must be >= 1, got {self.limit_cache_size}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class SessionContext:
    """What the owning inspector session supplies to the viewer.

    Attributes:
        inspector_id: Identifier of the inspector the state belongs to.
        node_id:      Identifier of the inspected instance owning the paths.
        disable_edit: Suppresses every edit affordance regardless of the
            per-field ``editable`` flags.
    """

    inspector_id: str
    node_id: str
    disable_edit: bool = False
