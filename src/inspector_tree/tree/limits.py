"""FieldLimits: per-node "show more" limits backed by an LRU cache.

Every expandable node starts with ``page_size`` visible children. Each "show
more" action raises that node's limit by another ``page_size``. Limits survive
re-renders of the same node and are dropped when the node disappears from a
render pass, so a recreated node starts again at the default.

Each ``FieldLimits`` instance owns its own ``LRUCache``; the cache bound keeps
memory flat for sessions that expand very many distinct paths.
"""

from __future__ import annotations

from collections.abc import Iterable

from cachetools import LRUCache

DEFAULT_PAGE_SIZE = 30


class FieldLimits:
    """Limit store keyed by node key.

    Args:
        page_size: Default limit and increment per "show more". Defaults to 30.
        max_size:  Maximum number of node limits remembered. The least recently
            used entry is silently evicted (that node falls back to the default).
    """

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, max_size: int = 4096) -> None:
        if page_size < 1:
            msg = f"page_size must be >= 1, got {page_size}"
            raise ValueError(msg)
        self._page_size = page_size
        self._limits: LRUCache[str, int] = LRUCache(maxsize=max_size)

    @property
    def page_size(self) -> int:
        return self._page_size

    def get(self, key: str) -> int:
        """Current limit for ``key``; the page size when never raised."""
        return self._limits.get(key, self._page_size)

    def show_more(self, key: str) -> int:
        """Raise the limit of ``key`` by one page and return the new limit."""
        limit = self.get(key) + self._page_size
        self._limits[key] = limit
        return limit

    def reset(self, key: str) -> None:
        self._limits.pop(key, None)

    def retain(self, keys: Iterable[str]) -> None:
        """Forget the limits of every node whose key is not in ``keys``."""
        alive = set(keys)
        for key in [k for k in self._limits if k not in alive]:
            del self._limits[key]

    def __contains__(self, key: object) -> bool:
        return key in self._limits

    def __len__(self) -> int:
        return len(self._limits)
