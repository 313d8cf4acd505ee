"""HttpEditTransport: delivers edit patches to an HTTP endpoint.

Wraps ``httpx.Client`` with a lazy import so that the base install (no
httpx/tenacity installed) never triggers an ``ImportError`` at module level.
The ``httpx`` and ``tenacity`` packages are only required when
``HttpEditTransport`` is *instantiated*.

Each patch is POSTed as the JSON body ``patch.to_dict()``. Transient
connection failures (``httpx.TransportError``) are retried with jittered
exponential backoff via ``tenacity``. Delivery is fire-and-forget from the
viewer's point of view: a patch that still fails after the last attempt, or is
rejected with an error status, is logged and dropped. The owning state store
refreshes the snapshot, so a lost patch simply never shows up.

Install the optional dependencies with::

    pip install inspector-tree[http]

Example::

    from inspector_tree.transports.http import HttpEditTransport

    with HttpEditTransport("http://localhost:8098/edit") as transport:
        viewer = StateViewer(context, transport)
"""

from __future__ import annotations

import logging
from typing import Any

from inspector_tree.editing.patch import EditPatch

logger = logging.getLogger(__name__)


class HttpEditTransport:
    """EditTransport POSTing patches as JSON.

    Performs a lazy import of ``httpx`` and ``tenacity`` inside ``__init__``,
    so importing this module on a base install does not raise
    ``ImportError``. The error is deferred until the class is *instantiated*.

    Args:
        url:          Endpoint receiving the patches.
        timeout:      Per-request timeout in seconds. Ignored when ``client``
                      is given.
        max_attempts: Attempts per patch, the first one included.
        backoff_max:  Upper bound in seconds of the wait between attempts.
        client:       Pre-configured ``httpx.Client``. The transport only closes
                      clients it created itself.

    Raises:
        ImportError: If ``httpx`` or ``tenacity`` is not installed. The
            message includes the install command.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        max_attempts: int = 3,
        backoff_max: float = 10.0,
        client: Any = None,
    ) -> None:
        try:
            import httpx
            from tenacity import (
                retry,
                retry_if_exception_type,
                stop_after_attempt,
                wait_random_exponential,
            )
        except ImportError as exc:
            raise ImportError(
                "httpx and tenacity are required for HttpEditTransport. "
                "Install with: pip install inspector-tree[http]"
            ) from exc

        if max_attempts < 1:
            msg = f"max_attempts must be >= 1, got {max_attempts}"
            raise ValueError(msg)

        self._url = url
        self._owns_client = client is None
        # Use Any annotation: httpx is a lazy import, not available at
        # class definition time for type resolution.
        self._client: Any = client if client is not None else httpx.Client(timeout=timeout)
        self._http_error: type[Exception] = httpx.HTTPError

        # Only connection-level failures are retried; an error status from the
        # endpoint is final.
        _retry = retry(
            retry=retry_if_exception_type(httpx.TransportError),
            wait=wait_random_exponential(max=backoff_max),
            stop=stop_after_attempt(max_attempts),
            reraise=True,
        )
        self._call_api = _retry(self._raw_call)

    def __repr__(self) -> str:
        return f"HttpEditTransport(url={self._url!r})"

    def __enter__(self) -> HttpEditTransport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def send(self, patch: EditPatch) -> None:
        """POST ``patch``; failures are logged, never raised."""
        try:
            self._call_api(patch.to_dict())
        except self._http_error as exc:
            logger.warning(f"Edit patch for {'.'.join(patch.path)!r} was not delivered: {exc}")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _raw_call(self, payload: dict[str, Any]) -> None:
        """Make the raw POST; retried by tenacity via ``_call_api``."""
        response = self._client.post(self._url, json=payload)
        response.raise_for_status()
