"""Transports subpackage for inspector-tree.

The base install provides only ``RecordingTransport``. ``HttpEditTransport``
is available via the ``http`` extra:

    pip install inspector-tree[http]

All transports satisfy the ``EditTransport`` Protocol structurally.
"""

from inspector_tree.transports.http import HttpEditTransport
from inspector_tree.transports.recording import RecordingTransport

# HttpEditTransport imports httpx/tenacity lazily on instantiation, so it is
# always importable.
__all__ = ["HttpEditTransport", "RecordingTransport"]
