"""pytest plugin for inspector-tree.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Usage in tests::

    def test_edit(inspector_session, recording_transport):
        node = InspectorNode(key="count", value=1, state_type="data")
        inspector_session.start_editing(node)
        inspector_session.update_text("2")
        inspector_session.submit_editing()
        assert recording_transport.last.state.value == 2
"""

from __future__ import annotations

import pytest

from inspector_tree.config import SessionContext
from inspector_tree.editing.session import EditorSession
from inspector_tree.expansion import InMemoryExpansionTracker
from inspector_tree.transports.recording import RecordingTransport


@pytest.fixture
def recording_transport() -> RecordingTransport:
    """A fresh transport that records every patch sent to it."""
    return RecordingTransport()


@pytest.fixture
def inspector_session(recording_transport: RecordingTransport) -> EditorSession:
    """An EditorSession wired to ``recording_transport`` and an in-memory tracker.

    The session context uses ``inspector_id="test-inspector"`` and
    ``node_id="test-node"``.
    """
    context = SessionContext(inspector_id="test-inspector", node_id="test-node")
    return EditorSession(context, recording_transport, tracker=InMemoryExpansionTracker())
