"""Tests for the inspector-tree pytest plugin fixtures.

The plugin is registered via the pytest11 entry point, so the fixtures are
available here without any conftest.py.
"""

from __future__ import annotations

from inspector_tree.editing.session import EditorSession
from inspector_tree.transports.recording import RecordingTransport
from inspector_tree.tree.nodes import InspectorNode


def test_recording_transport_fixture(recording_transport: RecordingTransport) -> None:
    assert isinstance(recording_transport, RecordingTransport)
    assert recording_transport.patches == []


def test_inspector_session_fixture(inspector_session: EditorSession) -> None:
    assert inspector_session.context.inspector_id == "test-inspector"
    assert inspector_session.context.node_id == "test-node"


def test_session_sends_to_recording_transport(
    inspector_session: EditorSession,
    recording_transport: RecordingTransport,
) -> None:
    node = InspectorNode(key="count", value=1, state_type="data")
    inspector_session.start_editing(node)
    inspector_session.update_text("2")
    inspector_session.submit_editing()

    assert recording_transport.last is not None
    assert recording_transport.last.state.value == 2
    assert recording_transport.last.node_id == "test-node"
