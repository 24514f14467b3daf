"""Unit tests for transfer and session listener containers."""

import os
from pathlib import Path

import pytest

from bos_wagon.wagon.events import RequestType, Resource, TransferEventType
from bos_wagon.wagon.listeners import (
    SessionListenerContainer,
    TransferListenerContainer,
    TransferProgress,
)
from conftest import RecordingSessionListener, RecordingTransferListener


class TestRegistration:

    def test_add_ignores_duplicates(self) -> None:
        container = TransferListenerContainer(wagon=None)
        listener = RecordingTransferListener()

        container.add(listener)
        container.add(listener)

        assert len(container) == 1
        assert container.has(listener)

    def test_add_none_rejected(self) -> None:
        with pytest.raises(TypeError):
            SessionListenerContainer(wagon=None).add(None)

    def test_remove_unknown_is_noop(self) -> None:
        container = SessionListenerContainer(wagon=None)
        listener = RecordingSessionListener()
        container.remove(listener)
        container.add(listener)
        container.remove(listener)
        assert not container.has(listener)

    def test_notified_in_registration_order(self) -> None:
        order = []

        class Named(RecordingSessionListener):
            def __init__(self, name):
                super().__init__()
                self.name = name

            def session_opening(self, event):
                order.append(self.name)

        container = SessionListenerContainer(wagon=None)
        for name in ("first", "second", "third"):
            container.add(Named(name))
        container.fire_session_opening()

        assert order == ["first", "second", "third"]


class TestTransferEvents:

    def test_started_stamps_resource_from_local_file(self, tmp_path: Path) -> None:
        local = tmp_path / "a.jar"
        local.write_bytes(b"12345")
        os.utime(local, (1_700_000_000, 1_700_000_000))
        container = TransferListenerContainer(wagon="w")
        listener = RecordingTransferListener()
        container.add(listener)
        resource = Resource("a.jar")

        container.fire_transfer_started(resource, RequestType.PUT, local)

        assert resource.content_length == 5
        assert resource.last_modified == 1_700_000_000_000
        _, event = listener.events[0]
        assert event.wagon == "w"
        assert event.event_type is TransferEventType.STARTED
        assert event.local_file == local

    def test_started_without_local_file_leaves_resource(self, tmp_path: Path) -> None:
        container = TransferListenerContainer(wagon=None)
        resource = Resource("a.jar")
        container.fire_transfer_started(resource, RequestType.GET, tmp_path / "missing.jar")
        assert resource.content_length == 0

    def test_error_event_carries_exception(self) -> None:
        container = TransferListenerContainer(wagon=None)
        listener = RecordingTransferListener()
        container.add(listener)
        error = RuntimeError("boom")

        container.fire_transfer_error(Resource("a.jar"), RequestType.GET, error)

        name, event = listener.events[0]
        assert name == "error"
        assert event.exception is error
        assert event.event_type is TransferEventType.ERROR

    def test_transfer_progress_forwards_chunks(self) -> None:
        container = TransferListenerContainer(wagon=None)
        listener = RecordingTransferListener()
        container.add(listener)
        progress = TransferProgress(Resource("a.jar"), RequestType.GET, container)

        progress(b"abc", 3)
        progress(b"de", 2)

        assert listener.progress_bytes == 5


class TestSessionEvents:

    def test_each_hook_fired(self) -> None:
        container = SessionListenerContainer(wagon=None)
        listener = RecordingSessionListener()
        container.add(listener)

        container.fire_session_opening()
        container.fire_session_logged_in()
        container.fire_session_opened()
        container.fire_session_disconnecting()
        container.fire_session_logged_off()
        container.fire_session_disconnected()

        assert listener.names == [
            "opening", "logged_in", "opened", "disconnecting", "logged_off", "disconnected",
        ]
