"""
Listener registries used by the wagon.

Listeners are kept in registration order and notified synchronously; a
listener is registered at most once.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generic, List, Optional, TypeVar

from .events import (
    RequestType,
    Resource,
    SessionEvent,
    SessionEventType,
    SessionListener,
    TransferEvent,
    TransferEventType,
    TransferListener,
)

L = TypeVar("L")


class _ListenerRegistry(Generic[L]):
    def __init__(self, wagon: Any):
        self._wagon = wagon
        self._listeners: List[L] = []

    def add(self, listener: L) -> None:
        if listener is None:
            raise TypeError("listener must not be None")
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: L) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def has(self, listener: L) -> bool:
        return listener in self._listeners

    def __len__(self) -> int:
        return len(self._listeners)

    def _snapshot(self) -> List[L]:
        # listeners may unregister themselves while being notified
        return list(self._listeners)


class TransferListenerContainer(_ListenerRegistry[TransferListener]):

    def _event(self, resource: Resource, event_type: TransferEventType,
               request_type: RequestType, **kwargs) -> TransferEvent:
        return TransferEvent(self._wagon, resource, event_type, request_type, **kwargs)

    def fire_transfer_initiated(self, resource: Resource, request_type: RequestType) -> None:
        event = self._event(resource, TransferEventType.INITIATED, request_type)
        for listener in self._snapshot():
            listener.transfer_initiated(event)

    def fire_transfer_started(self, resource: Resource, request_type: RequestType,
                              local_file: Optional[Path]) -> None:
        """Stamp ``resource`` with the local file's size and mtime, then notify."""
        if local_file is not None:
            local_file = Path(local_file)
            if local_file.is_file():
                stat = local_file.stat()
                resource.content_length = stat.st_size
                resource.last_modified = int(stat.st_mtime * 1000)
        event = self._event(resource, TransferEventType.STARTED, request_type, local_file=local_file)
        for listener in self._snapshot():
            listener.transfer_started(event)

    def fire_transfer_progress(self, resource: Resource, request_type: RequestType,
                               buffer: bytes, length: int) -> None:
        event = self._event(resource, TransferEventType.PROGRESS, request_type)
        for listener in self._snapshot():
            listener.transfer_progress(event, buffer, length)

    def fire_transfer_completed(self, resource: Resource, request_type: RequestType) -> None:
        event = self._event(resource, TransferEventType.COMPLETED, request_type)
        for listener in self._snapshot():
            listener.transfer_completed(event)

    def fire_transfer_error(self, resource: Resource, request_type: RequestType,
                            exception: BaseException) -> None:
        event = self._event(resource, TransferEventType.ERROR, request_type, exception=exception)
        for listener in self._snapshot():
            listener.transfer_error(event)


class SessionListenerContainer(_ListenerRegistry[SessionListener]):

    def _fire(self, event_type: SessionEventType, hook: str) -> None:
        event = SessionEvent(self._wagon, event_type)
        for listener in self._snapshot():
            getattr(listener, hook)(event)

    def fire_session_opening(self) -> None:
        self._fire(SessionEventType.OPENING, "session_opening")

    def fire_session_opened(self) -> None:
        self._fire(SessionEventType.OPENED, "session_opened")

    def fire_session_logged_in(self) -> None:
        self._fire(SessionEventType.LOGGED_IN, "session_logged_in")

    def fire_session_disconnecting(self) -> None:
        self._fire(SessionEventType.DISCONNECTING, "session_disconnecting")

    def fire_session_logged_off(self) -> None:
        self._fire(SessionEventType.LOGGED_OFF, "session_logged_off")

    def fire_session_disconnected(self) -> None:
        self._fire(SessionEventType.DISCONNECTED, "session_disconnected")


class TransferProgress:
    """Progress sink that forwards every chunk as a transfer-progress event."""

    def __init__(self, resource: Resource, request_type: RequestType,
                 container: TransferListenerContainer):
        self._resource = resource
        self._request_type = request_type
        self._container = container

    def __call__(self, buffer: bytes, length: int) -> None:
        self._container.fire_transfer_progress(self._resource, self._request_type, buffer, length)
