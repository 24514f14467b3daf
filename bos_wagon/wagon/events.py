"""Transfer and session events, and the listener interfaces that receive them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class RequestType(Enum):
    GET = "get"
    PUT = "put"


class TransferEventType(Enum):
    INITIATED = "initiated"
    STARTED = "started"
    PROGRESS = "progress"
    COMPLETED = "completed"
    ERROR = "error"


class SessionEventType(Enum):
    OPENING = "opening"
    OPENED = "opened"
    LOGGED_IN = "logged_in"
    DISCONNECTING = "disconnecting"
    LOGGED_OFF = "logged_off"
    DISCONNECTED = "disconnected"


@dataclass
class Resource:
    name: str
    content_length: int = 0
    # epoch millis
    last_modified: int = 0


@dataclass(frozen=True)
class TransferEvent:
    wagon: Any
    resource: Resource
    event_type: TransferEventType
    request_type: RequestType
    local_file: Optional[Path] = None
    exception: Optional[BaseException] = None


@dataclass(frozen=True)
class SessionEvent:
    wagon: Any
    event_type: SessionEventType


class TransferListener:
    """Receives transfer lifecycle events. Override only the hooks you need."""

    def transfer_initiated(self, event: TransferEvent) -> None:
        pass

    def transfer_started(self, event: TransferEvent) -> None:
        pass

    def transfer_progress(self, event: TransferEvent, buffer: bytes, length: int) -> None:
        pass

    def transfer_completed(self, event: TransferEvent) -> None:
        pass

    def transfer_error(self, event: TransferEvent) -> None:
        pass


class SessionListener:
    """Receives session lifecycle events. Override only the hooks you need."""

    def session_opening(self, event: SessionEvent) -> None:
        pass

    def session_opened(self, event: SessionEvent) -> None:
        pass

    def session_logged_in(self, event: SessionEvent) -> None:
        pass

    def session_disconnecting(self, event: SessionEvent) -> None:
        pass

    def session_logged_off(self, event: SessionEvent) -> None:
        pass

    def session_disconnected(self, event: SessionEvent) -> None:
        pass
