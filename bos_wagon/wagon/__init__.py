"""Repository transport (wagon) layer."""

from .bos_wagon import BosStorageWagon
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
from .listeners import SessionListenerContainer, TransferListenerContainer, TransferProgress
from .listing import extract_folders, to_maven_file_list
from .repository import AuthenticationInfo, Repository, parse_basedir

__all__ = [
    "BosStorageWagon",
    "RequestType",
    "Resource",
    "SessionEvent",
    "SessionEventType",
    "SessionListener",
    "TransferEvent",
    "TransferEventType",
    "TransferListener",
    "SessionListenerContainer",
    "TransferListenerContainer",
    "TransferProgress",
    "extract_folders",
    "to_maven_file_list",
    "AuthenticationInfo",
    "Repository",
    "parse_basedir",
]
