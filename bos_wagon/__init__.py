"""BOS-backed transport for build-artifact repositories."""

from .core import logger, BosSettings, load_settings
from .core.exceptions import (
    WagonError,
    AuthenticationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    RepositoryConfigurationError,
)
from .bos import BosStorageRepo, resolve
from .wagon import (
    AuthenticationInfo,
    BosStorageWagon,
    Repository,
    SessionListener,
    TransferListener,
)

__version__ = "0.1.0"

__all__ = [
    "logger",
    "BosSettings",
    "load_settings",
    "WagonError",
    "AuthenticationError",
    "ResourceDoesNotExistError",
    "TransferFailedError",
    "RepositoryConfigurationError",
    "BosStorageRepo",
    "resolve",
    "AuthenticationInfo",
    "BosStorageWagon",
    "Repository",
    "SessionListener",
    "TransferListener",
]
