"""Core infrastructure modules."""

from .logger import logger, setup_logging
from .config import BosSettings, load_settings
from .exceptions import (
    WagonError,
    AuthenticationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    RepositoryConfigurationError,
)

__all__ = [
    "logger",
    "setup_logging",
    "BosSettings",
    "load_settings",
    "WagonError",
    "AuthenticationError",
    "ResourceDoesNotExistError",
    "TransferFailedError",
    "RepositoryConfigurationError",
]
