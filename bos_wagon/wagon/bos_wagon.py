"""
BOS transport for build-artifact repositories.

``BosStorageWagon`` implements the repository transport contract (connect,
get, put, listing, ...) on top of ``BosStorageRepo`` and reports every
session and transfer step to the registered listeners.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from ..bos.bos_client import connect_bos
from ..bos.key_resolver import resolve
from ..bos.storage_repo import BosStorageRepo, ClientFactory
from ..core.config import BosSettings
from ..core.exceptions import (
    AuthenticationError,
    ResourceDoesNotExistError,
    TransferFailedError,
    WagonError,
)
from ..core.logger import logger
from .events import RequestType, Resource, SessionListener, TransferListener
from .listeners import SessionListenerContainer, TransferListenerContainer, TransferProgress
from .listing import to_maven_file_list
from .repository import AuthenticationInfo, Repository, parse_basedir

PathLike = Union[str, Path]


class BosStorageWagon:

    def __init__(self, settings: Optional[BosSettings] = None,
                 client_factory: ClientFactory = connect_bos):
        self.settings = settings or BosSettings()
        self._client_factory = client_factory
        self.repository: Optional[Repository] = None
        self.storage_repo: Optional[BosStorageRepo] = None
        self.transfer_listeners = TransferListenerContainer(self)
        self.session_listeners = SessionListenerContainer(self)

    # ========== Listeners ==========

    def add_transfer_listener(self, listener: TransferListener) -> None:
        self.transfer_listeners.add(listener)

    def remove_transfer_listener(self, listener: TransferListener) -> None:
        self.transfer_listeners.remove(listener)

    def has_transfer_listener(self, listener: TransferListener) -> bool:
        return self.transfer_listeners.has(listener)

    def add_session_listener(self, listener: SessionListener) -> None:
        self.session_listeners.add(listener)

    def remove_session_listener(self, listener: SessionListener) -> None:
        self.session_listeners.remove(listener)

    def has_session_listener(self, listener: SessionListener) -> bool:
        return self.session_listeners.has(listener)

    # ========== Session ==========

    def connect(self, repository: Repository,
                authentication_info: Optional[AuthenticationInfo] = None) -> None:
        """
        Open a session on ``repository``.

        The repository base directory must look like ``/<bucket>/<base-directory>``.
        Credentials come from ``authentication_info`` when it is complete,
        otherwise from the settings.

        Raises:
            RepositoryConfigurationError: malformed base directory
            AuthenticationError: no usable credentials or client construction failed
        """
        bucket, directory = parse_basedir(repository.basedir)
        self.repository = repository
        self.session_listeners.fire_session_opening()

        if authentication_info is None or not authentication_info.is_complete:
            authentication_info = AuthenticationInfo(
                self.settings.access_key_id, self.settings.secret_access_key
            )
        endpoint = repository.host or self.settings.endpoint
        if not authentication_info.is_complete:
            raise AuthenticationError(endpoint, "no credentials supplied and none configured")

        logger.info(f"Opening connection for bucket {bucket} and directory {directory}")
        storage_repo = BosStorageRepo(bucket, directory, self.settings, self._client_factory)
        storage_repo.connect(authentication_info, endpoint)
        self.storage_repo = storage_repo

        self.session_listeners.fire_session_logged_in()
        self.session_listeners.fire_session_opened()

    def disconnect(self) -> None:
        self.session_listeners.fire_session_disconnecting()
        if self.storage_repo is not None:
            self.storage_repo.disconnect()
            self.storage_repo = None
        self.session_listeners.fire_session_logged_off()
        self.session_listeners.fire_session_disconnected()

    def _repo(self) -> BosStorageRepo:
        if self.storage_repo is None:
            raise WagonError("Wagon is not connected; call connect() first")
        return self.storage_repo

    # ========== Transfers ==========

    def get(self, resource_name: str, destination: PathLike) -> None:
        repo = self._repo()
        resource = Resource(resource_name)
        destination = Path(destination)
        self.transfer_listeners.fire_transfer_initiated(resource, RequestType.GET)
        self.transfer_listeners.fire_transfer_started(resource, RequestType.GET, destination)

        progress = TransferProgress(resource, RequestType.GET, self.transfer_listeners)
        try:
            repo.copy(resource_name, destination, progress)
        except Exception as e:
            self.transfer_listeners.fire_transfer_error(resource, RequestType.GET, e)
            raise
        self.transfer_listeners.fire_transfer_completed(resource, RequestType.GET)

    def get_if_newer(self, resource_name: str, destination: PathLike, timestamp: int) -> bool:
        """Download only when the remote copy is newer than ``timestamp`` (epoch millis)."""
        if self._repo().new_resource_available(resource_name, timestamp):
            self.get(resource_name, destination)
            return True
        return False

    def put(self, source: PathLike, resource_name: str) -> None:
        repo = self._repo()
        resource = Resource(resource_name)
        source = Path(source)
        logger.info(f"Uploading file {source.absolute()} to {resource_name}")
        self.transfer_listeners.fire_transfer_initiated(resource, RequestType.PUT)
        self.transfer_listeners.fire_transfer_started(resource, RequestType.PUT, source)

        progress = TransferProgress(resource, RequestType.PUT, self.transfer_listeners)
        try:
            repo.put(source, resource_name, progress)
        except TransferFailedError as e:
            self.transfer_listeners.fire_transfer_error(resource, RequestType.PUT, e)
            raise
        self.transfer_listeners.fire_transfer_completed(resource, RequestType.PUT)

    def put_directory(self, source_dir: PathLike, destination: Optional[str]) -> None:
        """
        Upload every regular file below ``source_dir``.

        A destination starting with ``.`` has that character dropped, so
        ``"."`` uploads onto the repository root rather than a ``.`` folder.
        """
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise ResourceDoesNotExistError(str(source_dir))

        relative_destination = destination or ""
        if relative_destination.startswith("."):
            relative_destination = relative_destination[1:]
        relative_destination = relative_destination.rstrip("/")

        for root, dirs, files in os.walk(source_dir):
            dirs.sort()
            for name in sorted(files):
                path = Path(root) / name
                if not path.is_file():
                    continue
                relative_path = path.relative_to(source_dir).as_posix()
                self.put(path, f"{relative_destination}/{relative_path}")

    def supports_directory_copy(self) -> bool:
        return True

    # ========== Listing ==========

    def get_file_list(self, path: str) -> List[str]:
        """
        List ``path`` as files plus synthesized sub-folders (``name/``).

        Raises:
            ResourceDoesNotExistError: nothing is stored under ``path``
            TransferFailedError: the listing failed
        """
        repo = self._repo()
        keys = repo.list(path)
        prefix = resolve(repo.base_directory, path)
        try:
            entries = to_maven_file_list(keys, prefix)
        except ValueError as e:
            raise TransferFailedError(f"Could not fetch objects with prefix: {path}", path, e) from e
        if not entries:
            raise ResourceDoesNotExistError(path)
        return entries

    def resource_exists(self, resource_name: str) -> bool:
        return self._repo().exists(resource_name)
