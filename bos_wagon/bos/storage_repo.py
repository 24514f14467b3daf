"""
BOS-backed artifact repository.

A ``BosStorageRepo`` is bound to one ``(bucket, base_directory)`` pair and owns
a single BosClient between ``connect`` and ``disconnect``. Every resource name
is resolved against the base directory before it reaches BOS.
"""

from __future__ import annotations

import shutil
from datetime import datetime
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from baidubce import utils as bce_utils
from baidubce.exception import BceServerError

from ..core.config import BosSettings
from ..core.exceptions import ResourceDoesNotExistError, TransferFailedError
from ..core.logger import logger
from .bos_client import connect_bos
from .key_resolver import resolve
from .progress import ProgressReader, ProgressSink, open_progress_writer

COPY_BUFFER_SIZE = 64 * 1024

ClientFactory = Callable[[Optional[str], Optional[str], str, Optional[BosSettings]], Any]
PathLike = Union[str, Path]


def _is_not_found(error: Exception) -> bool:
    return isinstance(error, BceServerError) and error.status_code == 404


def last_modified_millis(value: Any) -> int:
    """Convert BOS ``last-modified`` metadata (RFC 1123 string or datetime) to epoch millis."""
    if isinstance(value, datetime):
        moment = value
    else:
        moment = parsedate_to_datetime(str(value))
    return int(moment.timestamp() * 1000)


class BosStorageRepo:
    """Key-resolving facade over one BOS bucket and base directory."""

    def __init__(self, bucket: str, base_directory: str,
                 settings: Optional[BosSettings] = None,
                 client_factory: ClientFactory = connect_bos):
        self._bucket = bucket
        self._base_directory = base_directory
        self._settings = settings or BosSettings()
        self._client_factory = client_factory
        self._client = None

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def base_directory(self) -> str:
        return self._base_directory

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def client(self):
        if self._client is None:
            raise RuntimeError(
                f"BOS client is not connected [bucket={self._bucket}, baseDirectory={self._base_directory}]"
            )
        return self._client

    def _resolve_key(self, path: str) -> str:
        return resolve(self._base_directory, path)

    def _location(self, key: str) -> str:
        return f"[bucket={self._bucket}, baseDirectory={self._base_directory}, key={key}]"

    # ========== Session ==========

    def connect(self, authentication_info, endpoint: str) -> None:
        """Build the BOS client; raises AuthenticationError on failure."""
        self._client = self._client_factory(
            authentication_info.username,
            authentication_info.password,
            endpoint,
            self._settings,
        )

    def disconnect(self) -> None:
        # BosClient holds no pooled connections; dropping the reference ends the session
        if self._client is not None:
            logger.debug(f"Releasing BOS client for bucket {self._bucket}")
        self._client = None

    # ========== Transfers ==========

    def copy(self, resource_name: str, destination: PathLike,
             progress: Optional[ProgressSink] = None) -> None:
        """
        Download a resource into ``destination``.

        Failures are logged and swallowed unless ``strict_download`` is set,
        in which case a missing key raises ResourceDoesNotExistError and any
        other failure TransferFailedError.
        """
        key = self._resolve_key(resource_name)
        client = self.client

        try:
            response = client.get_object(self._bucket, key)
            body = response.data
            try:
                destination = Path(destination)
                # the writer cannot open a file in a missing folder
                destination.parent.mkdir(parents=True, exist_ok=True)
                with open_progress_writer(destination, progress) as out:
                    shutil.copyfileobj(body, out, COPY_BUFFER_SIZE)
            finally:
                body.close()
        except Exception as e:
            logger.warning(f"Could not transfer file from {self._location(key)}: {e}", exc_info=e)
            if not self._settings.strict_download:
                return
            if _is_not_found(e):
                raise ResourceDoesNotExistError(key, e, self._location(key)) from e
            raise TransferFailedError(
                f"Could not transfer file from {self._location(key)}", resource_name, e
            ) from e

    def put(self, local_file: PathLike, destination: str,
            progress: Optional[ProgressSink] = None) -> None:
        """Upload ``local_file`` to ``destination``; raises TransferFailedError on any failure."""
        key = self._resolve_key(destination)
        client = self.client
        path = Path(local_file)

        try:
            size = path.stat().st_size
            with open(path, "rb") as raw:
                content_md5 = bce_utils.get_md5_from_fp(raw, length=size)
                raw.seek(0)
                client.put_object(
                    bucket_name=self._bucket,
                    key=key,
                    data=ProgressReader(raw, progress),
                    content_length=size,
                    content_md5=content_md5,
                )
        except Exception as e:
            logger.warning(f"Could not transfer file to {self._location(key)}: {e}", exc_info=e)
            raise TransferFailedError(f"Could not transfer file {path.name}", destination, e) from e

    # ========== Metadata ==========

    def new_resource_available(self, resource_name: str, timestamp: int) -> bool:
        """True when the object was modified strictly after ``timestamp`` (epoch millis)."""
        key = self._resolve_key(resource_name)
        client = self.client
        logger.info(f"Checking if new key exists, {self._location(key)}")

        try:
            response = client.get_object_meta_data(self._bucket, key)
            updated = last_modified_millis(response.metadata.last_modified)
        except Exception as e:
            logger.warning(f"Could not find key {self._location(key)}: {e}", exc_info=e)
            raise ResourceDoesNotExistError(key, e, self._location(key)) from e
        return updated > timestamp

    def exists(self, resource_name: str) -> bool:
        key = self._resolve_key(resource_name)
        client = self.client
        try:
            client.get_object_meta_data(self._bucket, key)
            return True
        except Exception:
            return False

    def list(self, path: str) -> List[str]:
        """
        List every key under ``path``, following continuation markers.

        Raises:
            TransferFailedError: on SDK errors, or when the listing is still
                truncated after ``max_list_pages`` pages
        """
        prefix = self._resolve_key(path)
        client = self.client
        keys: List[str] = []
        marker = None
        pages = 0

        try:
            while True:
                response = client.list_objects(
                    bucket_name=self._bucket,
                    max_keys=self._settings.list_page_size,
                    prefix=prefix or None,
                    marker=marker,
                )
                pages += 1
                contents = getattr(response, "contents", None) or []
                keys.extend(obj.key for obj in contents)

                if not getattr(response, "is_truncated", False):
                    break
                if pages >= self._settings.max_list_pages:
                    raise TransferFailedError(
                        f"Listing of {self._location(prefix)} exceeded {pages} pages", path
                    )
                marker = getattr(response, "next_marker", None) or (contents[-1].key if contents else None)
                if not marker:
                    raise TransferFailedError(
                        f"Truncated listing without continuation marker at {self._location(prefix)}", path
                    )
        except TransferFailedError:
            raise
        except Exception as e:
            logger.warning(f"Could not list objects at {self._location(prefix)}: {e}", exc_info=e)
            raise TransferFailedError(f"Could not fetch objects with prefix: {path}", path, e) from e

        logger.debug(f"Listed {len(keys)} keys in {pages} page(s) under {self._location(prefix)}")
        return keys
