"""Shared fixtures: an in-memory stand-in for the BOS SDK client."""

import io
import logging
import time
from email.utils import formatdate
from types import SimpleNamespace

import pytest
from baidubce.exception import BceServerError

from bos_wagon.core.config import BosSettings
from bos_wagon.core.logger import LOGGER_NAME
from bos_wagon.wagon import BosStorageWagon, Repository, SessionListener, TransferListener

BUCKET = "repo"
REPOSITORY_URL = "bos://bj.bcebos.com/repo/base"


class FakeBosClient:
    """Implements the BosClient calls the wagon makes, backed by a dict."""

    def __init__(self, page_size=None, send_next_marker=True):
        # (bucket, key) -> (bytes, last_modified epoch seconds)
        self.objects = {}
        self.page_size = page_size
        self.list_calls = 0
        self.put_requests = []
        self.send_next_marker = send_next_marker
        self.bodies = []

    def add(self, key, data=b"", last_modified=None, bucket=BUCKET):
        self.objects[(bucket, key)] = (data, time.time() if last_modified is None else last_modified)

    def _missing(self, key):
        return BceServerError(f"NoSuchKey: {key}", status_code=404, code="NoSuchKey")

    def put_object(self, bucket_name, key, data, content_length, content_md5, **kwargs):
        chunks = []
        remaining = content_length
        while remaining > 0:
            chunk = data.read(min(4, remaining))
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        self.put_requests.append((bucket_name, key, content_length, content_md5))
        self.add(key, b"".join(chunks), bucket=bucket_name)

    def get_object(self, bucket_name, key, **kwargs):
        if (bucket_name, key) not in self.objects:
            raise self._missing(key)
        data, _ = self.objects[(bucket_name, key)]
        body = io.BytesIO(data)
        self.bodies.append(body)
        return SimpleNamespace(data=body)

    def get_object_meta_data(self, bucket_name, key, **kwargs):
        if (bucket_name, key) not in self.objects:
            raise self._missing(key)
        data, modified = self.objects[(bucket_name, key)]
        return SimpleNamespace(metadata=SimpleNamespace(
            last_modified=formatdate(modified, usegmt=True),
            content_length=len(data),
        ))

    def list_objects(self, bucket_name, max_keys=1000, prefix=None, marker=None, delimiter=None, **kwargs):
        self.list_calls += 1
        keys = sorted(
            k for (b, k) in self.objects
            if b == bucket_name and k.startswith(prefix or "") and (marker is None or k > marker)
        )
        limit = self.page_size or max_keys
        page = keys[:limit]
        truncated = len(keys) > limit
        return SimpleNamespace(
            contents=[SimpleNamespace(key=k) for k in page],
            is_truncated=truncated,
            next_marker=page[-1] if truncated and self.send_next_marker else None,
        )


class RecordingTransferListener(TransferListener):

    def __init__(self):
        self.events = []
        self.progress_bytes = 0

    def transfer_initiated(self, event):
        self.events.append(("initiated", event))

    def transfer_started(self, event):
        self.events.append(("started", event))

    def transfer_progress(self, event, buffer, length):
        self.progress_bytes += length

    def transfer_completed(self, event):
        self.events.append(("completed", event))

    def transfer_error(self, event):
        self.events.append(("error", event))

    @property
    def names(self):
        return [name for name, _ in self.events]


class RecordingSessionListener(SessionListener):

    def __init__(self):
        self.names = []

    def session_opening(self, event):
        self.names.append("opening")

    def session_opened(self, event):
        self.names.append("opened")

    def session_logged_in(self, event):
        self.names.append("logged_in")

    def session_disconnecting(self, event):
        self.names.append("disconnecting")

    def session_logged_off(self, event):
        self.names.append("logged_off")

    def session_disconnected(self, event):
        self.names.append("disconnected")


@pytest.fixture(autouse=True)
def reset_wagon_logger():
    """The CLI installs a stdout handler; drop it so later tests start clean."""
    wagon_logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(wagon_logger.handlers), wagon_logger.level
    yield
    wagon_logger.handlers = handlers
    wagon_logger.setLevel(level)


@pytest.fixture
def fake_client():
    return FakeBosClient()


@pytest.fixture
def client_factory(fake_client):
    calls = []

    def factory(access_key_id, secret_access_key, endpoint, settings):
        calls.append((access_key_id, secret_access_key, endpoint))
        return fake_client

    factory.calls = calls
    return factory


@pytest.fixture
def settings():
    return BosSettings(access_key_id="ak", secret_access_key="sk")


@pytest.fixture
def wagon(settings, client_factory):
    wagon = BosStorageWagon(settings, client_factory=client_factory)
    wagon.connect(Repository("test", REPOSITORY_URL))
    yield wagon
    wagon.disconnect()
