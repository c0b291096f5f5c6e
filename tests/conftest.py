"""
Shared pytest fixtures for the drop server tests.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from drop_server.drop.api import get_pipeline
from drop_server.drop.auth import get_secret_key
from drop_server.drop.pipeline import UploadPipeline
from drop_server.drop.store import MetadataStore
from drop_server.drop.model import StoreSnapshot, UploadEntry
from drop_server.errors import StorageError, PersistError
from drop_server.main import app

T0 = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingSink:
    """In-memory FileSink keeping every write."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.writes: dict[str, bytes] = {}
        self.calls = 0

    def write(self, code: str, data: bytes) -> None:
        self.calls += 1
        if self.fail:
            raise StorageError(code)
        self.writes[code] = data


class RecordingPersister:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.snapshots = []

    def persist(self, snapshot) -> None:
        if self.fail:
            raise PersistError("disk full")
        self.snapshots.append(snapshot)

    def load(self):
        return self.snapshots[-1] if self.snapshots else StoreSnapshot()


@pytest.fixture
def store():
    return MetadataStore()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def persister():
    return RecordingPersister()


@pytest.fixture
def pipeline(store, sink, persister):
    return UploadPipeline(store, sink, persister, clock=lambda: T0)


@pytest.fixture
def secret_key():
    return ''


@pytest.fixture
def client(pipeline, secret_key):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    app.dependency_overrides[get_secret_key] = lambda: secret_key
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_entry(code: str, **kwargs) -> UploadEntry:
    fields = dict(code=code, original=f"{code}.bin", delete_key="k" * 16, creation_time=T0)
    fields.update(kwargs)
    return UploadEntry(**fields)
