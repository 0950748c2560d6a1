"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import BinaryIO

import pytest

from s3manager.core.config import StorageSettings
from s3manager.errors import StorageError
from s3manager.facade import StorageFacade
from s3manager.storage.contracts import ObjectListing, RemoteObjectRef


class FakeObjectStore:
    """In-memory object store honouring the ObjectStoreClient contract."""

    def __init__(self, buckets: list[str] | None = None):
        self.buckets: dict[str, dict[str, bytes]] = {name: {} for name in buckets or []}
        self.create_calls: list[tuple[str, str | None]] = []
        self.wait_calls: list[tuple[str, float]] = []
        self.fail: dict[str, str] = {}

    def _maybe_fail(self, op: str, bucket: str | None = None, key: str | None = None) -> None:
        if op in self.fail:
            raise StorageError(op, bucket, key, self.fail[op])

    def create_bucket(self, name: str, region: str | None = None) -> None:
        self._maybe_fail("create_bucket", name)
        self.create_calls.append((name, region))
        self.buckets.setdefault(name, {})

    def wait_until_bucket_exists(self, name: str, timeout: float) -> None:
        self._maybe_fail("wait_bucket", name)
        self.wait_calls.append((name, timeout))

    def list_buckets(self) -> list[str]:
        self._maybe_fail("list_buckets")
        return list(self.buckets)

    def list_objects(self, bucket: str) -> ObjectListing:
        self._maybe_fail("list_objects", bucket)
        if bucket not in self.buckets:
            raise StorageError("list_objects", bucket, None, "NoSuchBucket")
        return [RemoteObjectRef(key=key) for key in self.buckets[bucket]]

    def get_object(self, bucket: str, key: str, dest: BinaryIO) -> int:
        self._maybe_fail("get", bucket, key)
        try:
            data = self.buckets[bucket][key]
        except KeyError:
            raise StorageError("get", bucket, key, "NoSuchKey") from None
        dest.write(data)
        return len(data)

    def put_object(self, bucket: str, key: str, source: BinaryIO, length: int) -> None:
        self._maybe_fail("put", bucket, key)
        if bucket not in self.buckets:
            raise StorageError("put", bucket, key, "NoSuchBucket")
        data = source.read()
        assert len(data) == length
        self.buckets[bucket][key] = data

    def delete_object(self, bucket: str, key: str) -> None:
        self._maybe_fail("delete", bucket, key)
        self.buckets.get(bucket, {}).pop(key, None)


REQUIRED_ENV = {
    "AWS_ACCESS_KEY_ID": "test-key",
    "AWS_SECRET_ACCESS_KEY": "test-secret",
    "AWS_REGION": "ap-southeast-1",
    "AWS_DEFAULT_BUCKET": "tester-bucket",
}


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Populate every required environment variable; returns the values."""
    values = dict(REQUIRED_ENV, APP_CONFIG_FOLDER=str(tmp_path / "tester-config"))
    for name, value in values.items():
        monkeypatch.setenv(name, value)
    return values


@pytest.fixture
def settings(env) -> StorageSettings:
    return StorageSettings(BUCKET_WAIT_TIMEOUT=5.0)


@pytest.fixture
def fake_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def facade(fake_store, settings) -> StorageFacade:
    """Configured facade whose bucket already exists in the fake store."""
    fake_store.buckets[settings.AWS_DEFAULT_BUCKET] = {}
    return StorageFacade(fake_store, settings)
