"""MinIO-backed implementation of the object store contract."""

from __future__ import annotations

import time
from typing import BinaryIO

from minio import Minio
from minio.error import S3Error

from s3manager.errors import StorageError
from s3manager.storage.contracts import ObjectListing, ObjectStoreClient, RemoteObjectRef

CHUNK_SIZE = 64 * 1024


def _wrap_error(op: str, bucket: str | None, key: str | None, exc: Exception) -> StorageError:
    return StorageError(op=op, bucket=bucket, key=key, message=str(exc))


class MinioObjectStore(ObjectStoreClient):
    """Object store backed by the MinIO SDK (works against AWS S3 as well)."""

    def __init__(self, client: Minio, poll_interval: float = 1.0):
        self._client = client
        self._poll_interval = poll_interval

    # -------
    # Buckets
    # -------
    def create_bucket(self, name: str, region: str | None = None) -> None:
        try:
            self._client.make_bucket(bucket_name=name, location=region)
        except S3Error as exc:
            raise _wrap_error("create_bucket", name, None, exc) from exc
        except Exception as exc:
            raise _wrap_error("create_bucket", name, None, exc) from exc

    def wait_until_bucket_exists(self, name: str, timeout: float) -> None:
        deadline = time.monotonic() + timeout
        while True:
            try:
                if self._client.bucket_exists(bucket_name=name):
                    return
            except S3Error as exc:
                raise _wrap_error("wait_bucket", name, None, exc) from exc
            except Exception as exc:
                raise _wrap_error("wait_bucket", name, None, exc) from exc
            if time.monotonic() >= deadline:
                raise StorageError(
                    op="wait_bucket",
                    bucket=name,
                    key=None,
                    message=f"bucket did not appear within {timeout:g}s",
                )
            time.sleep(self._poll_interval)

    def list_buckets(self) -> list[str]:
        try:
            return [bucket.name for bucket in self._client.list_buckets()]
        except S3Error as exc:
            raise _wrap_error("list_buckets", None, None, exc) from exc
        except Exception as exc:
            raise _wrap_error("list_buckets", None, None, exc) from exc

    # -------
    # Objects
    # -------
    def list_objects(self, bucket: str) -> ObjectListing:
        try:
            return [
                RemoteObjectRef(key=obj.object_name)
                for obj in self._client.list_objects(bucket_name=bucket, recursive=True)
                if not obj.is_dir
            ]
        except S3Error as exc:
            raise _wrap_error("list_objects", bucket, None, exc) from exc
        except Exception as exc:
            raise _wrap_error("list_objects", bucket, None, exc) from exc

    def get_object(self, bucket: str, key: str, dest: BinaryIO) -> int:
        written = 0
        try:
            response = self._client.get_object(bucket_name=bucket, object_name=key)
            try:
                for chunk in response.stream(CHUNK_SIZE):
                    dest.write(chunk)
                    written += len(chunk)
            finally:
                response.close()
                response.release_conn()
            return written
        except S3Error as exc:
            raise _wrap_error("get", bucket, key, exc) from exc
        except Exception as exc:
            raise _wrap_error("get", bucket, key, exc) from exc

    def put_object(self, bucket: str, key: str, source: BinaryIO, length: int) -> None:
        try:
            self._client.put_object(
                bucket_name=bucket,
                object_name=key,
                data=source,
                length=length,
            )
        except S3Error as exc:
            raise _wrap_error("put", bucket, key, exc) from exc
        except Exception as exc:
            raise _wrap_error("put", bucket, key, exc) from exc

    def delete_object(self, bucket: str, key: str) -> None:
        try:
            self._client.remove_object(bucket_name=bucket, object_name=key)
        except S3Error as exc:
            raise _wrap_error("delete", bucket, key, exc) from exc
        except Exception as exc:
            raise _wrap_error("delete", bucket, key, exc) from exc


__all__ = ["MinioObjectStore"]
