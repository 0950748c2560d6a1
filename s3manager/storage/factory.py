"""Factory for building storage instances from environment configuration."""

from __future__ import annotations

from urllib.parse import urlparse

from minio import Minio

from s3manager.core.config import StorageSettings, load_settings
from s3manager.facade import StorageFacade
from s3manager.storage.minio_impl import MinioObjectStore


def _normalize_endpoint(endpoint: str, default_secure: bool = True) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    An endpoint without a scheme keeps ``default_secure``.

    Returns:
        Tuple of (host:port, secure_flag)
    """
    if "://" not in endpoint:
        return endpoint.rstrip("/"), default_secure
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_client(settings: StorageSettings) -> Minio:
    """Build the long-lived MinIO/S3 client for ``settings``."""
    host, secure = _normalize_endpoint(settings.S3_ENDPOINT, settings.S3_SECURE)
    return Minio(
        host,
        access_key=settings.AWS_ACCESS_KEY_ID,
        secret_key=settings.AWS_SECRET_ACCESS_KEY,
        region=settings.AWS_REGION or None,
        secure=secure,
    )


def build_facade(settings: StorageSettings | None = None) -> StorageFacade:
    """Build a configured StorageFacade from environment variables.

    Environment variables:
        AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION: credentials and region
        AWS_DEFAULT_BUCKET: bucket the facade operates on
        APP_CONFIG_FOLDER: local mirror directory
        S3_ENDPOINT: Full URL to the S3 endpoint (default: https://s3.amazonaws.com)

    The bucket and config folder are not touched; call ``initialize()`` for that.
    """
    settings = settings or load_settings()
    store = MinioObjectStore(build_client(settings), poll_interval=settings.BUCKET_WAIT_INTERVAL)
    facade = StorageFacade(store)
    facade.load_configuration(settings)
    return facade


__all__ = ["build_client", "build_facade"]
