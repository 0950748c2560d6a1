"""Bucket-scoped facade over an object store with a local mirror folder."""

from __future__ import annotations

import logging
import os
import tempfile

from s3manager.core.config import StorageSettings, load_settings
from s3manager.errors import (
    BucketCreationError,
    ConfigurationError,
    DeleteError,
    DownloadError,
    ListError,
    LocalIOError,
    StorageError,
    UploadError,
)
from s3manager.storage.contracts import ObjectListing, ObjectStoreClient

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FOLDER = "config"
DEFAULT_WAIT_TIMEOUT = 30.0


def resolve_local_path(folder: str, key: str) -> str:
    """Join ``folder`` and ``key`` without doubling the separator between them."""
    folder = folder or DEFAULT_CONFIG_FOLDER
    key = key.lstrip("/")
    if folder.endswith("/"):
        return folder + key
    return folder + "/" + key


class StorageFacade:
    """Upload, download, list and delete objects in one configured bucket.

    Downloaded objects are mirrored under ``<config_folder>/<key>``. All remote
    calls go through the injected ``ObjectStoreClient``.
    """

    def __init__(self, client: ObjectStoreClient, settings: StorageSettings | None = None):
        self._client = client
        self._bucket_name = ""
        self._config_folder = ""
        self._region: str | None = None
        self._wait_timeout = DEFAULT_WAIT_TIMEOUT
        if settings is not None:
            self.load_configuration(settings)

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    @property
    def config_folder(self) -> str:
        return self._config_folder

    # -------------
    # Configuration
    # -------------
    def load_configuration(self, settings: StorageSettings | None = None) -> None:
        """Populate bucket name and config folder from validated settings.

        Raises:
            ConfigurationError: a required key is missing or empty.
        """
        if settings is None:
            settings = load_settings()
        else:
            settings.validate_required()

        self._bucket_name = settings.AWS_DEFAULT_BUCKET
        self._config_folder = settings.APP_CONFIG_FOLDER
        self._region = settings.AWS_REGION or None
        self._wait_timeout = settings.BUCKET_WAIT_TIMEOUT

    def begin(self, settings: StorageSettings | None = None) -> None:
        """Load configuration, then initialize folder and bucket."""
        self.load_configuration(settings)
        self.initialize()

    def initialize(self) -> None:
        """Create the local config folder if needed, then ensure the bucket."""
        bucket = self._require_bucket()
        if not self._config_folder:
            raise ConfigurationError("APP_CONFIG_FOLDER")
        try:
            os.makedirs(self._config_folder, exist_ok=True)
        except OSError as exc:
            raise LocalIOError(
                "initialize", bucket, None, f"unable to create folder {self._config_folder}: {exc}"
            ) from exc
        self.ensure_bucket()

    # -------
    # Buckets
    # -------
    def bucket_exists(self) -> bool:
        """Return whether the configured bucket is visible to these credentials.

        ``False`` means the listing succeeded and the bucket is absent.

        Raises:
            ListError: the bucket listing itself failed.
        """
        bucket = self._require_bucket()
        try:
            names = self._client.list_buckets()
        except StorageError as exc:
            raise ListError("list_buckets", bucket, None, exc.message) from exc
        return bucket in names

    def ensure_bucket(self) -> None:
        """Create the configured bucket unless it already exists."""
        bucket = self._require_bucket()
        if self.bucket_exists():
            logger.debug("Bucket %s already exists", bucket)
            return

        try:
            self._client.create_bucket(bucket, self._region)
            self._client.wait_until_bucket_exists(bucket, self._wait_timeout)
        except StorageError as exc:
            raise BucketCreationError("create_bucket", bucket, None, exc.message) from exc
        logger.info("Created bucket %s (region=%s)", bucket, self._region)

    # -------
    # Objects
    # -------
    def resolve_local_path(self, key: str) -> str:
        return resolve_local_path(self._config_folder, key)

    def upload(self, source_path: str, destination_key: str) -> str:
        """Stream a local file to ``destination_key``; returns ``bucket/key``."""
        bucket = self._require_bucket()
        try:
            fh = open(source_path, "rb")
        except OSError as exc:
            raise LocalIOError(
                "upload", bucket, destination_key, f"unable to open file {source_path}: {exc}"
            ) from exc

        with fh:
            length = os.fstat(fh.fileno()).st_size
            try:
                self._client.put_object(bucket, destination_key, fh, length)
            except StorageError as exc:
                raise UploadError("upload", bucket, destination_key, exc.message) from exc

        logger.info("Uploaded %s to %s/%s (%d bytes)", source_path, bucket, destination_key, length)
        return f"{bucket}/{destination_key}"

    def download(self, key: str, local_path: str | None = None) -> str:
        """Stream ``key`` into a local file and return its path.

        Without ``local_path`` the object lands at ``resolve_local_path(key)``,
        which must stay inside the config folder.
        """
        bucket = self._require_bucket()
        if local_path is None:
            local_path = self.resolve_local_path(key)
            if not self._inside_config_folder(local_path):
                raise DownloadError(
                    "download", bucket, key, f"{local_path} resolves outside the config folder"
                )
            try:
                os.makedirs(os.path.dirname(local_path), exist_ok=True)
            except OSError as exc:
                raise DownloadError(
                    "download", bucket, key, f"unable to create directory for {local_path}: {exc}"
                ) from exc

        # Stream into a sibling temp file; an existing copy is only replaced on success.
        directory, name = os.path.split(os.path.abspath(local_path))
        try:
            fd, partial_path = tempfile.mkstemp(dir=directory, prefix=f".{name}.", suffix=".part")
        except OSError as exc:
            raise DownloadError(
                "download", bucket, key, f"unable to create file {local_path}: {exc}"
            ) from exc

        try:
            with os.fdopen(fd, "wb") as fh:
                written = self._client.get_object(bucket, key, fh)
            os.replace(partial_path, local_path)
        except (StorageError, OSError) as exc:
            self._discard_partial(partial_path)
            message = exc.message if isinstance(exc, StorageError) else str(exc)
            raise DownloadError("download", bucket, key, message) from exc

        logger.info("Downloaded %s/%s to %s (%d bytes)", bucket, key, local_path, written)
        return local_path

    def list_objects(self, bucket_name: str) -> ObjectListing:
        """List objects in ``bucket_name``, in the order the service returns them."""
        if not bucket_name:
            raise ConfigurationError("AWS_DEFAULT_BUCKET", "bucket name is empty")
        try:
            return self._client.list_objects(bucket_name)
        except StorageError as exc:
            raise ListError("list_objects", bucket_name, None, exc.message) from exc

    def delete(self, key: str) -> bool:
        """Delete ``key`` remotely and drop its local mirror.

        Returns whether a local mirror file was removed.
        """
        bucket = self._require_bucket()
        removed = self._remove_local_mirror(key)
        try:
            self._client.delete_object(bucket, key)
        except StorageError as exc:
            raise DeleteError("delete", bucket, key, exc.message) from exc
        logger.info("Deleted %s/%s", bucket, key)
        return removed

    # --------
    # Internal
    # --------
    def _require_bucket(self) -> str:
        if not self._bucket_name:
            raise ConfigurationError("AWS_DEFAULT_BUCKET", "bucket name is not configured")
        return self._bucket_name

    def _inside_config_folder(self, path: str) -> bool:
        root = os.path.realpath(self._config_folder or DEFAULT_CONFIG_FOLDER)
        target = os.path.realpath(path)
        return target != root and os.path.commonpath([root, target]) == root

    def _remove_local_mirror(self, key: str) -> bool:
        path = self.resolve_local_path(key)
        if not self._inside_config_folder(path):
            logger.debug("Skipping local removal of %s: outside the config folder", path)
            return False
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning("Unable to remove local mirror %s: %s", path, exc)
            return False
        return True

    @staticmethod
    def _discard_partial(path: str) -> None:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Unable to remove partial download %s: %s", path, exc)


__all__ = ["StorageFacade", "resolve_local_path"]
