"""Blob storage backends and the BlobStore wrapper."""

import logging
from datetime import datetime
from typing import IO, Any, final, override

from botocore.exceptions import ClientError
from django.core.exceptions import ImproperlyConfigured
from django.core.files.base import File as DjangoFile
from django.core.files.storage import FileSystemStorage, Storage, storages
from storages.backends.s3 import S3Storage
from storages.utils import clean_name

from server.apps.files.exceptions import BlobNotFoundError
from server.apps.files.infrastructure.metadata import build_blob_key

logger = logging.getLogger(__name__)


class _LoggedStorageMixin:
    """Upload and delete logging shared by the blob backends.

    Failures are logged with their traceback and re-raised, the caller
    decides what a failure means for the catalog.
    """

    def save(
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to storage with error handling and logging.

        Args:
            name: Storage key for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the key.

        Returns:
            Actual storage key used.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)  # type: ignore[misc]
            logger.info('Successfully uploaded file: %s', saved_name)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        else:
            return saved_name

    def delete(self, name: str) -> None:
        """Delete file from storage with error handling and logging.

        Args:
            name: Storage key of file to delete.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)  # type: ignore[misc]
            logger.info('Successfully deleted file: %s', name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise


@final
class LocalBlobStorage(_LoggedStorageMixin, FileSystemStorage):
    """Blob storage on the local filesystem.

    Each owner gets a directory under ``location``; it is created on
    the first upload. Saving to an existing key replaces its content.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize storage, overwriting existing files by default.

        Args:
            kwargs: FileSystemStorage options.
        """
        kwargs.setdefault('allow_overwrite', True)
        super().__init__(**kwargs)


@final
class S3BlobStorage(_LoggedStorageMixin, S3Storage):
    """Blob storage in an S3-compatible bucket.

    Prefixes play the role of owner directories, so there is nothing to
    create before the first upload. Saving to an existing key replaces
    its content.
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize storage, overwriting existing objects by default.

        Args:
            kwargs: S3Storage options.
        """
        kwargs.setdefault('file_overwrite', True)
        super().__init__(**kwargs)

    @override
    def exists(self, name: str) -> bool:
        """Check if an object exists with a HEAD request.

        Always asks the bucket, whatever ``file_overwrite`` is set to.

        Args:
            name: Storage key.

        Returns:
            True if the object exists, False otherwise.
        """
        object_key = self._normalize_name(clean_name(name))
        try:
            self.connection.meta.client.head_object(
                Bucket=self.bucket_name,
                Key=object_key,
            )
        except ClientError as error:
            status = error.response.get('ResponseMetadata', {}).get(
                'HTTPStatusCode',
            )
            if status == 404:  # noqa: WPS432
                return False
            raise
        return True


@final
class BlobStore:
    """File contents keyed by (owner, filename).

    Wraps a Django storage backend. Keys are ``{owner}/{filename}``,
    which keeps every owner's files under a prefix of their own.
    """

    def __init__(self, storage: Storage) -> None:
        """Initialize the blob store.

        Args:
            storage: Storage backend holding the blobs.
        """
        self._storage = storage

    @property
    def storage(self) -> Storage:
        """Underlying storage backend."""
        return self._storage

    def write(
        self,
        owner: str,
        filename: str,
        content: IO[bytes] | DjangoFile,
    ) -> None:
        """Write content under the key, replacing existing content.

        A missing owner namespace is not an error, the backend creates
        it as needed.

        Args:
            owner: Owner username.
            filename: Filename.
            content: File-like object to store.

        Raises:
            ImproperlyConfigured: If the backend stored the content under
                a different key (it must overwrite).
        """
        storage_key = build_blob_key(owner, filename)
        if not isinstance(content, DjangoFile):
            content = DjangoFile(content, name=filename)

        saved_name = self._storage.save(storage_key, content)
        if saved_name != storage_key:
            self.remove_key(saved_name)
            raise ImproperlyConfigured(
                f'Blob storage renamed {storage_key} to {saved_name}, '
                'it must be configured to overwrite existing files',
            )

    def read(self, owner: str, filename: str) -> DjangoFile:
        """Open stored content for reading.

        Args:
            owner: Owner username.
            filename: Filename.

        Returns:
            Open binary file, the caller closes it.

        Raises:
            BlobNotFoundError: If nothing is stored under the key.
        """
        storage_key = build_blob_key(owner, filename)
        if not self._storage.exists(storage_key):
            raise BlobNotFoundError(storage_key)
        try:
            return self._storage.open(storage_key, 'rb')
        except FileNotFoundError as error:
            raise BlobNotFoundError(storage_key) from error

    def size(self, owner: str, filename: str) -> int:
        """Get the size of stored content.

        Args:
            owner: Owner username.
            filename: Filename.

        Returns:
            Size in bytes.

        Raises:
            BlobNotFoundError: If nothing is stored under the key.
        """
        storage_key = build_blob_key(owner, filename)
        if not self._storage.exists(storage_key):
            raise BlobNotFoundError(storage_key)
        try:
            return self._storage.size(storage_key)
        except FileNotFoundError as error:
            raise BlobNotFoundError(storage_key) from error

    def exists(self, owner: str, filename: str) -> bool:
        """Check if content is stored under the key.

        Args:
            owner: Owner username.
            filename: Filename.

        Returns:
            True if content exists, False otherwise.
        """
        return self._storage.exists(build_blob_key(owner, filename))

    def remove(self, owner: str, filename: str) -> bool:
        """Remove stored content, best effort.

        Removing a key that holds nothing succeeds.

        Args:
            owner: Owner username.
            filename: Filename.

        Returns:
            True if the key holds nothing afterwards, False if the
            backend failed (the content is then orphaned).
        """
        return self.remove_key(build_blob_key(owner, filename))

    def remove_key(self, storage_key: str) -> bool:
        """Remove content by raw storage key, best effort.

        Args:
            storage_key: Storage key.

        Returns:
            True on success, False if the backend failed.
        """
        try:
            self._storage.delete(storage_key)
        except Exception:
            # Log but don't raise - the catalog no longer points here
            # The reconciliation job picks up orphaned content
            logger.exception('Failed to remove blob, orphaned: %s', storage_key)
            return False
        return True

    def list_owners(self) -> list[str]:
        """List owners that have a namespace in the store.

        Returns:
            Sorted owner names.
        """
        try:
            directories, _ = self._storage.listdir('')
        except FileNotFoundError:
            return []
        return sorted(directories)

    def list_filenames(self, owner: str) -> list[str]:
        """List filenames stored for an owner.

        Args:
            owner: Owner username.

        Returns:
            Sorted filenames, empty if the owner has no namespace.
        """
        try:
            _, files = self._storage.listdir(owner)
        except FileNotFoundError:
            return []
        return sorted(files)

    def modified_time(self, owner: str, filename: str) -> datetime:
        """Get the last modification time of stored content.

        Args:
            owner: Owner username.
            filename: Filename.

        Returns:
            Modification time (timezone aware when USE_TZ is on).
        """
        return self._storage.get_modified_time(build_blob_key(owner, filename))


def get_blob_store() -> BlobStore:
    """Get a BlobStore over the configured default storage.

    Returns:
        BlobStore backed by ``STORAGES['default']``.
    """
    return BlobStore(storages['default'])
