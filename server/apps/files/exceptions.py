"""Exceptions for files app."""

from server.apps.common.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
)


class FileConflictError(ConflictError):
    """Raised when uploading to a key that is already registered."""

    default_message = 'This username + filename already exists'


class FileNotFoundInCatalogError(NotFoundError):
    """Raised when the catalog has no row for the key."""

    default_message = 'No such file was uploaded before'


class CorruptFileError(NotFoundError):
    """Raised when a catalog row exists but its content does not match.

    The content is either missing or has a different size than the
    catalog records. The key needs reconciliation; it is reported with
    its own message rather than as a plain missing file.
    """

    default_message = 'File content is missing or incomplete'


class BlobNotFoundError(Exception):
    """Raised by the blob store when no content exists under a key."""

    def __init__(self, key: str) -> None:
        """Initialize BlobNotFoundError.

        Args:
            key: Storage key that was looked up.
        """
        self.key = key
        super().__init__(f'Blob not found: {key}')


class BlobWriteError(InternalError):
    """Raised when writing content fails after the row was registered."""


class IncompleteUploadError(InternalError):
    """Raised when the stored content size differs from the declared one."""

    def __init__(self, key: str, expected_bytes: int, stored_bytes: int) -> None:
        """Initialize IncompleteUploadError.

        Args:
            key: Storage key of the upload.
            expected_bytes: Content length recorded in the catalog.
            stored_bytes: Size of the content actually stored.
        """
        self.key = key
        self.expected_bytes = expected_bytes
        self.stored_bytes = stored_bytes
        super().__init__(
            f'Upload incomplete for {key}: expected {expected_bytes} bytes, '
            f'stored {stored_bytes} bytes',
        )
