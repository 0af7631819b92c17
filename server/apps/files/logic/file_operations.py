"""Business logic for file operations.

Each file lives in two stores that fail independently: a row in the
metadata catalog and its content in the blob store. Per key, the pair
is in one of three states:

- Absent: no row, no content.
- Registered: row exists, content missing or incomplete. Transient
  while an upload is in flight; permanent if the upload failed.
- Present: row and content exist and the sizes agree.

Uploads register the row before writing content, so a failed upload
leaves a Registered row that reconciliation can find, rather than
content nobody knows about. Deletes remove the row first; the catalog
alone decides whether a file exists.
"""

import logging
from typing import IO

from django.core.files.base import File as DjangoFile

from server.apps.files.exceptions import (
    BlobNotFoundError,
    BlobWriteError,
    CorruptFileError,
    FileConflictError,
    FileNotFoundInCatalogError,
    IncompleteUploadError,
)
from server.apps.files.infrastructure.metadata import (
    build_blob_key,
    resolve_content_type,
    validate_filename,
)
from server.apps.files.infrastructure.storage import get_blob_store
from server.apps.files.logic import catalog
from server.apps.files.models import FileDescriptor

logger = logging.getLogger(__name__)


def check_upload(owner: str, filename: str) -> None:
    """Reject an upload early, before its body is read.

    Only a fast path: ``put_file`` checks again, and the unique
    constraint decides between racing uploads.

    Args:
        owner: Owner username (from the session, never the client).
        filename: Filename.

    Raises:
        ValidationError: If the filename is invalid.
        FileConflictError: If the key is already registered.
    """
    validate_filename(filename)
    if catalog.exists(owner, filename):
        logger.info(
            'Upload rejected before reading body: %s:%s',
            owner,
            filename,
        )
        raise FileConflictError()


def put_file(
    owner: str,
    filename: str,
    content_type: str | None,
    content_length: int,
    content: IO[bytes] | DjangoFile,
) -> FileDescriptor:
    """Store a new file.

    Transaction safety: register the catalog row first, then write the
    content. A failed write is not rolled back or retried; the key stays
    Registered and is reported by reconciliation.

    Args:
        owner: Owner username (from the session, never the client).
        filename: Filename.
        content_type: Declared content type, guessed when empty.
        content_length: Declared size in bytes.
        content: File-like object with exactly content_length bytes.

    Returns:
        Created FileDescriptor instance.

    Raises:
        ValidationError: If filename or content type are invalid.
        FileConflictError: If the key is already registered.
        BlobWriteError: If writing the content failed.
        IncompleteUploadError: If less content was stored than declared.
    """
    validate_filename(filename)
    resolved_type = resolve_content_type(content_type, filename)

    # Step 1: Register in catalog
    descriptor = catalog.insert(owner, filename, resolved_type, content_length)

    # Step 2: Write content
    blob_store = get_blob_store()
    storage_key = build_blob_key(owner, filename)
    try:
        blob_store.write(owner, filename, content)
        stored_bytes = blob_store.size(owner, filename)
    except Exception as error:
        logger.exception(
            'Content write failed, key left registered: %s',
            storage_key,
        )
        raise BlobWriteError(f'Failed to write {storage_key}') from error

    if stored_bytes != content_length:
        logger.error(
            'Stored size differs from declared size, key left registered: '
            '%s (expected %d, stored %d)',
            storage_key,
            content_length,
            stored_bytes,
        )
        raise IncompleteUploadError(storage_key, content_length, stored_bytes)

    logger.info('File stored: %s (%d bytes)', storage_key, content_length)
    return descriptor


def get_file(owner: str, filename: str) -> tuple[FileDescriptor, DjangoFile]:
    """Get a file's descriptor and open its content.

    Args:
        owner: Owner username (from the session, never the client).
        filename: Filename.

    Returns:
        Tuple of the descriptor and the open content; the caller closes
        the content.

    Raises:
        FileNotFoundInCatalogError: If the key is not registered.
        CorruptFileError: If the content is missing or its size does not
            match the descriptor.
    """
    descriptor = catalog.get(owner, filename)
    if descriptor is None:
        raise FileNotFoundInCatalogError()

    blob_store = get_blob_store()
    try:
        stored_bytes = blob_store.size(owner, filename)
        if stored_bytes == descriptor.content_length:
            return descriptor, blob_store.read(owner, filename)
    except BlobNotFoundError as error:
        logger.error('Registered file has no content: %s', descriptor)
        raise CorruptFileError() from error

    logger.error(
        'Registered file has wrong size: %s (expected %d, stored %d)',
        descriptor,
        descriptor.content_length,
        stored_bytes,
    )
    raise CorruptFileError()


def delete_file(owner: str, filename: str) -> None:
    """Delete a file.

    Transaction safety: delete the catalog row first, then remove the
    content best effort. Content that cannot be removed is logged and
    left for reconciliation; the delete still succeeds.

    Args:
        owner: Owner username (from the session, never the client).
        filename: Filename.

    Raises:
        FileNotFoundInCatalogError: If the key is not registered.
    """
    catalog.delete(owner, filename)

    if not get_blob_store().remove(owner, filename):
        logger.warning(
            'File deleted but content remains: %s',
            build_blob_key(owner, filename),
        )


def list_files(owner: str) -> list[str]:
    """List an owner's filenames.

    Reads the catalog only, the blob store is not consulted.

    Args:
        owner: Owner username (from the session, never the client).

    Returns:
        Filenames in upload order.
    """
    return catalog.list_by_owner(owner)
