"""Metadata catalog: which files exist and what they are."""

import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from server.apps.files.exceptions import (
    FileConflictError,
    FileNotFoundInCatalogError,
)
from server.apps.files.models import FileDescriptor

logger = logging.getLogger(__name__)


def exists(owner: str, filename: str) -> bool:
    """Check if a catalog row exists for the key.

    Args:
        owner: Owner username.
        filename: Filename.

    Returns:
        True if the key is registered, False otherwise.
    """
    return FileDescriptor.objects.filter(owner=owner, filename=filename).exists()


def insert(
    owner: str,
    filename: str,
    content_type: str,
    content_length: int,
) -> FileDescriptor:
    """Register a new file.

    The existence check is a fast path only. When two uploads race past
    it, the unique constraint rejects the second insert and the loser
    gets the same conflict error.

    Args:
        owner: Owner username.
        filename: Filename.
        content_type: Content type to record.
        content_length: Size in bytes to record.

    Returns:
        Created FileDescriptor instance.

    Raises:
        ValidationError: If content_length is negative.
        FileConflictError: If the key is already registered.
    """
    if content_length < 0:
        raise ValidationError('Content length cannot be negative')

    if exists(owner, filename):
        logger.info('Upload rejected, key exists: %s:%s', owner, filename)
        raise FileConflictError()

    try:
        with transaction.atomic():
            descriptor = FileDescriptor.objects.create(
                owner=owner,
                filename=filename,
                content_type=content_type,
                content_length=content_length,
            )
    except IntegrityError as error:
        logger.warning(
            'Concurrent upload rejected by database: %s:%s',
            owner,
            filename,
        )
        raise FileConflictError() from error

    logger.info(
        'File registered in catalog: %s (ID: %d)',
        descriptor,
        descriptor.id,
    )
    return descriptor


def delete(owner: str, filename: str) -> None:
    """Delete a catalog row.

    Uses the number of deleted rows to detect absence, so of two
    concurrent deletes exactly one succeeds.

    Args:
        owner: Owner username.
        filename: Filename.

    Raises:
        FileNotFoundInCatalogError: If the key is not registered.
    """
    with transaction.atomic():
        deleted, _ = FileDescriptor.objects.filter(
            owner=owner,
            filename=filename,
        ).delete()

    if not deleted:
        raise FileNotFoundInCatalogError()

    logger.info('File removed from catalog: %s:%s', owner, filename)


def delete_descriptor(descriptor: FileDescriptor) -> bool:
    """Delete exactly this catalog row, not whatever holds its key now.

    A key deleted and registered again gets a new row, which this leaves
    alone.

    Args:
        descriptor: Row to delete.

    Returns:
        True if the row was deleted, False if it was already gone.
    """
    with transaction.atomic():
        deleted, _ = FileDescriptor.objects.filter(pk=descriptor.pk).delete()

    if deleted:
        logger.info(
            'File removed from catalog: %s (ID: %d)',
            descriptor,
            descriptor.pk,
        )
    return bool(deleted)


def get(owner: str, filename: str) -> FileDescriptor | None:
    """Get the descriptor for a key.

    Args:
        owner: Owner username.
        filename: Filename.

    Returns:
        FileDescriptor if registered, None otherwise.
    """
    return FileDescriptor.objects.filter(owner=owner, filename=filename).first()


def list_by_owner(owner: str) -> list[str]:
    """List an owner's filenames in insertion order.

    Args:
        owner: Owner username.

    Returns:
        Filenames, oldest upload first.
    """
    return list(
        FileDescriptor.objects.filter(owner=owner)
        .order_by('id')
        .values_list('filename', flat=True),
    )


def list_descriptors(owner: str) -> list[FileDescriptor]:
    """List an owner's descriptors in insertion order.

    Args:
        owner: Owner username.

    Returns:
        FileDescriptor instances, oldest upload first.
    """
    return list(FileDescriptor.objects.filter(owner=owner).order_by('id'))


def list_owners() -> list[str]:
    """List owners with at least one registered file.

    Returns:
        Sorted owner usernames.
    """
    return list(
        FileDescriptor.objects.order_by('owner')
        .values_list('owner', flat=True)
        .distinct(),
    )
