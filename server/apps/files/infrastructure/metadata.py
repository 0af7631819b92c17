"""Validation of filenames, storage keys and content types."""

import mimetypes
from pathlib import PurePosixPath
from typing import Final

from django.core.exceptions import ValidationError

from server.apps.files.models import CONTENT_TYPE_MAX_LENGTH, FILENAME_MAX_LENGTH

_DEFAULT_CONTENT_TYPE: Final = 'application/octet-stream'
_RESERVED_FILENAMES: Final = frozenset(('.', '..'))
_SEPARATORS: Final = frozenset(('/', '\\'))


def validate_filename(filename: str) -> None:
    """Validate a client supplied filename.

    A filename becomes the last component of a storage key, so it must
    not be able to address anything outside its owner's namespace.

    Args:
        filename: Filename from the request path.

    Raises:
        ValidationError: If the filename is empty, too long, a reserved
            name, or contains path separators or control characters.
    """
    if not filename:
        raise ValidationError('Filename cannot be empty')

    if len(filename) > FILENAME_MAX_LENGTH:
        raise ValidationError(
            f'Filename cannot be longer than {FILENAME_MAX_LENGTH} characters',
        )

    # Filesystems cap a path component at 255 bytes, not characters
    if len(filename.encode('utf-8', errors='surrogatepass')) > FILENAME_MAX_LENGTH:
        raise ValidationError(
            f'Filename cannot be longer than {FILENAME_MAX_LENGTH} bytes '
            'when UTF-8 encoded',
        )

    if filename in _RESERVED_FILENAMES:
        raise ValidationError('Filename cannot be "." or ".."')

    if any(char in _SEPARATORS or not char.isprintable() for char in filename):
        raise ValidationError('Filename contains forbidden characters')


def build_blob_key(owner: str, filename: str) -> str:
    """Build the storage key for an owner's file.

    Example: ('alice', 'a.txt') -> 'alice/a.txt'

    Args:
        owner: Owner username.
        filename: Validated filename.

    Returns:
        Storage key.

    Raises:
        ValidationError: If the key would escape the owner's namespace.
    """
    validate_filename(filename)
    storage_key = f'{owner}/{filename}'
    validate_blob_key(owner, storage_key)
    return storage_key


def validate_blob_key(owner: str, storage_key: str) -> None:
    """Validate storage key follows owner isolation rules.

    Ensures the key is exactly ``{owner}/{filename}``. This is the
    last check before touching the blob store for a tenant.

    Args:
        owner: Owner username.
        storage_key: Proposed storage key.

    Raises:
        ValidationError: If the key is empty, not two components, or
            its first component is not the owner.
    """
    if not storage_key:
        raise ValidationError('Storage key cannot be empty')

    path_parts = PurePosixPath(storage_key).parts
    if len(path_parts) != 2 or '/'.join(path_parts) != storage_key:
        raise ValidationError('Storage key must be "{owner}/{filename}"')

    key_owner, filename = path_parts
    if key_owner != owner:
        raise ValidationError(
            f'Storage key owner ({key_owner}) does not match '
            f'owner ({owner})',
        )

    if filename in _RESERVED_FILENAMES:
        raise ValidationError('Storage key cannot point to a directory')


def resolve_content_type(declared: str | None, filename: str) -> str:
    """Pick the content type to record for an upload.

    Uses the declared Content-Type when present, otherwise guesses from
    the filename extension.

    Args:
        declared: Content-Type header value, may be empty.
        filename: Filename with extension.

    Returns:
        Content type string (e.g., 'text/plain', 'application/pdf').
        Returns 'application/octet-stream' if nothing better is known.

    Raises:
        ValidationError: If the declared value is too long.
    """
    if declared:
        content_type = declared.strip()
        if len(content_type) > CONTENT_TYPE_MAX_LENGTH:
            raise ValidationError('Content-Type header is too long')
        if content_type:
            return content_type

    guessed, _ = mimetypes.guess_type(filename)
    if guessed is None:
        return _DEFAULT_CONTENT_TYPE
    return guessed
