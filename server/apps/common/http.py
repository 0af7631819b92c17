"""Helpers for reading request bodies and writing JSON responses."""

import json
import tempfile
from typing import IO, Any, Final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.http import HttpRequest, JsonResponse

from server.apps.common.exceptions import (
    MalformedRequestError,
    PayloadTooLargeError,
)

_CHUNK_SIZE: Final = 64 * 1024  # 64KB reads from the request stream


def error_response(message: str, status: int) -> JsonResponse:
    """Build the ``{"error": message}`` body used by every failure.

    Args:
        message: Client-safe error message.
        status: HTTP status code.

    Returns:
        JsonResponse with the error body.
    """
    return JsonResponse({'error': message}, status=status)


def declared_content_length(request: HttpRequest) -> int | None:
    """Parse the Content-Length header.

    Args:
        request: Incoming request.

    Returns:
        Declared body length, or None when the header is absent.

    Raises:
        ValidationError: If the header is not a non-negative integer.
    """
    raw_value = request.META.get('CONTENT_LENGTH')
    if raw_value in {None, ''}:
        return None
    try:
        content_length = int(raw_value)
    except ValueError as error:
        raise ValidationError(
            'Content-Length header must be a non-negative integer',
        ) from error
    if content_length < 0:
        raise ValidationError(
            'Content-Length header must be a non-negative integer',
        )
    return content_length


def read_limited_body(request: HttpRequest, limit: int) -> bytes:
    """Read the whole request body, refusing anything over ``limit``.

    Rejects early when the declared Content-Length is already too big,
    and keeps counting while reading in case the header lies.

    Args:
        request: Incoming request.
        limit: Maximum body size in bytes.

    Returns:
        Raw body bytes.

    Raises:
        PayloadTooLargeError: If the body exceeds the limit.
    """
    declared = declared_content_length(request)
    if declared is not None and declared > limit:
        raise PayloadTooLargeError(limit)

    chunks: list[bytes] = []
    received = 0
    for chunk in iter(lambda: request.read(_CHUNK_SIZE), b''):
        received += len(chunk)
        if received > limit:
            raise PayloadTooLargeError(limit)
        chunks.append(chunk)
    return b''.join(chunks)


def read_json_object(request: HttpRequest, limit: int) -> dict[str, Any]:
    """Read a size-capped JSON object body.

    Args:
        request: Incoming request.
        limit: Maximum body size in bytes.

    Returns:
        Decoded JSON object.

    Raises:
        MalformedRequestError: If the body is not a JSON object.
        PayloadTooLargeError: If the body exceeds the limit.
    """
    body = read_limited_body(request, limit)
    try:
        payload = json.loads(body)
    except ValueError as error:
        raise MalformedRequestError() from error
    if not isinstance(payload, dict):
        raise MalformedRequestError('Request body must be a JSON object')
    return payload


def get_string_field(payload: dict[str, Any], field: str) -> str:
    """Get a required string field from a decoded JSON object.

    Args:
        payload: Decoded JSON object.
        field: Field name.

    Returns:
        Field value.

    Raises:
        MalformedRequestError: If the field is missing or not a string.
    """
    field_value = payload.get(field)
    if not isinstance(field_value, str):
        raise MalformedRequestError(f'Field "{field}" must be a string')
    return field_value


def spool_request_body(
    request: HttpRequest,
    limit: int,
    content_length: int,
) -> IO[bytes]:
    """Copy the request body into a spooled temporary file.

    Small bodies stay in memory, bigger ones roll over to disk once they
    pass ``FILE_UPLOAD_MAX_MEMORY_SIZE``. The caller owns (and closes)
    the returned file, which is rewound to the beginning.

    Args:
        request: Incoming request.
        limit: Maximum body size in bytes.
        content_length: Declared body length.

    Returns:
        Spooled file holding exactly ``content_length`` bytes.

    Raises:
        PayloadTooLargeError: If the body exceeds the limit.
        MalformedRequestError: If the body ends before Content-Length.
    """
    if content_length > limit:
        raise PayloadTooLargeError(limit)

    spool = tempfile.SpooledTemporaryFile(  # noqa: SIM115
        max_size=settings.FILE_UPLOAD_MAX_MEMORY_SIZE,
    )
    try:
        received = 0
        for chunk in iter(lambda: request.read(_CHUNK_SIZE), b''):
            received += len(chunk)
            if received > limit:
                raise PayloadTooLargeError(limit)
            spool.write(chunk)
        if received != content_length:
            raise MalformedRequestError(
                'Request body is shorter than its Content-Length',
            )
    except BaseException:
        spool.close()
        raise

    spool.seek(0)
    return spool
