"""HTTP views for file storage.

Every view acts for the session owner only. The owner comes from
``session_required``; URLs carry the filename, never a username.
"""

from http import HTTPStatus

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.files.base import File as DjangoFile
from django.http import FileResponse, HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_GET, require_http_methods

from server.apps.accounts.decorators import session_required
from server.apps.common.http import declared_content_length, spool_request_body
from server.apps.files.logic import file_operations


@require_GET
@session_required
def file_list(request: HttpRequest, *, owner: str) -> JsonResponse:
    """List the owner's filenames as a JSON array."""
    return JsonResponse(file_operations.list_files(owner), safe=False)


@require_http_methods(['GET', 'PUT', 'DELETE'])
@session_required
def file_detail(
    request: HttpRequest,
    filename: str,
    *,
    owner: str,
) -> HttpResponse:
    """Download, upload or delete one file.

    Args:
        request: Incoming request.
        filename: Filename from the URL.
        owner: Session owner.

    Returns:
        File content for GET, 201 for PUT, 204 for DELETE.
    """
    if request.method == 'PUT':
        return _upload(request, owner, filename)
    if request.method == 'DELETE':
        file_operations.delete_file(owner, filename)
        return HttpResponse(status=HTTPStatus.NO_CONTENT)
    return _download(owner, filename)


def _upload(request: HttpRequest, owner: str, filename: str) -> HttpResponse:
    content_length = declared_content_length(request)
    if content_length is None:
        raise ValidationError('Content-Length header is required')
    file_operations.check_upload(owner, filename)

    spool = spool_request_body(
        request,
        settings.FILE_UPLOAD_BODY_LIMIT,
        content_length,
    )
    try:
        file_operations.put_file(
            owner,
            filename,
            request.META.get('CONTENT_TYPE'),
            content_length,
            DjangoFile(spool, name=filename),
        )
    finally:
        spool.close()

    response = HttpResponse(status=HTTPStatus.CREATED)
    response['Location'] = filename
    return response


def _download(owner: str, filename: str) -> FileResponse:
    descriptor, content = file_operations.get_file(owner, filename)
    response = FileResponse(content, content_type=descriptor.content_type)
    response['Content-Length'] = str(descriptor.content_length)
    return response
