"""JSON error handlers wired in ``server.urls``."""

from django.http import HttpRequest, JsonResponse

from server.apps.common.exceptions import InternalError
from server.apps.common.http import error_response


def bad_request(request: HttpRequest, exception: Exception) -> JsonResponse:
    """Answer 400 errors raised outside of API views."""
    return error_response('Bad request', status=400)


def permission_denied(
    request: HttpRequest,
    exception: Exception,
) -> JsonResponse:
    """Answer 403 errors raised outside of API views."""
    return error_response('Forbidden', status=403)


def not_found(request: HttpRequest, exception: Exception) -> JsonResponse:
    """Answer requests for unknown routes."""
    return error_response('Not found', status=404)


def server_error(request: HttpRequest) -> JsonResponse:
    """Answer unhandled errors with the generic message."""
    return error_response(InternalError.default_message, status=500)
