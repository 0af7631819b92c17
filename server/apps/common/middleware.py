"""Error translation at the HTTP boundary."""

import logging
from collections.abc import Callable
from typing import final

from django.core.exceptions import (
    PermissionDenied,
    SuspiciousOperation,
    ValidationError,
)
from django.http import Http404, HttpRequest, HttpResponse

from server.apps.common.exceptions import InternalError, ServiceError
from server.apps.common.http import error_response

logger = logging.getLogger(__name__)


@final
class ServiceErrorMiddleware:
    """Turn exceptions raised by views into ``{"error": ...}`` responses.

    Service errors carry their own status and client-safe message.
    Errors at 5xx were logged where they were detected, so they are not
    logged again here. Anything unexpected is logged with its traceback
    and answered with a generic 500, never with the exception text.
    """

    def __init__(
        self,
        get_response: Callable[[HttpRequest], HttpResponse],
    ) -> None:
        """Initialize the middleware.

        Args:
            get_response: Next handler in the middleware chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through unchanged."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse:
        """Build the error response for an exception raised by a view.

        Args:
            request: Request being handled.
            exception: Exception raised by the view.

        Returns:
            JSON error response.
        """
        if isinstance(exception, ServiceError):
            if exception.status_code < 500:  # noqa: WPS432
                logger.info(
                    '%s %s rejected (%d): %s',
                    request.method,
                    request.path,
                    exception.status_code,
                    exception.public_message,
                )
            return error_response(
                exception.public_message,
                status=exception.status_code,
            )

        if isinstance(exception, ValidationError):
            return error_response('; '.join(exception.messages), status=400)

        if isinstance(exception, Http404):
            return error_response('Not found', status=404)

        if isinstance(exception, PermissionDenied):
            return error_response('Forbidden', status=403)

        if isinstance(exception, SuspiciousOperation):
            logger.warning(
                'Suspicious request %s %s: %s',
                request.method,
                request.path,
                exception,
            )
            return error_response('Bad request', status=400)

        logger.exception(
            'Unhandled error on %s %s',
            request.method,
            request.path,
        )
        return error_response(InternalError.default_message, status=500)
