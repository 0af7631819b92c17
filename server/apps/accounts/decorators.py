"""View decorators for session authentication."""

import functools
import logging
from collections.abc import Callable
from typing import Any

from django.http import HttpRequest, HttpResponse

from server.apps.accounts.exceptions import NotAuthenticatedError
from server.apps.accounts.logic.session_tokens import (
    get_request_token,
    get_session_signer,
)

logger = logging.getLogger(__name__)

_View = Callable[..., HttpResponse]


def session_required(view_func: _View) -> _View:
    """Resolve the session owner before calling the view.

    The resolved username is passed to the view as the ``owner`` keyword
    argument. It is the only identity file views may act for; nothing
    the client sends can replace it.

    Args:
        view_func: View taking an ``owner`` keyword argument.

    Returns:
        Wrapped view raising NotAuthenticatedError without a valid token.
    """

    @functools.wraps(view_func)
    def _wrapped_view(
        request: HttpRequest,
        *args: Any,
        **kwargs: Any,
    ) -> HttpResponse:
        owner = get_session_signer().resolve(get_request_token(request))
        if owner is None:
            logger.debug('No valid session for %s %s', request.method, request.path)
            raise NotAuthenticatedError()
        return view_func(request, *args, owner=owner, **kwargs)

    return _wrapped_view
