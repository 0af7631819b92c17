"""HTTP views for registration and login."""

from http import HTTPStatus

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.http import require_POST

from server.apps.accounts.logic import credentials
from server.apps.accounts.logic.session_tokens import get_session_signer
from server.apps.common.http import get_string_field, read_json_object


def _read_credentials(request: HttpRequest) -> tuple[str, str]:
    """Read ``{username, password}`` from a size-capped JSON body."""
    payload = read_json_object(request, settings.CREDENTIALS_BODY_LIMIT)
    return (
        get_string_field(payload, 'username'),
        get_string_field(payload, 'password'),
    )


@require_POST
def register(request: HttpRequest) -> HttpResponse:
    """Create an account. Answers 204 with no body."""
    username, password = _read_credentials(request)
    credentials.register(username, password)
    return HttpResponse(status=HTTPStatus.NO_CONTENT)


@require_POST
def login(request: HttpRequest) -> JsonResponse:
    """Check credentials and hand out a session token.

    The token is returned in the body and also set as an HttpOnly
    cookie, so both cookie and header based clients work.
    """
    username, password = _read_credentials(request)
    account = credentials.verify(username, password)

    signer = get_session_signer()
    token = signer.issue(account.username)

    response = JsonResponse({'token': token})
    response.set_cookie(
        settings.SESSION_TOKEN_COOKIE_NAME,
        token,
        max_age=signer.max_age,
        httponly=True,
        samesite='Strict',
        secure=settings.SESSION_COOKIE_SECURE,
    )
    return response
