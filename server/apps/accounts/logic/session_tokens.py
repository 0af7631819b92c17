"""Stateless session tokens.

A token is a compressed, base64 encoded ``{"username": ...}`` payload
with a timestamp and an HMAC signature appended by Django's
TimestampSigner. Nothing is stored server-side: a token is valid while
its signature checks out against the current or a fallback secret and
it is younger than ``max_age``. There is no revocation list.
"""

import logging
from collections.abc import Sequence
from typing import Final, final

from django.conf import settings
from django.core import signing
from django.core.exceptions import ImproperlyConfigured
from django.http import HttpRequest

logger = logging.getLogger(__name__)

# Namespaces the signature so other signed values cannot pass as tokens
_SALT: Final = 'server.apps.accounts.session'
_USERNAME_KEY: Final = 'username'


@final
class SessionTokenSigner:
    """Issue and resolve signed session tokens.

    Configuration is passed in explicitly; use ``get_session_signer``
    to build one from Django settings.
    """

    def __init__(
        self,
        secret: str,
        max_age: int,
        fallback_secrets: Sequence[str] = (),
    ) -> None:
        """Initialize the signer.

        Args:
            secret: Current signing secret.
            max_age: Token lifetime in seconds.
            fallback_secrets: Older secrets still accepted on resolve.

        Raises:
            ImproperlyConfigured: If the secret is empty or max_age is
                not positive.
        """
        if not secret:
            raise ImproperlyConfigured('Session signing secret is empty')
        if max_age <= 0:
            raise ImproperlyConfigured('Session token max age must be > 0')

        self._signer = signing.TimestampSigner(
            key=secret,
            fallback_keys=list(fallback_secrets),
            salt=_SALT,
        )
        self._max_age = max_age

    @property
    def max_age(self) -> int:
        """Token lifetime in seconds."""
        return self._max_age

    def issue(self, username: str) -> str:
        """Create a token for the username.

        Args:
            username: Authenticated username.

        Returns:
            URL-safe signed token.
        """
        return self._signer.sign_object(
            {_USERNAME_KEY: username},
            compress=True,
        )

    def resolve(self, token: str | None) -> str | None:
        """Get the username a token was issued for.

        Args:
            token: Token from the client, may be missing.

        Returns:
            Username, or None if the token is missing, malformed,
            tampered with or expired.
        """
        if not token:
            return None

        try:
            payload = self._signer.unsign_object(token, max_age=self._max_age)
        except signing.SignatureExpired:
            logger.info('Rejected expired session token')
            return None
        except signing.BadSignature:
            logger.warning('Rejected malformed or tampered session token')
            return None

        if not isinstance(payload, dict):
            return None
        username = payload.get(_USERNAME_KEY)
        if not isinstance(username, str) or not username:
            return None
        return username


def get_session_signer() -> SessionTokenSigner:
    """Build a signer from Django settings.

    Returns:
        SessionTokenSigner using ``SECRET_KEY`` and its fallbacks.
    """
    return SessionTokenSigner(
        secret=settings.SECRET_KEY,
        max_age=settings.SESSION_TOKEN_MAX_AGE,
        fallback_secrets=settings.SECRET_KEY_FALLBACKS,
    )


def get_request_token(request: HttpRequest) -> str | None:
    """Get the session token carried by a request.

    The forwarded header wins over the cookie, so clients that cannot
    keep cookies can still authenticate.

    Args:
        request: Incoming request.

    Returns:
        Raw token, or None if the request has none.
    """
    header_token = request.headers.get(settings.SESSION_TOKEN_HEADER)
    if header_token:
        return header_token
    return request.COOKIES.get(settings.SESSION_TOKEN_COOKIE_NAME)
