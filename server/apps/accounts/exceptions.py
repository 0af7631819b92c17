"""Exceptions for accounts app."""

from typing import override

from server.apps.common.exceptions import AuthenticationError, ConflictError


class UsernameTakenError(ConflictError):
    """Raised when registering a username that already exists."""

    default_message = 'This username already exists'


class AuthenticationFailedError(AuthenticationError):
    """Raised when a username/password pair does not check out.

    Subclasses tell the logs why; clients always get the same message
    so the login endpoint cannot be used to discover usernames.
    """

    default_message = 'Invalid username or password'

    def __init__(self, username: str) -> None:
        """Initialize AuthenticationFailedError.

        Args:
            username: Username that failed to authenticate.
        """
        self.username = username
        super().__init__(f'{self.reason}: {username}')

    @property
    def reason(self) -> str:
        """Log-only reason for the failure."""
        return 'authentication failed'

    @property
    @override
    def public_message(self) -> str:
        """Same message for every failure reason."""
        return self.default_message


class AccountNotFoundError(AuthenticationFailedError):
    """Raised when no account exists for the username."""

    @property
    @override
    def reason(self) -> str:
        """Log-only reason for the failure."""
        return 'unknown account'


class InvalidPasswordError(AuthenticationFailedError):
    """Raised when the password does not match the stored hash."""

    @property
    @override
    def reason(self) -> str:
        """Log-only reason for the failure."""
        return 'wrong password'


class NotAuthenticatedError(AuthenticationError):
    """Raised when a request carries no valid session token."""

    default_message = 'You are not logged in'
