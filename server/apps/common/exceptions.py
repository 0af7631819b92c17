"""Error taxonomy shared by all apps.

Every error that may cross the HTTP boundary derives from ServiceError.
``public_message`` is the only text a client ever sees; everything else
stays in the server logs.
"""

from typing import ClassVar, override


class ServiceError(Exception):
    """Base class for errors translated into JSON error responses."""

    status_code: ClassVar[int] = 400
    default_message: ClassVar[str] = 'Request failed'

    def __init__(self, message: str | None = None) -> None:
        """Initialize ServiceError.

        Args:
            message: Client-safe description, defaults to the class one.
        """
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def public_message(self) -> str:
        """Message sent to the client."""
        return self.message


class MalformedRequestError(ServiceError):
    """Request body could not be parsed into the expected shape."""

    default_message = 'Failed to parse the request body as JSON'


class PayloadTooLargeError(ServiceError):
    """Request body exceeds the configured size cap."""

    default_message = 'Request body too large'

    def __init__(self, limit: int) -> None:
        """Initialize PayloadTooLargeError.

        Args:
            limit: The cap that was exceeded, in bytes.
        """
        self.limit = limit
        super().__init__(f'Request body too large (limit: {limit} bytes)')


class ConflictError(ServiceError):
    """Resource with the same key already exists."""

    default_message = 'Resource already exists'


class AuthenticationError(ServiceError):
    """Request could not be tied to an account."""

    status_code = 403
    default_message = 'Authentication failed'


class NotFoundError(ServiceError):
    """Requested resource does not exist."""

    status_code = 404
    default_message = 'Not found'


class InternalError(ServiceError):
    """Store unavailable or unexpected I/O failure.

    The detail passed to the constructor is for logs only; clients get
    the generic default message.
    """

    status_code = 500
    default_message = 'Internal server error'

    @property
    @override
    def public_message(self) -> str:
        """Generic message, never the internal detail."""
        return self.default_message
