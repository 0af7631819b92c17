"""Session token settings."""

from server.settings.components import config

# Lifetime of a signed session token in seconds
SESSION_TOKEN_MAX_AGE = config(
    'SESSION_TOKEN_MAX_AGE',
    cast=int,
    default=24 * 60 * 60,
)

# Token transport: cookie set by /login, or the forwarded header
SESSION_TOKEN_COOKIE_NAME = 'session'
SESSION_TOKEN_HEADER = 'X-Session'

SESSION_COOKIE_SECURE = config(
    'SESSION_COOKIE_SECURE',
    cast=bool,
    default=False,
)
