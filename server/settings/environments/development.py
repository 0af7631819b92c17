"""Overriding settings for local development and tests."""

from typing import Final

from server.settings.components.common import SECRET_KEY

DEBUG = True

ALLOWED_HOSTS: Final = (
    'localhost',
    '0.0.0.0',  # noqa: S104
    '127.0.0.1',
    '[::1]',
)

if not SECRET_KEY:
    SECRET_KEY = 'insecure-development-key-do-not-use-in-production'  # noqa: S105
