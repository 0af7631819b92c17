"""Fixtures shared by all tests."""

from typing import Final

import pytest
from django.test import Client

from server.apps.accounts.logic.credentials import register
from server.apps.accounts.logic.session_tokens import get_session_signer
from server.apps.accounts.models import Account

TEST_PASSWORD: Final = 'correcthorse'  # noqa: S105


@pytest.fixture(autouse=True)
def _fast_password_hashers(settings) -> None:
    """Use a fast hasher, bcrypt at cost 14 is far too slow for tests."""
    settings.PASSWORD_HASHERS = [
        'django.contrib.auth.hashers.MD5PasswordHasher',
    ]


@pytest.fixture(autouse=True)
def _blob_storage(settings, tmp_path) -> None:
    """Keep blobs in a per-test directory."""
    settings.STORAGES = {
        'default': {
            'BACKEND': 'server.apps.files.infrastructure.storage.LocalBlobStorage',
            'OPTIONS': {'location': str(tmp_path / 'blobs')},
        },
    }


@pytest.fixture
def password() -> str:
    """Password used by the test accounts.

    Returns:
        Raw password that passes validation.
    """
    return TEST_PASSWORD


@pytest.fixture
def account(db) -> Account:
    """Create test account.

    Returns:
        Account instance for testing.
    """
    return register('alice', TEST_PASSWORD)


@pytest.fixture
def other_account(db) -> Account:
    """Create second test account for isolation tests.

    Returns:
        Second account instance.
    """
    return register('bob', TEST_PASSWORD)


@pytest.fixture
def session_token(account: Account) -> str:
    """Issue a session token for the test account.

    Returns:
        Signed token for ``alice``.
    """
    return get_session_signer().issue(account.username)


@pytest.fixture
def auth_client(client: Client, session_token: str) -> Client:
    """Test client logged in as the test account via cookie.

    Returns:
        Django test client carrying the session cookie.
    """
    client.cookies['session'] = session_token
    return client
