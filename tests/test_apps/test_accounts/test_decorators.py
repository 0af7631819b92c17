"""Tests for the session_required decorator."""

import pytest
from django.http import JsonResponse

from server.apps.accounts.decorators import session_required
from server.apps.accounts.exceptions import NotAuthenticatedError
from server.apps.accounts.logic.session_tokens import get_session_signer


@session_required
def _whoami(request, *, owner):
    return JsonResponse({'owner': owner})


class TestSessionRequired:
    """Test owner resolution for protected views."""

    def test_header_token(self, rf):
        """Test the owner is taken from a valid header token."""
        token = get_session_signer().issue('alice')
        request = rf.get('/files', headers={'X-Session': token})

        response = _whoami(request)

        assert response.status_code == 200
        assert b'alice' in response.content

    def test_cookie_token(self, rf):
        """Test the owner is taken from a valid session cookie."""
        request = rf.get('/files')
        request.COOKIES['session'] = get_session_signer().issue('bob')

        assert b'bob' in _whoami(request).content

    def test_missing_token(self, rf):
        """Test requests without a token are rejected."""
        with pytest.raises(NotAuthenticatedError) as exc_info:
            _whoami(rf.get('/files'))

        assert exc_info.value.status_code == 403
        assert exc_info.value.public_message == 'You are not logged in'

    def test_invalid_token(self, rf):
        """Test requests with a forged token are rejected."""
        request = rf.get('/files', headers={'X-Session': 'forged'})

        with pytest.raises(NotAuthenticatedError):
            _whoami(request)

    def test_owner_cannot_be_overridden(self, rf):
        """Test an owner passed in the query string is ignored."""
        token = get_session_signer().issue('alice')
        request = rf.get('/files?owner=bob', headers={'X-Session': token})

        assert b'alice' in _whoami(request).content
