"""Business logic for account registration and password checks."""

import logging
import re
from typing import Final

from django.contrib.auth.hashers import check_password, make_password
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from server.apps.accounts.exceptions import (
    AccountNotFoundError,
    InvalidPasswordError,
    UsernameTakenError,
)
from server.apps.accounts.models import USERNAME_MAX_LENGTH, Account

_USERNAME_MIN_LENGTH: Final = 3
_PASSWORD_MIN_LENGTH: Final = 8
_USERNAME_PATTERN: Final = re.compile('[A-Za-z0-9]+')

logger = logging.getLogger(__name__)


def validate_credentials(username: str, password: str) -> None:
    """Validate registration input before it reaches the database.

    Args:
        username: Requested username.
        password: Raw password.

    Raises:
        ValidationError: If the username length is outside 3-20, the
            username has non-alphanumeric characters, or the password
            is shorter than 8 characters.
    """
    if not _USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            'Usernames must be at least 3 characters and no more than 20',
        )

    if not _USERNAME_PATTERN.fullmatch(username):
        raise ValidationError(
            'Usernames may only contain alphanumeric characters',
        )

    if len(password) < _PASSWORD_MIN_LENGTH:
        raise ValidationError('Password must be at least 8 characters')


def account_exists(username: str) -> bool:
    """Check if an account exists.

    Args:
        username: Username to look up.

    Returns:
        True if the account exists, False otherwise.
    """
    return Account.objects.filter(username=username).exists()


def register(username: str, password: str) -> Account:
    """Create an account with a hashed password.

    The existence check only rejects obvious duplicates early. Two
    concurrent registrations can both pass it; the primary key then
    rejects the second insert, which is reported the same way.

    Args:
        username: Requested username.
        password: Raw password, hashed before storage.

    Returns:
        Created Account instance.

    Raises:
        ValidationError: If username or password are invalid.
        UsernameTakenError: If the username already exists.
    """
    validate_credentials(username, password)

    if account_exists(username):
        logger.info('Registration rejected, username taken: %s', username)
        raise UsernameTakenError()

    password_hash = make_password(password)

    try:
        with transaction.atomic():
            account = Account.objects.create(
                username=username,
                password_hash=password_hash,
            )
    except IntegrityError as error:
        logger.warning(
            'Concurrent registration rejected by database: %s',
            username,
        )
        raise UsernameTakenError() from error

    logger.info('Account registered: %s', username)
    return account


def verify(username: str, password: str) -> Account:
    """Check a username/password pair.

    Runs the hasher even when the account does not exist, so response
    timing does not reveal which usernames are registered.

    Args:
        username: Username to authenticate.
        password: Raw password.

    Returns:
        Authenticated Account instance.

    Raises:
        AccountNotFoundError: If no account has this username.
        InvalidPasswordError: If the password does not match.
    """
    account = Account.objects.filter(username=username).first()

    if account is None:
        make_password(password)
        logger.warning('Authentication failed, unknown account: %s', username)
        raise AccountNotFoundError(username)

    if not check_password(password, account.password_hash):
        logger.warning('Authentication failed, wrong password: %s', username)
        raise InvalidPasswordError(username)

    logger.info('Account authenticated: %s', username)
    return account
