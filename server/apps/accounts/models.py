"""Database models for accounts app."""

from typing import ClassVar, Final, final, override

from django.db import models

# Constants for field max lengths
USERNAME_MAX_LENGTH: Final = 20
_PASSWORD_HASH_MAX_LENGTH: Final = 128  # Same as django.contrib.auth


@final
class Account(models.Model):
    """Registered account.

    The username is the primary key, so uniqueness is enforced by the
    database itself. Accounts are immutable once created: there is no
    rename, password change or delete path.
    """

    username = models.CharField(
        primary_key=True,
        max_length=USERNAME_MAX_LENGTH,
        help_text='3-20 alphanumeric characters',
    )

    password_hash = models.CharField(
        max_length=_PASSWORD_HASH_MAX_LENGTH,
        help_text='Encoded salted hash, never the raw password',
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Account'  # type: ignore[mutable-override]
        verbose_name_plural = 'Accounts'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['created_at']

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.username
