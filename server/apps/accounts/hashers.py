"""Password hasher used for new accounts."""

from typing import final

from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


@final
class AccountPasswordHasher(BCryptSHA256PasswordHasher):
    """bcrypt over SHA256 with a raised work factor.

    2**14 rounds, up from Django's 2**12. The SHA256 pre-hash lifts
    bcrypt's 72 byte password limit.
    """

    rounds = 14
