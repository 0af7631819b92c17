"""Database models for files app."""

from typing import ClassVar, Final, final, override

from django.db import models

# Constants for field max lengths
_OWNER_MAX_LENGTH: Final = 20  # Same as Account.username
FILENAME_MAX_LENGTH: Final = 255
CONTENT_TYPE_MAX_LENGTH: Final = 255


@final
class FileDescriptor(models.Model):
    """Catalog entry describing one stored file.

    The (owner, filename) pair is the key shared with the blob store,
    where the content lives under ``{owner}/{filename}``. The catalog is
    the authoritative record of which files exist: a row is inserted
    before the content is written and deleted before the content is
    removed. Rows are never updated in place.

    ``owner`` references the account by username only, there is no
    foreign key between the two tables.
    """

    owner = models.CharField(
        max_length=_OWNER_MAX_LENGTH,
        db_index=True,
        help_text='Username of the owning account',
    )

    filename = models.CharField(
        max_length=FILENAME_MAX_LENGTH,
    )

    content_type = models.CharField(
        max_length=CONTENT_TYPE_MAX_LENGTH,
        help_text='Content-Type header sent with the upload',
    )

    content_length = models.BigIntegerField(
        help_text='File size in bytes',
    )

    registered_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'File Descriptor'  # type: ignore[mutable-override]
        verbose_name_plural = 'File Descriptors'  # type: ignore[mutable-override]
        # Insertion order, used when listing files
        ordering: ClassVar[list[str]] = ['id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # Arbiter for concurrent uploads of the same key
            models.UniqueConstraint(
                fields=['owner', 'filename'],
                name='files_owner_filename_unique',
            ),
            models.CheckConstraint(
                condition=models.Q(content_length__gte=0),
                name='files_content_length_non_negative',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner}:{self.filename}'
