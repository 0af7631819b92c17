"""Tests for metadata utilities."""

import pytest
from django.core.exceptions import ValidationError

from server.apps.files.infrastructure.metadata import (
    build_blob_key,
    resolve_content_type,
    validate_blob_key,
    validate_filename,
)


@pytest.mark.parametrize(
    'filename',
    ['a.txt', 'report 2024.pdf', '.hidden', 'x' * 255, 'zażółć.txt'],
)
def test_validate_filename_valid(filename):
    """Test valid filenames pass validation."""
    validate_filename(filename)


@pytest.mark.parametrize(
    'filename',
    [
        '',
        '.',
        '..',
        'x' * 256,
        'dir/file.txt',
        '../alice/a.txt',
        'dir\\file.txt',
        'line\nbreak',
        'nul\x00byte',
    ],
)
def test_validate_filename_invalid(filename):
    """Test filenames that could escape the namespace are rejected."""
    with pytest.raises(ValidationError):
        validate_filename(filename)


def test_validate_filename_counts_utf8_bytes():
    """Test the length limit applies to the encoded name, not characters."""
    validate_filename('é' * 127)

    with pytest.raises(ValidationError, match='bytes'):
        validate_filename('é' * 200)
    with pytest.raises(ValidationError, match='bytes'):
        validate_filename('a' + '€' * 85)


def test_build_blob_key():
    """Test storage keys are ``{owner}/{filename}``."""
    assert build_blob_key('alice', 'a.txt') == 'alice/a.txt'


def test_build_blob_key_rejects_traversal():
    """Test a filename cannot point into another owner's namespace."""
    with pytest.raises(ValidationError):
        build_blob_key('alice', '../bob/a.txt')


def test_validate_blob_key_valid():
    """Test valid storage keys pass validation."""
    validate_blob_key('alice', 'alice/test.txt')
    validate_blob_key('bob', 'bob/.hidden')


@pytest.mark.parametrize(
    'storage_key',
    [
        '',
        'bob/test.txt',
        'alice',
        'alice/',
        'alice/..',
        'alice/sub/test.txt',
        '/alice/test.txt',
        'alice//test.txt',
    ],
)
def test_validate_blob_key_invalid(storage_key):
    """Test storage keys outside ``{owner}/{filename}`` are rejected."""
    with pytest.raises(ValidationError):
        validate_blob_key('alice', storage_key)


def test_validate_blob_key_owner_mismatch_message():
    """Test the error names both owners."""
    with pytest.raises(ValidationError, match='bob.*alice'):
        validate_blob_key('alice', 'bob/test.txt')


class TestResolveContentType:
    """Test picking the content type to record."""

    def test_declared_wins(self):
        """Test the declared Content-Type is kept as sent."""
        declared = 'text/plain; charset=utf-8'

        assert resolve_content_type(declared, 'a.pdf') == declared

    @pytest.mark.parametrize(
        ('filename', 'expected'),
        [
            ('test.pdf', 'application/pdf'),
            ('test.txt', 'text/plain'),
            ('test.png', 'image/png'),
        ],
    )
    def test_guessed_from_extension(self, filename, expected):
        """Test the extension is used when nothing is declared."""
        assert resolve_content_type(None, filename) == expected
        assert resolve_content_type('  ', filename) == expected

    def test_unknown(self):
        """Test unknown extensions fall back to octet-stream."""
        assert resolve_content_type('', 'test.unknown') == (
            'application/octet-stream'
        )

    def test_too_long(self):
        """Test oversized Content-Type headers are rejected."""
        with pytest.raises(ValidationError):
            resolve_content_type('x' * 256, 'a.txt')
