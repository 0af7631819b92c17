"""Shared fixtures for files app tests."""

from typing import Final

import boto3
import pytest
from django.core.files.base import ContentFile
from moto import mock_aws

from server.apps.files.infrastructure.storage import (
    BlobStore,
    S3BlobStorage,
    get_blob_store,
)

_TEST_BUCKET: Final = 'file-locker'


@pytest.fixture
def blob_store() -> BlobStore:
    """Blob store over the per-test local storage.

    Returns:
        BlobStore backed by ``STORAGES['default']``.
    """
    return get_blob_store()


@pytest.fixture
def mock_s3():
    """Mock S3 service with file-locker bucket.

    Yields:
        boto3 S3 resource with file-locker bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=_TEST_BUCKET)

        yield conn


@pytest.fixture
def s3_blob_store(mock_s3) -> BlobStore:
    """Blob store over the mocked bucket.

    Returns:
        BlobStore backed by S3BlobStorage.
    """
    return BlobStore(
        S3BlobStorage(
            bucket_name=_TEST_BUCKET,
            access_key='testing',
            secret_key='testing',
            region_name='us-east-1',
        ),
    )


@pytest.fixture
def sample_file_content():
    """Sample file content for testing.

    Returns:
        ContentFile with test data.
    """
    return ContentFile(b'test file content', name='test.txt')
