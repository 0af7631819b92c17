"""Integration tests for the S3 blob backend against MinIO.

These tests need a reachable S3-compatible endpoint (MinIO in Docker
Compose) and are deselected by default; run them with
``pytest -m integration``.
"""

import os
from io import BytesIO
from typing import Final

import boto3
import pytest
from botocore.client import BaseClient
from botocore.exceptions import ClientError

from server.apps.files.exceptions import BlobNotFoundError
from server.apps.files.infrastructure.storage import BlobStore, S3BlobStorage

_TEST_BUCKET: Final = 'file-locker-integration'
_TEST_OWNER: Final = 'integration'
_TEST_FILENAME: Final = 'test-file.txt'
_TEST_FILE_CONTENT: Final = b'Hello from MinIO integration test!'


def _endpoint() -> dict[str, str]:
    return {
        'endpoint_url': os.getenv('MINIO_ENDPOINT', 'http://minio:9000'),
        'access_key': os.getenv('MINIO_ROOT_USER', 'minioadmin'),
        'secret_key': os.getenv('MINIO_ROOT_PASSWORD', 'minioadmin'),
    }


@pytest.fixture
def s3_client() -> BaseClient:
    """Create S3 client for MinIO.

    Returns:
        Configured boto3 S3 client for MinIO.
    """
    endpoint = _endpoint()
    return boto3.client(
        's3',
        endpoint_url=endpoint['endpoint_url'],
        aws_access_key_id=endpoint['access_key'],
        aws_secret_access_key=endpoint['secret_key'],
        region_name='us-east-1',
    )


@pytest.fixture
def minio_blob_store(s3_client: BaseClient):
    """Blob store over a fresh MinIO bucket.

    Args:
        s3_client: boto3 S3 client.

    Yields:
        BlobStore backed by S3BlobStorage; the bucket is emptied after.
    """
    try:
        s3_client.head_bucket(Bucket=_TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=_TEST_BUCKET)

    yield BlobStore(
        S3BlobStorage(
            bucket_name=_TEST_BUCKET,
            region_name='us-east-1',
            **_endpoint(),
        ),
    )

    listing = s3_client.list_objects_v2(Bucket=_TEST_BUCKET)
    for obj in listing.get('Contents', []):
        s3_client.delete_object(Bucket=_TEST_BUCKET, Key=obj['Key'])


@pytest.mark.integration
def test_s3_client_connection(s3_client: BaseClient) -> None:
    """Test that S3 client can connect to MinIO."""
    response = s3_client.list_buckets()
    assert 'Buckets' in response


@pytest.mark.integration
def test_write_and_read(
    minio_blob_store: BlobStore,
    s3_client: BaseClient,
) -> None:
    """Test content round trips under ``{owner}/{filename}``."""
    minio_blob_store.write(
        _TEST_OWNER,
        _TEST_FILENAME,
        BytesIO(_TEST_FILE_CONTENT),
    )

    response = s3_client.head_object(
        Bucket=_TEST_BUCKET,
        Key=f'{_TEST_OWNER}/{_TEST_FILENAME}',
    )
    assert response['ContentLength'] == len(_TEST_FILE_CONTENT)
    with minio_blob_store.read(_TEST_OWNER, _TEST_FILENAME) as content:
        assert content.read() == _TEST_FILE_CONTENT


@pytest.mark.integration
def test_overwrite_keeps_key(minio_blob_store: BlobStore) -> None:
    """Test a second write replaces the object instead of renaming."""
    minio_blob_store.write(_TEST_OWNER, _TEST_FILENAME, BytesIO(b'first'))
    minio_blob_store.write(_TEST_OWNER, _TEST_FILENAME, BytesIO(b'second'))

    assert minio_blob_store.list_filenames(_TEST_OWNER) == [_TEST_FILENAME]
    assert minio_blob_store.size(_TEST_OWNER, _TEST_FILENAME) == len(b'second')


@pytest.mark.integration
def test_listing(minio_blob_store: BlobStore) -> None:
    """Test owner prefixes and filenames are listed."""
    minio_blob_store.write(_TEST_OWNER, 'a.txt', BytesIO(b'a'))
    minio_blob_store.write('other', 'b.txt', BytesIO(b'b'))

    assert minio_blob_store.list_owners() == ['integration', 'other']
    assert minio_blob_store.list_filenames(_TEST_OWNER) == ['a.txt']


@pytest.mark.integration
def test_remove(minio_blob_store: BlobStore) -> None:
    """Test removed content is gone."""
    minio_blob_store.write(
        _TEST_OWNER,
        _TEST_FILENAME,
        BytesIO(_TEST_FILE_CONTENT),
    )

    assert minio_blob_store.remove(_TEST_OWNER, _TEST_FILENAME)
    assert not minio_blob_store.exists(_TEST_OWNER, _TEST_FILENAME)
    with pytest.raises(BlobNotFoundError):
        minio_blob_store.read(_TEST_OWNER, _TEST_FILENAME)
