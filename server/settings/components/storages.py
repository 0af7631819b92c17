"""Django storage configuration for the blob store.

The ``default`` storage holds file contents under ``{owner}/{filename}``:
- ``filesystem``: local disk rooted at ``BLOB_STORAGE_ROOT`` (default)
- ``s3``: any S3-compatible service (AWS, MinIO, Cloudflare R2)

Both backends overwrite existing keys; uniqueness is enforced by the
metadata catalog, not by the storage.
"""

from typing import Any, Final

from server.settings.components import BASE_DIR, config

BLOB_STORAGE_BACKEND = config('BLOB_STORAGE_BACKEND', default='filesystem')

if BLOB_STORAGE_BACKEND == 's3':
    _blob_storage: dict[str, Any] = {
        'BACKEND': 'server.apps.files.infrastructure.storage.S3BlobStorage',
        'OPTIONS': {
            'bucket_name': config('AWS_STORAGE_BUCKET_NAME'),
            'access_key': config('AWS_ACCESS_KEY_ID'),
            'secret_key': config('AWS_SECRET_ACCESS_KEY'),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='auto',
            ),
            'default_acl': None,  # Inherit bucket ACL
        },
    }
else:
    _blob_storage = {
        'BACKEND': 'server.apps.files.infrastructure.storage.LocalBlobStorage',
        'OPTIONS': {
            'location': config(
                'BLOB_STORAGE_ROOT',
                default=str(BASE_DIR.joinpath('files')),
            ),
        },
    }

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': _blob_storage,
}
