"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Blob storage backends (local disk, S3/MinIO/R2) and the BlobStore
- Key and metadata validation (filenames, storage keys, content types)

Keep infrastructure concerns separate from business logic.
"""
