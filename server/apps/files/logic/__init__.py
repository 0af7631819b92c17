"""Business logic layer for files app.

This package contains all business logic for file operations:
- Metadata catalog access (``catalog``)
- Upload, download, delete and listing across both stores
  (``file_operations``)
- Detection and repair of catalog/blob divergence (``reconciliation``)

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
