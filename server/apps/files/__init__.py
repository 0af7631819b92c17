"""Files app: metadata catalog, blob store and the file service."""
