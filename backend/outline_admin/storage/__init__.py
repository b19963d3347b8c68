"""
Storage backends.

Usage:
    from outline_admin.storage import SQLDocumentStore, LocalBlobStore
"""
from .documents import Document, DocumentStore, SQLDocumentStore
from .blobs import BlobStore, LocalBlobStore, StorageRef, normalize_blob_path

__all__ = [
    "Document",
    "DocumentStore",
    "SQLDocumentStore",
    "BlobStore",
    "LocalBlobStore",
    "StorageRef",
    "normalize_blob_path",
]
