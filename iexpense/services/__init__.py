"""Services package."""

from iexpense.services.storage import (
    BlobStorageInterface,
    FileBlobStorage,
    InMemoryBlobStorage,
    StorageError,
    StorageReadError,
    StorageWriteError,
)

__all__ = [
    # Storage services
    "BlobStorageInterface",
    "FileBlobStorage",
    "InMemoryBlobStorage",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
]
