"""
Storage Services Package

Provides the abstract blob storage port and concrete implementations.
The expense store only depends on the interface.
"""

from iexpense.services.storage.interface import (
    BlobStorageInterface,
    StorageError,
    StorageReadError,
    StorageWriteError,
)
from iexpense.services.storage.file_storage import FileBlobStorage
from iexpense.services.storage.memory import InMemoryBlobStorage

__all__ = [
    # Interfaces
    "BlobStorageInterface",
    # Exceptions
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    # Implementations
    "FileBlobStorage",
    "InMemoryBlobStorage",
]
