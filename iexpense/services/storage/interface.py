"""
Abstract Storage Interface

DESIGN DECISION: The expense store never touches the filesystem directly.
It talks to a key-value blob port passed into its constructor. This allows us to:
1. Use in-memory storage for testing
2. Swap the on-disk layout without touching the store
3. Inject failing storage to exercise the fail-soft paths

The interface is intentionally tiny: one opaque blob per key, read and replaced whole.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BlobStorageInterface(ABC):
    """
    Abstract key-value storage for opaque byte blobs.

    Any storage implementation (files, in-memory, platform preferences)
    must implement these methods.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[bytes]:
        """
        Read the blob stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored bytes, or None if nothing is stored under the key

        Raises:
            StorageReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, data: bytes) -> bool:
        """
        Replace the blob stored under a key.

        Args:
            key: Storage key
            data: Full new content

        Returns:
            True if written successfully

        Raises:
            StorageWriteError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageReadError(StorageError):
    """Could not read from the storage backend."""
    pass


class StorageWriteError(StorageError):
    """Could not write to the storage backend."""
    pass
