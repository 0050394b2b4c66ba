"""In-memory blob storage for tests and throwaway sessions."""

from typing import Optional

from iexpense.services.storage.interface import BlobStorageInterface


class InMemoryBlobStorage(BlobStorageInterface):
    """Dict-backed storage. Content lives as long as the instance."""

    def __init__(self, initial: Optional[dict[str, bytes]] = None):
        self._blobs: dict[str, bytes] = dict(initial or {})
        self.write_count = 0

    def read(self, key: str) -> Optional[bytes]:
        return self._blobs.get(key)

    def write(self, key: str, data: bytes) -> bool:
        self._blobs[key] = bytes(data)
        self.write_count += 1
        return True

    def keys(self) -> list[str]:
        return list(self._blobs)
