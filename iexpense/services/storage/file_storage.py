"""
File-backed Blob Storage

One file per key inside a data directory. This is the on-device
equivalent of a preferences store: small, local, single user.

TRADEOFFS:
- Whole-file rewrite on every write (fine for a personal expense list)
- No locking; a single process owns the directory
"""

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from iexpense.services.storage.interface import (
    BlobStorageInterface,
    StorageReadError,
    StorageWriteError,
)


_KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")

logger = structlog.get_logger(__name__)


class FileBlobStorage(BlobStorageInterface):
    """
    Stores each blob as ``<directory>/<key><suffix>``.

    Writes go to a temporary file in the same directory which then
    replaces the target, so a crash mid-write leaves the previous blob intact.
    """

    def __init__(self, directory: Union[str, Path], suffix: str = ".json"):
        self._directory = Path(directory).expanduser()
        self._suffix = suffix

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._directory / f"{key}{self._suffix}"

    def read(self, key: str) -> Optional[bytes]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def write(self, key: str, data: bytes) -> bool:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._directory,
                prefix=f".{key}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

        logger.debug("blob_written", key=key, path=str(path), size_bytes=len(data))
        return True
