"""
Blob store for uploaded images.

LocalBlobStore keeps blobs under a directory and serves them from a
public URL prefix (a static file host or CDN in front of that directory).
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Optional, Protocol

from outline_admin.shared.errors import PersistenceFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StorageRef:
    """Reference to an uploaded blob: its normalized relative path."""

    path: str


class BlobStore(Protocol):
    """Operations the console needs from object storage."""

    async def upload(self, path: str, data: bytes) -> StorageRef: ...

    def public_url(self, ref: StorageRef) -> str: ...


def normalize_blob_path(path: str) -> str:
    """
    Normalize a blob path to a relative POSIX path.

    Raises:
        ValueError: If the path is empty or escapes the store root
    """
    parts = [p for p in PurePosixPath(path.replace("\\", "/")).parts if p not in ("", ".", "/")]
    if not parts or ".." in parts:
        raise ValueError(f"Invalid blob path: {path!r}")
    return "/".join(parts)


class LocalBlobStore:
    """Filesystem-backed blob store."""

    def __init__(self, root: Path, public_base_url: Optional[str] = None):
        self.root = Path(root)
        self.public_base_url = (public_base_url or self.root.resolve().as_uri()).rstrip("/")

    async def upload(self, path: str, data: bytes) -> StorageRef:
        """
        Write bytes to path, overwriting any previous blob there.

        Raises:
            PersistenceFailure: If the file cannot be written
        """
        ref = StorageRef(normalize_blob_path(path))
        target = self.root / ref.path
        try:
            await asyncio.to_thread(self._write, target, data)
        except OSError as e:
            logger.error(f"Blob upload failed for {ref.path}: {e}")
            raise PersistenceFailure(f"Could not upload {ref.path}") from e

        logger.info(f"Uploaded blob {ref.path} ({len(data)} bytes)")
        return ref

    @staticmethod
    def _write(target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    def public_url(self, ref: StorageRef) -> str:
        return f"{self.public_base_url}/{ref.path}"
