"""Local File Storage — namespaced image uploads on disk.

Invariants:
    - Only image content types in ALLOWED_CONTENT_TYPES are stored
    - Files above max_bytes are rejected before touching disk
    - Stored name is "<prefix>-<millis>-<random><ext>", unique per upload
    - save() returns the public reference "/uploads/<namespace>/<filename>"
    - remove() never raises: file cleanup must not abort a DB deletion

Design Decisions:
    - Disk writes run in a worker thread (asyncio.to_thread), same as other blocking IO
    - remove() only touches references under PUBLIC_PREFIX so externally
      hosted image URLs stored on entities are left alone
"""

import asyncio
import logging
import random
import time
from pathlib import Path, PurePosixPath

from event_site.core.errors import RequestValidationFailedError

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"

ALLOWED_CONTENT_TYPES = frozenset({
    "image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp",
})

# Stored filename prefix per namespace
FILENAME_PREFIXES = {
    "presentes": "presente",
    "album": "album",
    "story": "story",
    "backgrounds": "background",
    "pix": "qrcode",
}


class LocalFileStorage:
    """FileStorage implementation writing under a root directory."""

    def __init__(self, root_dir: str | Path, max_bytes: int = 5 * 1024 * 1024):
        self.root_dir = Path(root_dir)
        self.max_bytes = max_bytes

    async def save(
        self, namespace: str, filename: str, content_type: str | None, data: bytes,
    ) -> str:
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise RequestValidationFailedError(
                "Unsupported file type. Only JPG, PNG, GIF or WebP images are allowed.",
                "file",
            )
        if len(data) > self.max_bytes:
            raise RequestValidationFailedError(
                f"File too large (max {self.max_bytes // (1024 * 1024)} MB)", "file",
            )
        if not data:
            raise RequestValidationFailedError("Empty file", "file")

        stored_name = self._unique_name(namespace, filename)
        target_dir = self.root_dir / namespace
        await asyncio.to_thread(self._write, target_dir, stored_name, data)
        logger.info(f"Stored upload {namespace}/{stored_name} ({len(data)} bytes)")
        return f"{PUBLIC_PREFIX}{namespace}/{stored_name}"

    def remove(self, reference: str | None) -> bool:
        """Best-effort delete of a stored upload. Returns True if a file was removed."""
        path = self.resolve(reference)
        if path is None:
            return False
        try:
            if path.is_file():
                path.unlink()
                logger.info(f"Removed upload {reference}")
                return True
        except OSError as e:
            logger.error(f"Failed to remove upload {reference}: {e}")
        return False

    def resolve(self, reference: str | None) -> Path | None:
        """Map a public reference back to its path under root_dir."""
        if not reference or not reference.startswith(PUBLIC_PREFIX):
            return None
        relative = PurePosixPath(reference[len(PUBLIC_PREFIX):])
        if ".." in relative.parts or relative.is_absolute():
            return None
        return self.root_dir.joinpath(*relative.parts)

    @staticmethod
    def _unique_name(namespace: str, original: str) -> str:
        prefix = FILENAME_PREFIXES.get(namespace, namespace)
        ext = PurePosixPath(original or "").suffix.lower()
        millis = int(time.time() * 1000)
        suffix = random.randint(0, 10**9)
        return f"{prefix}-{millis}-{suffix}{ext}"

    @staticmethod
    def _write(target_dir: Path, name: str, data: bytes) -> None:
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / name).write_bytes(data)
