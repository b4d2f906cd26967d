"""
Local-disk blob storage for uploaded images.

Blobs live in one flat directory and are named `<unix-millis>_<filename>`.
They are addressed externally as `<public-base-url>/uploads/<name>`, which is
also where `main.py` mounts the directory for static serving. Callers only go
through `BlobStore`, so the naming scheme can change without touching them.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from .errors import UnsupportedMediaTypeError

ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})

URL_PREFIX = "/uploads"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredBlob:
    name: str
    url: str
    path: Path
    size_bytes: int


def normalize_content_type(content_type: str | None) -> str:
    """
    `image/PNG; charset=binary` -> `image/png`.
    """
    return (content_type or "").split(";", 1)[0].strip().lower()


def _basename(filename: str) -> str:
    # Clients may send `C:\photos\a.png` or `../a.png`; only the last
    # component is kept so the stored name stays a single URL segment.
    return PurePosixPath((filename or "").replace("\\", "/")).name


class BlobStore:
    def __init__(
        self,
        root: Path | str,
        base_url: str,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")
        self._clock = clock

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def check_content_type(self, content_type: str | None) -> str:
        normalized = normalize_content_type(content_type)
        if normalized not in ALLOWED_CONTENT_TYPES:
            raise UnsupportedMediaTypeError()
        return normalized

    def generate_name(self, original_filename: str) -> str:
        millis = int(self._clock() * 1000)
        return f"{millis}_{_basename(original_filename)}"

    def url_for(self, name: str) -> str:
        return f"{self.base_url}{URL_PREFIX}/{name}"

    def path_for(self, name: str) -> Path:
        return self.root / name

    def store(self, data: bytes, original_filename: str, content_type: str | None) -> StoredBlob:
        """
        Write `data` under a generated name and return where it can be fetched.

        The content type is checked before anything touches the disk.
        """
        self.check_content_type(content_type)

        name = self.generate_name(original_filename)
        self.ensure_root()
        path = self.path_for(name)
        path.write_bytes(data)

        logger.info("blob_stored name=%s size_bytes=%s", name, len(data))
        return StoredBlob(name=name, url=self.url_for(name), path=path, size_bytes=len(data))

    def delete(self, name: str) -> bool:
        """
        Best-effort removal. Returns False (and logs a warning) instead of raising.
        """
        path = self.path_for(name)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("blob_delete_missing name=%s", name)
            return False
        except OSError as exc:
            logger.warning("blob_delete_failed name=%s error=%s", name, exc)
            return False

        logger.info("blob_deleted name=%s", name)
        return True

    @staticmethod
    def name_from_url(url: str) -> str:
        """
        Inverse of `url_for`: the last path segment, no validation.
        """
        return (url or "").rsplit("/", 1)[-1]
