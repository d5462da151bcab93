"""Disk storage for uploaded avatar images."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path, PurePosixPath

from fastapi import UploadFile

from ideaboard.core.errors import ValidationFailed
from ideaboard.core.settings import settings

logger = logging.getLogger(__name__)

AVATAR_SUBDIR = "avatars"
PUBLIC_PREFIX = "/uploads"
_CHUNK_SIZE = 64 * 1024


def _describe_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes // 1024}KB"


class AvatarStorage:
    """Writes avatars under ``<root>/avatars`` and addresses them by public URI."""

    def __init__(self, root: str | Path | None = None, max_bytes: int | None = None) -> None:
        self.root = Path(root or settings.upload_dir)
        self.max_bytes = max_bytes or settings.avatar_max_bytes

    @property
    def directory(self) -> Path:
        return self.root / AVATAR_SUBDIR

    def save(self, upload: UploadFile, user_id: int) -> str:
        """Persist ``upload`` and return its public URI.

        Raises:
            ValidationFailed: If the file is not an image or exceeds the size cap.
        """
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            raise ValidationFailed("Only image files are allowed!")

        suffix = Path(upload.filename or "").suffix.lower()
        filename = f"avatar-{user_id}-{uuid.uuid4().hex}{suffix}"
        self.directory.mkdir(parents=True, exist_ok=True)
        destination = self.directory / filename

        written = 0
        try:
            with destination.open("wb") as out:
                while chunk := upload.file.read(_CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_bytes:
                        limit = _describe_size(self.max_bytes)
                        raise ValidationFailed(f"Avatar must be at most {limit}")
                    out.write(chunk)
        except ValidationFailed:
            destination.unlink(missing_ok=True)
            raise

        logger.info("Stored avatar %s (%d bytes) for user %s", filename, written, user_id)
        return f"{PUBLIC_PREFIX}/{AVATAR_SUBDIR}/{filename}"

    def remove(self, uri: str | None) -> None:
        """Delete the file behind a previously issued URI; failures are only logged."""
        if not uri or not uri.startswith(f"{PUBLIC_PREFIX}/{AVATAR_SUBDIR}/"):
            return
        name = PurePosixPath(uri).name
        path = self.directory / name
        try:
            path.unlink()
        except FileNotFoundError:
            logger.warning("Old avatar already missing: %s", path)
        except OSError as exc:
            logger.error("Failed to delete old avatar %s: %s", path, exc)


def get_avatar_storage() -> AvatarStorage:
    """Return storage rooted at the configured upload directory."""
    return AvatarStorage()
