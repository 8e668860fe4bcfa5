"""
Storage for avatars uploaded with a profile update.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from config.settings import Settings

logger = logging.getLogger(__name__)

_ALLOWED_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


async def save_upload(upload: UploadFile, settings: Settings) -> str:
    """Store ``upload`` under a fresh name in the uploads dir; return the filename."""
    suffix = Path(upload.filename or "").suffix.lower()
    if suffix not in _ALLOWED_SUFFIXES:
        suffix = ".png"

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{uuid.uuid4().hex}{suffix}"
    content = await upload.read()
    (upload_dir / filename).write_bytes(content)
    logger.info("Stored upload %s (%d bytes)", filename, len(content))
    return filename
