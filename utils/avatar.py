"""
Default avatar synthesis.

A deterministic identicon (pydenticon, rendered through Pillow) keyed by the
display name, written as PNG into ``Settings.upload_dir``.
"""

from __future__ import annotations

import hashlib
import logging
import re
import time
from pathlib import Path
from typing import Optional

import pydenticon

from config.settings import Settings

logger = logging.getLogger(__name__)

_GRID = 5

_FOREGROUND = [
    "rgb(45,79,255)",
    "rgb(254,180,44)",
    "rgb(226,121,234)",
    "rgb(30,179,253)",
    "rgb(232,77,65)",
    "rgb(49,203,115)",
    "rgb(141,69,170)",
]
_BACKGROUND = "rgb(240,240,240)"

_generator = pydenticon.Generator(
    _GRID,
    _GRID,
    digest=hashlib.md5,
    foreground=_FOREGROUND,
    background=_BACKGROUND,
)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def render_identicon(seed: str, size: int) -> bytes:
    """PNG bytes of a ``size``×``size`` identicon for ``seed``."""
    # The grid must tile evenly; leftover pixels become padding.
    cell = max(1, (size * 4 // 5) // _GRID)
    inner = cell * _GRID
    pad = max(0, size - inner)
    top, left = pad // 2, pad // 2
    padding = (top, pad - top, left, pad - left)
    return _generator.generate(seed, inner, inner, padding=padding, output_format="png")


def avatar_filename(name: str, now_ms: Optional[int] = None) -> str:
    """
    ``<name>_<epoch-millis>.png`` with the name reduced to filename-safe chars.

    When that reduction loses characters (non-Latin names, punctuation) a
    short digest of the full name is appended, so "Анна" and "Иван" do not
    both become ``avatar_<ms>.png``.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    stem = _UNSAFE_CHARS.sub("_", name).strip("_")
    if stem != name:
        digest = hashlib.sha1(name.encode("utf-8")).hexdigest()[:8]
        stem = f"{stem or 'avatar'}_{digest}"
    return f"{stem}_{now_ms}.png"


def write_avatar(name: str, settings: Settings) -> str:
    """Generate the default avatar for ``name`` and return its filename."""
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = avatar_filename(name)
    (upload_dir / filename).write_bytes(render_identicon(name, settings.avatar_size))
    logger.debug("Wrote avatar %s", filename)
    return filename


def remove_avatar(filename: str, settings: Settings) -> None:
    """Delete a stored file; missing files are ignored."""
    try:
        (Path(settings.upload_dir) / filename).unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove %s: %s", filename, exc)
