from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class StoredFile:
    """Stable reference to an uploaded blob."""

    file_name: str
    file_path: str
    file_size: int


def _sanitize_filename(filename: str) -> str:
    """Return filename with spaces replaced by underscores and special chars removed."""
    name = filename.replace(" ", "_")
    name = re.sub(r"[^\w.\-]", "", name)
    return name or "upload"


def save_upload(raw_bytes: bytes, filename: str, uploads_dir: Path, vendor_id: str) -> StoredFile:
    """Save raw bytes under ``uploads_dir/{year}/{month:02d}/{vendor_id}/{uuid4}_{name}``.

    The returned ``file_path`` is relative to ``uploads_dir`` and uses forward
    slashes, so it stays valid if the upload root moves.
    """
    now = datetime.now()
    dest_dir = uploads_dir / str(now.year) / f"{now.month:02d}" / _sanitize_filename(vendor_id)
    dest_dir.mkdir(parents=True, exist_ok=True)

    dest_path = dest_dir / f"{uuid.uuid4()}_{_sanitize_filename(filename)}"
    dest_path.write_bytes(raw_bytes)
    return StoredFile(
        file_name=filename,
        file_path=dest_path.relative_to(uploads_dir).as_posix(),
        file_size=len(raw_bytes),
    )


def delete_upload(file_path: str, uploads_dir: Path) -> bool:
    """Remove a stored blob by its relative ``file_path``.

    Returns False when the file is already gone or the path points outside
    ``uploads_dir``.
    """
    root = uploads_dir.resolve()
    target = (root / file_path).resolve()
    if root not in target.parents or not target.is_file():
        return False
    target.unlink(missing_ok=True)
    return True
