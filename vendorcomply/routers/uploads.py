"""Shared multipart upload handling for staff and portal document uploads."""


import logging

from fastapi import UploadFile

from vendorcomply.core.config import settings
from vendorcomply.core.exceptions import FileRejectedError
from vendorcomply.services.file_storage import StoredFile, save_upload

logger = logging.getLogger(__name__)

_ALLOWED_CONTENT_TYPES: set[str] = {
    "application/pdf",
    "image/jpeg",
    "image/png",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
_ALLOWED_EXTENSIONS: set[str] = {".pdf", ".jpg", ".jpeg", ".png", ".doc", ".docx"}


def _check_file_type(file: UploadFile) -> None:
    """Accept when either the content type or the extension is supported."""
    filename = (file.filename or "").lower()
    by_ext = any(filename.endswith(ext) for ext in _ALLOWED_EXTENSIONS)
    by_ct = (file.content_type or "") in _ALLOWED_CONTENT_TYPES
    if not (by_ext or by_ct):
        accepted = ", ".join(sorted(_ALLOWED_EXTENSIONS))
        raise FileRejectedError(
            f"Unsupported file type '{file.content_type}'. Accepted formats: {accepted}",
            status_code=415,
        )


async def store_upload(file: UploadFile, vendor_id: str) -> StoredFile:
    """Validate the uploaded file and hand it to file storage."""
    _check_file_type(file)

    contents = await file.read()

    if len(contents) == 0:
        raise FileRejectedError("Uploaded file is empty.")

    if len(contents) > settings.max_upload_size_bytes:
        raise FileRejectedError(
            f"File size exceeds the {settings.max_upload_size_mb}MB limit.",
            status_code=413,
        )

    stored = save_upload(contents, file.filename or "upload", settings.upload_dir, vendor_id)
    logger.debug("Stored upload %s (%d bytes)", stored.file_path, stored.file_size)
    return stored
