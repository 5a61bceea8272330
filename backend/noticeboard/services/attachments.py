# noticeboard/services/attachments.py
"""
Storage for notice attachments.
Uploaded images and PDFs are written to the upload directory under a random
name and served back from /uploads.
"""
import logging
import os
import uuid
from fastapi import UploadFile

logger = logging.getLogger("uvicorn.error")

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".webp", ".pdf"}
URL_PREFIX = "/uploads/"


class AttachmentError(Exception):
    """Rejected upload; `code` is returned to the client as the error detail."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


async def save_upload(upload: UploadFile, upload_dir: str, max_bytes: int) -> tuple[str, str]:
    """
    Validate and store an uploaded file.

    Args:
        upload: File from a multipart form
        upload_dir: Directory to write into (created if missing)
        max_bytes: Size limit

    Returns:
        (url, original_name), url being "/uploads/<uuid><ext>"

    Raises:
        AttachmentError: ATTACHMENT_TYPE_NOT_ALLOWED or ATTACHMENT_TOO_LARGE
    """
    original_name = os.path.basename(upload.filename or "")
    ext = os.path.splitext(original_name)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise AttachmentError("ATTACHMENT_TYPE_NOT_ALLOWED", f"File type '{ext or '?'}' not allowed")

    # One byte past the limit is enough to tell an oversized file apart
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise AttachmentError("ATTACHMENT_TOO_LARGE", f"File exceeds {max_bytes} bytes")

    os.makedirs(upload_dir, exist_ok=True)
    stored_name = f"{uuid.uuid4().hex}{ext}"
    with open(os.path.join(upload_dir, stored_name), "wb") as f:
        f.write(content)
    return URL_PREFIX + stored_name, original_name


def delete_attachment(url: str | None, upload_dir: str) -> bool:
    """
    Remove a stored attachment by its /uploads URL.

    Returns True if a file was removed. URLs outside /uploads are ignored.
    """
    if not url or not url.startswith(URL_PREFIX):
        return False
    name = os.path.basename(url[len(URL_PREFIX):])
    path = os.path.join(upload_dir, name)
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("[attachments] already gone: %s", path)
        return False
    return True
