"""
Temporary storage for uploaded food images.

Images are written to disk only for the lifetime of one detection request.
"""

import logging
import os
import time
from typing import Optional

from werkzeug.utils import secure_filename

from calorie_tracker.utils.errors import FileTooLargeError, InvalidFileTypeError

logger = logging.getLogger(__name__)

ALLOWED_MIMETYPES = {"image/jpeg", "image/jpg", "image/png"}


class TempUpload:
    """An accepted image saved on local disk."""

    def __init__(self, path: str, filename: str, mimetype: str):
        self.path = path
        self.filename = filename
        self.mimetype = mimetype

    def __repr__(self):
        return f"<TempUpload {self.path}>"


def accept_food_image(file, upload_dir: str, max_bytes: int) -> Optional[TempUpload]:
    """
    Validate an uploaded image and save it under upload_dir.

    Args:
        file: werkzeug FileStorage from request.files, or None
        upload_dir: Directory for temporary uploads (created if missing)
        max_bytes: Largest accepted file size

    Returns:
        TempUpload, or None when no file was sent

    Raises:
        InvalidFileTypeError: If the file is not a JPEG or PNG
        FileTooLargeError: If the file is bigger than max_bytes
    """
    if file is None or not file.filename:
        return None

    if file.mimetype not in ALLOWED_MIMETYPES:
        raise InvalidFileTypeError()

    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    if size > max_bytes:
        raise FileTooLargeError()

    os.makedirs(upload_dir, exist_ok=True)
    name = secure_filename(file.filename) or "food-image"
    path = os.path.join(os.path.abspath(upload_dir), f"{int(time.time() * 1000)}-{name}")
    try:
        file.save(path)
    except Exception:
        discard_temp_file(path)
        raise

    return TempUpload(path, file.filename, file.mimetype)


def discard_temp_file(path: Optional[str]) -> bool:
    """Remove a temporary upload if it still exists. Failures are only logged."""
    if not path or not os.path.exists(path):
        return False
    try:
        os.remove(path)
    except OSError as e:
        logger.error(f"Error deleting temporary image file {path}: {e}")
        return False
    return True
