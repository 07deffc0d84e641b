# pizzeria/utils/uploads.py
import logging
import os
import random
import time
from typing import Optional

from fastapi import HTTPException, UploadFile

from pizzeria.core.config import settings
from pizzeria.core.constants import ALLOWED_IMAGE_EXTS, PLACEHOLDER_MARKER, UPLOAD_URL_PREFIX

log = logging.getLogger(__name__)


def _ensure_upload_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def generate_upload_filename(fieldname: str, original_filename: str) -> str:
    """`<fieldname>-<epoch millis>-<9 random digits><.ext>`"""
    ext = os.path.splitext(original_filename or "")[1].lower()
    millis = int(time.time() * 1000)
    suffix = random.randint(100_000_000, 999_999_999)
    return f"{fieldname}-{millis}-{suffix}{ext}"


def is_allowed_image(filename: Optional[str]) -> bool:
    ext = os.path.splitext(filename or "")[1].lower()
    return ext in ALLOWED_IMAGE_EXTS


async def validate_and_read_image(file: UploadFile, max_bytes: Optional[int] = None) -> bytes:
    max_bytes = max_bytes or settings.max_upload_bytes

    if not is_allowed_image(file.filename):
        raise HTTPException(status_code=400, detail="Only image files are allowed (jpg, jpeg, png, gif).")

    # Read one byte past the limit so oversized uploads are caught without buffering them whole
    contents = await file.read(max_bytes + 1)
    if len(contents) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large ({max_bytes // (1024 * 1024)}MB max).",
        )
    return contents


async def save_image(file: UploadFile, fieldname: str = "image", upload_dir: Optional[str] = None) -> str:
    """Validate and store an uploaded image, returning its public `/uploads/...` path."""
    upload_dir = upload_dir or settings.upload_dir
    contents = await validate_and_read_image(file)

    _ensure_upload_dir(upload_dir)
    filename = generate_upload_filename(fieldname, file.filename)
    path = os.path.join(upload_dir, filename)

    with open(path, "wb") as f:
        f.write(contents)

    log.info("saved upload %s (%d bytes)", filename, len(contents))
    return f"{UPLOAD_URL_PREFIX}{filename}"


def is_removable_image(url: Optional[str]) -> bool:
    return bool(url) and url.startswith(UPLOAD_URL_PREFIX) and PLACEHOLDER_MARKER not in url


def remove_image(url: Optional[str], upload_dir: Optional[str] = None) -> bool:
    """Delete a previously uploaded image. Placeholders and external URLs are left alone."""
    if not is_removable_image(url):
        return False

    upload_dir = upload_dir or settings.upload_dir
    filename = os.path.basename(url[len(UPLOAD_URL_PREFIX):])
    path = os.path.join(upload_dir, filename)

    if not os.path.exists(path):
        log.warning("image file already gone: %s", path)
        return False

    os.remove(path)
    log.info("deleted image file %s", path)
    return True


def list_uploads(upload_dir: Optional[str] = None) -> list:
    upload_dir = upload_dir or settings.upload_dir
    if not os.path.isdir(upload_dir):
        return []
    return sorted(
        name for name in os.listdir(upload_dir)
        if os.path.isfile(os.path.join(upload_dir, name))
    )
