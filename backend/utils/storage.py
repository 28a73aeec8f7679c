# backend/utils/storage.py
import logging
import random
import shutil
import string
import time
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, UploadFile

from config import settings

logger = logging.getLogger(__name__)

UPLOAD_DIR = Path(settings.UPLOAD_DIR)
PUBLIC_PREFIX = "/uploads"
# Accepted content types and the extension stored files get
ALLOWED_TYPES = {"image/jpeg": "jpg", "image/png": "png", "image/webp": "webp"}

_ALPHABET = string.ascii_lowercase + string.digits


def generate_file_name(content_type: str) -> str:
    """<13 random chars>_<epoch ms>.<extension of the content type>"""
    ext = ALLOWED_TYPES[content_type]
    stem = "".join(random.choices(_ALPHABET, k=13))
    return f"{stem}_{int(time.time() * 1000)}.{ext}"


def save_image(file: UploadFile) -> str:
    """Stores an uploaded picture and returns its public path."""
    if file.content_type not in ALLOWED_TYPES:
        raise HTTPException(status_code=400, detail="Invalid file type")

    UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    # The client file name is never used on disk
    file_name = generate_file_name(file.content_type)
    save_path = UPLOAD_DIR / file_name
    try:
        with open(save_path, "wb") as buffer:
            shutil.copyfileobj(file.file, buffer)
    except OSError as e:
        logger.error(f"Image save failed for {save_path}: {e}")
        raise HTTPException(status_code=500, detail="File save error")
    finally:
        file.file.close()

    return f"{PUBLIC_PREFIX}/{file_name}"


def remove_image(url: Optional[str]) -> None:
    """Deletes a previously stored picture; foreign URLs are left alone."""
    if not url or not url.startswith(PUBLIC_PREFIX + "/"):
        return
    path = UPLOAD_DIR / url[len(PUBLIC_PREFIX) + 1:]
    if path.exists():
        path.unlink()
