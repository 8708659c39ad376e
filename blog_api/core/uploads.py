import logging
import os
import secrets
import time
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from blog_api.core.config import settings
from blog_api.core.errors import ServerError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def _write_file(path: str, data: bytes) -> None:
    with open(path, "wb") as fh:
        fh.write(data)


async def save_image(upload: Optional[UploadFile]) -> Optional[str]:
    """Сохранение загруженного изображения; возвращает имя файла или None"""
    if upload is None or not upload.filename:
        return None

    ext = os.path.splitext(upload.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationError.for_field("image", "Only image files are allowed")

    data = await upload.read(settings.max_upload_size + 1)
    if len(data) > settings.max_upload_size:
        raise ValidationError.for_field("image", "Image exceeds the maximum upload size")

    filename = f"image-{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"
    os.makedirs(settings.upload_dir, exist_ok=True)
    try:
        await run_in_threadpool(_write_file, os.path.join(settings.upload_dir, filename), data)
    except OSError as e:
        logger.error("Failed to store upload %s: %s", filename, e)
        raise ServerError() from e

    logger.info("Stored upload %s (%d bytes)", filename, len(data))
    return filename


def _remove_file(path: str) -> bool:
    if not os.path.exists(path):
        return False
    os.remove(path)
    return True


async def remove_image(filename: Optional[str]) -> None:
    """Удаление ранее сохраненного изображения"""
    if not filename:
        return
    path = os.path.join(settings.upload_dir, os.path.basename(filename))
    if await run_in_threadpool(_remove_file, path):
        logger.info("Removed upload %s", filename)
