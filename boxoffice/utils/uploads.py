import os
import shutil
import time
from typing import Optional

from fastapi import UploadFile

from boxoffice.core.config import settings


def poster_filename(original_name: str, now_ms: Optional[int] = None) -> str:
    """'poster-<epoch ms><ext>', keeping the uploaded file's extension."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    ext = os.path.splitext(original_name or "")[1]
    return f"poster-{stamp}{ext}"


def save_poster(upload: Optional[UploadFile], upload_dir: Optional[str] = None) -> Optional[str]:
    """Write an uploaded poster to the static directory and return its public URL."""
    if upload is None or not upload.filename:
        return None
    target_dir = upload_dir or settings.UPLOAD_DIR
    os.makedirs(target_dir, exist_ok=True)
    filename = poster_filename(upload.filename)
    with open(os.path.join(target_dir, filename), "wb") as out:
        shutil.copyfileobj(upload.file, out)
    return settings.POSTER_URL_PREFIX + filename
