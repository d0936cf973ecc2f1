import logging
import os
import re
import time
from typing import Optional

from config import UPLOAD_DIR

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def ensure_upload_dir(upload_dir: str = UPLOAD_DIR) -> str:
    os.makedirs(upload_dir, exist_ok=True)
    return upload_dir


def stored_name_for(original_name: str, stamp: Optional[int] = None) -> str:
    """Timestamp-prefixed name, e.g. 1718000000000-jane_doe_cv.pdf."""
    if stamp is None:
        stamp = int(time.time() * 1000)
    base = os.path.basename((original_name or "").replace("\\", "/"))
    base = _UNSAFE_CHARS.sub("_", base).strip("._") or "resume"
    return f"{stamp}-{base}"


def save_resume(original_name: str, content: bytes, upload_dir: str = UPLOAD_DIR) -> str:
    """Write an uploaded resume and return the stored filename (no directory)."""
    stamp = int(time.time() * 1000)
    while True:
        stored_name = stored_name_for(original_name, stamp)
        try:
            with open(os.path.join(upload_dir, stored_name), "xb") as f:
                f.write(content)
            break
        except FileExistsError:
            # same name within the same millisecond
            stamp += 1
    logger.info("Stored resume %s (%d bytes)", stored_name, len(content))
    return stored_name


def remove_resume(stored_name: str, upload_dir: str = UPLOAD_DIR):
    try:
        os.remove(os.path.join(upload_dir, stored_name))
    except FileNotFoundError:
        logger.warning("Resume %s already gone", stored_name)
