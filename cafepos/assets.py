"""Storage for uploaded product images."""
import logging
import time
from pathlib import Path, PurePath
from typing import Optional

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/public"


def upload_filename(original: str, now: Optional[float] = None) -> str:
    # "<upload time in ms>_<original base name>"
    millis = int((now if now is not None else time.time()) * 1000)
    name = PurePath(original.replace("\\", "/")).name
    return f"{millis}_{name}"


def _write_file(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)


async def save_image(upload: UploadFile, directory: Path) -> str:
    """Write an uploaded image under `directory` and return the path it is served from."""
    filename = upload_filename(upload.filename)
    data = await upload.read()
    await run_in_threadpool(_write_file, directory / filename, data)
    logger.info("Saved upload %s (%s)", filename, upload.content_type)
    return f"{PUBLIC_PREFIX}/{filename}"


def resolve_file(base: Path, relative: str) -> Optional[Path]:
    """Map a request path onto a file inside `base`, or None if there is no such file."""
    root = base.resolve()
    candidate = (root / relative).resolve()
    if root != candidate and root not in candidate.parents:
        return None
    return candidate if candidate.is_file() else None
