# blog_server/core/uploads.py

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import UploadFile

from blog_server.core.errors import UnsupportedMediaType
from blog_server.core.storage import UploadStorage


logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = frozenset({"jpeg", "jpg", "webp", "png", "gif"})


def extension_suffix(filename: str | None) -> str:
    """
    ".png" for "photo.final.png"; no suffix when the name has no dot.
    """
    if not filename or "." not in filename:
        return ""
    ext = filename.split(".")[-1]
    return f".{ext}" if ext else ""


def is_allowed_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    # drop parameters such as "; charset=..."
    major, _, minor = content_type.split(";")[0].strip().lower().partition("/")
    return major == "image" and minor in ALLOWED_IMAGE_TYPES


def save_upload(storage: UploadStorage, upload: UploadFile) -> str:
    """
    Validates and stores a single uploaded image, returning its storage path.
    Nothing is written when the declared type is not allowed.
    """
    if not is_allowed_type(upload.content_type):
        logger.info("Rejected upload %s of type %s", upload.filename, upload.content_type)
        raise UnsupportedMediaType(f"Unsupported file type: {upload.content_type}")

    return storage.save(upload.file.read(), extension_suffix(upload.filename))


@contextmanager
def staged_upload(storage: UploadStorage, upload: UploadFile | None) -> Iterator[str | None]:
    """
    Stores the upload (if any) and yields its path. If the block raises, the
    stored file is deleted again before the error propagates.
    """
    if upload is None:
        yield None
        return

    path = save_upload(storage, upload)
    try:
        yield path
    except BaseException:
        try:
            storage.delete(path)
            logger.info("Discarded staged upload %s", path)
        except FileNotFoundError:
            logger.warning("Staged upload %s was already gone", path)
        raise
