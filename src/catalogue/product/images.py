"""Product image upload."""

import re
import time

from protean.exceptions import ValidationError

from catalogue.domain import logger
from catalogue.storage import get_storage

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def image_path(filename: str, now_ms: int | None = None) -> str:
    """Storage path for an uploaded product image: ``products/<millis>-<safe name>``."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"products/{timestamp}-{_UNSAFE_FILENAME_CHARS.sub('_', filename)}"


def upload_product_image(filename: str, data: bytes, content_type: str) -> str:
    """Upload an image and return its public URL. StorageError propagates to the caller."""
    if not filename:
        raise ValidationError({"file": ["A file name is required"]})
    if not data:
        raise ValidationError({"file": ["No file provided"]})

    path = image_path(filename)
    url = get_storage().upload(path, data, content_type or "application/octet-stream")

    logger.info("product_image_uploaded", path=path, size=len(data))
    return url
