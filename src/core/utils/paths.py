"""Storage path convention for course images and their thumbnails.

Primary images live under ``{scope}/images/{name}`` and thumbnails under
``{scope}/thumbnails/thumb_{name}``. Deletion only receives the primary
path, so the thumbnail path must be recoverable from it.
"""

from pathlib import PurePosixPath

from core.utils.constants import (
    DEFAULT_IMAGE_EXTENSION,
    IMAGES_DIR,
    THUMBNAIL_PREFIX,
    THUMBNAILS_DIR,
)
from core.utils.time import utc_now_millis


def build_storage_paths(scope: str, file_name: str) -> tuple[str, str]:
    """Return the ``(storage_path, thumbnail_path)`` pair for a file."""
    scope = scope.strip("/")
    storage_path = f"{scope}/{IMAGES_DIR}/{file_name}"
    thumbnail_path = f"{scope}/{THUMBNAILS_DIR}/{THUMBNAIL_PREFIX}{file_name}"
    return storage_path, thumbnail_path


def thumbnail_path_for(storage_path: str) -> str:
    """Derive the thumbnail path paired with a primary storage path.

    Example:
        courses/u1/images/a.jpg -> courses/u1/thumbnails/thumb_a.jpg
    """
    path = storage_path.replace(f"/{IMAGES_DIR}/", f"/{THUMBNAILS_DIR}/", 1)
    head, sep, tail = path.rpartition("/")
    if not tail:
        return path
    return f"{head}{sep}{THUMBNAIL_PREFIX}{tail}"


def generate_image_file_name(
    course_id: str,
    original_name: str,
    timestamp_ms: int | None = None,
) -> str:
    """Build a unique object file name: ``{course_id}_{ms}.{ext}``."""
    if timestamp_ms is None:
        timestamp_ms = utc_now_millis()

    extension = PurePosixPath(original_name).suffix.lower().lstrip(".")
    return f"{course_id}_{timestamp_ms}.{extension or DEFAULT_IMAGE_EXTENSION}"
