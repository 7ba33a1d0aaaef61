"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"

# Access Errors
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_FORBIDDEN = "FORBIDDEN"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_COURSE_NOT_FOUND = "COURSE_NOT_FOUND"

# Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_STORAGE_UPLOAD_FAILED = "STORAGE_UPLOAD_FAILED"
ERROR_CODE_STORAGE_DELETE_FAILED = "STORAGE_DELETE_FAILED"
ERROR_CODE_STORAGE_NOT_CONFIGURED = "STORAGE_NOT_CONFIGURED"

# Course / Firestore Errors
ERROR_CODE_COURSE_LOOKUP_FAILED = "COURSE_LOOKUP_FAILED"


# ============================================================================
# Storage Providers
# ============================================================================

PROVIDER_FIREBASE = "firebase"
PROVIDER_SUPABASE = "supabase"

SUPPORTED_PROVIDERS: Final[frozenset[str]] = frozenset(
    {PROVIDER_FIREBASE, PROVIDER_SUPABASE}
)

FIREBASE_DEFAULT_BUCKET_SUFFIX = ".appspot.com"
FIREBASE_PUBLIC_URL_BASE = "https://storage.googleapis.com"
SUPABASE_PUBLIC_URL_PATH = "/storage/v1/object/public"
SUPABASE_DEFAULT_BUCKET = "course-images"

# Upload stages reported in wrapped storage errors
UPLOAD_STAGE_PRIMARY = "main image"
UPLOAD_STAGE_THUMBNAIL = "thumbnail"

# ============================================================================
# Storage Path Convention
# ============================================================================

IMAGES_DIR = "images"
THUMBNAILS_DIR = "thumbnails"
THUMBNAIL_PREFIX = "thumb_"
COURSES_SCOPE = "courses"
DEFAULT_IMAGE_EXTENSION = "jpg"

# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/webp": ("webp",),
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset(
    ext for extensions in MIME_TYPE_EXTENSION_MAP.values() for ext in extensions
)

# ============================================================================
# Access Control
# ============================================================================

ROLE_SUPERADMIN = "superadmin"
COURSES_COLLECTION = "courses"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_STORAGE_PROVIDER = "STORAGE_PROVIDER"
ENV_FIREBASE_PROJECT_ID = "FIREBASE_PROJECT_ID"
ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID = "NEXT_PUBLIC_FIREBASE_PROJECT_ID"
ENV_FIREBASE_STORAGE_BUCKET = "FIREBASE_STORAGE_BUCKET"
ENV_SUPABASE_URL = "SUPABASE_URL"
ENV_SUPABASE_SERVICE_ROLE_KEY = "SUPABASE_SERVICE_ROLE_KEY"
ENV_SUPABASE_STORAGE_BUCKET = "SUPABASE_STORAGE_BUCKET"

STORAGE_ENV_VARS: Final[tuple[str, ...]] = (
    ENV_STORAGE_PROVIDER,
    ENV_FIREBASE_PROJECT_ID,
    ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID,
    ENV_FIREBASE_STORAGE_BUCKET,
    ENV_SUPABASE_URL,
    ENV_SUPABASE_SERVICE_ROLE_KEY,
    ENV_SUPABASE_STORAGE_BUCKET,
)

# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
