# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
from typing import Any


# =============================================================================
# Text Utilities
# =============================================================================

def slugify(text: str) -> str:
    """
    Turn a display name into a URL-safe slug.

    Example:
        slugify("Kue Kering")  # "kue-kering"
        slugify("  Snack Box!! ")  # "snack-box"
    """
    slug = text.strip().lower()
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"[^\w-]+", "", slug)
    slug = re.sub(r"--+", "-", slug)
    return slug.strip("-")


def blank_to_none(value: Any) -> Any:
    """Map empty/whitespace-only strings to None, leave everything else alone."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def normalize_price(value: Any) -> int | None:
    """
    Normalize a price input to whole rupiah or None.

    None means "price on inquiry"; an empty input never becomes 0.
    Strings keep only their digits so formatted input works.

    Example:
        normalize_price("150.000")  # 150000
        normalize_price("  ")       # None
        normalize_price(None)       # None
        normalize_price(25000)      # 25000
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if value < 0:
            raise ValueError("Price cannot be negative")
        return int(value)
    if isinstance(value, str):
        if value.strip().startswith("-"):
            raise ValueError("Price cannot be negative")
        digits = re.sub(r"\D", "", value)
        return int(digits) if digits else None
    raise ValueError(f"Unsupported price value: {value!r}")


# Extensions accepted from a filename, per image MIME type; the first is used
# when the filename's own extension doesn't match.
IMAGE_EXTENSIONS = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/jpg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/webp": ("webp",),
    "image/gif": ("gif",),
}

_SAFE_EXTENSION = re.compile(r"[a-z0-9]{1,5}")


def file_extension(filename: str | None, content_type: str | None, default: str = "jpg") -> str:
    """
    Extension used for a storage key, tied to the validated MIME type.

    The filename's extension is kept only when it belongs to the content
    type; anything else (paths, mismatched or odd extensions) falls back to
    the extension of the content type.

    Example:
        file_extension("nastar.JPEG", "image/jpeg")  # "jpeg"
        file_extension("shell.html", "image/jpeg")   # "jpg"
        file_extension("photo", "image/png")         # "png"
    """
    mime = (content_type or "").strip().lower()
    allowed = IMAGE_EXTENSIONS.get(mime)

    if allowed is None:
        subtype = mime.rsplit("/", 1)[-1]
        allowed = (subtype,) if _SAFE_EXTENSION.fullmatch(subtype) else (default,)

    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].strip().lower()
        if ext in allowed:
            return ext
    return allowed[0]
