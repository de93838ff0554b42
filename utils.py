"""Utility helpers shared across server modules."""

from pathlib import PurePosixPath

CONTENT_TYPES: dict[str, str] = {
    "html": "text/html",
    "css": "text/css",
    "js": "application/javascript",
    "json": "application/json",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "ico": "image/x-icon",
    "pdf": "application/pdf",
    "txt": "text/plain",
    "xml": "application/xml",
    "webp": "image/webp",
}
DEFAULT_CONTENT_TYPE = "text/plain"


def get_content_type(file_path: str | PurePosixPath) -> str:
    extension = PurePosixPath(file_path).suffix.removeprefix(".")
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def sanitize_path(request_path: str) -> str:
    """Reduce a request path to a relative path with no empty, '.' or '..' segments.

    The result is only ever joined under the content root, so dropping the
    traversal segments is enough to keep it there. Symlinks are not resolved.
    """
    relative_path = request_path.removeprefix("/")
    safe_components = [
        component
        for component in relative_path.split("/")
        if component not in ("", ".", "..")
    ]
    return "/".join(safe_components)
