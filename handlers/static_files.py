"""Static file and diagnostic route handling."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from config import ServerConfig
from request import HTTPRequest
from response import HTTPResponse
from utils import get_content_type, sanitize_path

logger = logging.getLogger(__name__)

HELLO_PATH = "/hello"
HELLO_BODY = "Hello, Rustacean!"
NOT_FOUND_BODY = "Page not found"
METHOD_NOT_ALLOWED_BODY = "Method not allowed"
READ_ERROR_BODY = "Error reading file"


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    filesystem_path: Path
    exists: bool
    content_type: str
    is_binary: bool


def candidate_path(request_path: str, config: ServerConfig) -> str:
    if request_path == "/":
        return f"{config.public_dir}/{config.default_file}"
    return f"{config.public_dir}/{sanitize_path(request_path)}"


def is_binary_content_type(content_type: str) -> bool:
    return not content_type.startswith("text/") and content_type != "application/javascript"


def path_exists(filesystem_path: Path) -> bool:
    """Existence check; a stat failure such as ENAMETOOLONG counts as absent."""
    try:
        return filesystem_path.exists()
    except OSError as exc:
        logger.debug("Treating %s as missing: %s", filesystem_path, exc)
        return False


def resolve_target(request_path: str, config: ServerConfig) -> ResolvedTarget:
    candidate = candidate_path(request_path, config)
    content_type = get_content_type(candidate)
    filesystem_path = Path(candidate)
    return ResolvedTarget(
        filesystem_path=filesystem_path,
        exists=path_exists(filesystem_path),
        content_type=content_type,
        is_binary=is_binary_content_type(content_type),
    )


def read_file(target: ResolvedTarget) -> bytes:
    """Read target contents; text files must decode as UTF-8.

    Raises OSError or UnicodeDecodeError, leaving the caller to pick the status.
    """
    if target.is_binary:
        return target.filesystem_path.read_bytes()
    with target.filesystem_path.open(encoding="utf-8", newline="") as text_file:
        return text_file.read().encode("utf-8")


def build_response(request: HTTPRequest, config: ServerConfig) -> HTTPResponse:
    """Map a parsed request onto a complete response.

    The Content-Type header always describes the candidate file, even for
    405, 404, 500 and the /hello route.
    """
    target = resolve_target(request.path, config)

    if request.method != "GET":
        return HTTPResponse(
            status_code=405,
            content_type=target.content_type,
            body=METHOD_NOT_ALLOWED_BODY,
        )

    if target.exists:
        try:
            body = read_file(target)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Error reading %s: %s", target.filesystem_path, exc)
            return HTTPResponse(
                status_code=500,
                content_type=target.content_type,
                body=READ_ERROR_BODY,
            )
        return HTTPResponse(status_code=200, content_type=target.content_type, body=body)

    if request.path == HELLO_PATH:
        return HTTPResponse(status_code=200, content_type=target.content_type, body=HELLO_BODY)

    return HTTPResponse(status_code=404, content_type=target.content_type, body=NOT_FOUND_BODY)
