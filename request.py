"""HTTP request-line model and parser."""

import re
from dataclasses import dataclass

# Unicode White_Space; str.split() would also split on \x1c-\x1f.
_WHITESPACE = re.compile(
    "[\t\n\x0b\x0c\r \x85\xa0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+"
)


class HTTPRequestParseError(ValueError):
    """Raised when the request line cannot be extracted from raw bytes."""


@dataclass(frozen=True, slots=True)
class HTTPRequest:
    method: str
    path: str

    @classmethod
    def from_bytes(cls, raw: bytes) -> "HTTPRequest":
        """Parse the method and path from the first line of raw request bytes.

        Only the request line is interpreted; headers and any body are
        ignored. The method is not checked against known verbs and the path
        is kept verbatim, query string and fragment included.
        """
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise HTTPRequestParseError("Request is not valid UTF-8") from exc

        request_line = text.split("\n", 1)[0].removesuffix("\r")
        parts = [part for part in _WHITESPACE.split(request_line) if part]
        if len(parts) < 2:
            raise HTTPRequestParseError("Invalid request line")

        return cls(method=parts[0], path=parts[1])


DEFAULT_REQUEST = HTTPRequest(method="GET", path="/")


def parse_http_request(raw: bytes) -> HTTPRequest | None:
    try:
        return HTTPRequest.from_bytes(raw)
    except HTTPRequestParseError:
        return None


def decode_for_log(raw: bytes) -> str:
    """Lossy decode for log output only; never feed the result into routing."""
    return raw.decode("utf-8", errors="replace")
