"""HTTP response model and serializer."""

from dataclasses import dataclass

from utils import DEFAULT_CONTENT_TYPE

REASON_PHRASES: dict[int, str] = {
    200: "OK",
    404: "NOT FOUND",
    405: "METHOD NOT ALLOWED",
    500: "INTERNAL SERVER ERROR",
}


@dataclass(slots=True)
class PreparedResponse:
    head: bytes
    body: bytes


@dataclass(slots=True)
class HTTPResponse:
    status_code: int
    content_type: str = DEFAULT_CONTENT_TYPE
    body: bytes | str = b""

    def __post_init__(self) -> None:
        if isinstance(self.body, str):
            self.body = self.body.encode("utf-8")

    @property
    def status_line(self) -> str:
        reason = REASON_PHRASES.get(self.status_code, "UNKNOWN")
        return f"HTTP/1.1 {self.status_code} {reason}"

    def to_bytes(self) -> bytes:
        """Serialize the response into wire format bytes."""
        prepared = prepare_response(self)
        return prepared.head + prepared.body


def prepare_response(response: HTTPResponse) -> PreparedResponse:
    header_lines = [
        response.status_line,
        f"Content-Type: {response.content_type}",
        f"Content-Length: {len(response.body)}",
    ]
    head = "\r\n".join(header_lines).encode("iso-8859-1") + b"\r\n\r\n"
    return PreparedResponse(head=head, body=response.body)
