"""Low-level socket read/write utilities."""

from __future__ import annotations

import socket

from config import BUFFER_SIZE
from response import HTTPResponse, prepare_response


class HTTPReadError(Exception):
    """Raised when request bytes cannot be read from the socket."""


class SocketTimeoutError(HTTPReadError):
    """Raised when a client times out while sending request bytes."""


class HTTPWriteError(Exception):
    """Raised when a response cannot be written back to the client."""

    def __init__(self, message: str, *, head_sent: bool) -> None:
        super().__init__(message)
        self.head_sent = head_sent


def read_http_request(client_socket: socket.socket, buffer_size: int = BUFFER_SIZE) -> bytes:
    """Read a single chunk of up to ``buffer_size`` bytes.

    Short or empty reads are returned as-is. No request body is ever read.
    """
    try:
        return client_socket.recv(buffer_size)
    except socket.timeout as exc:
        raise SocketTimeoutError("Timed out waiting for request bytes") from exc
    except OSError as exc:
        raise HTTPReadError(f"Failed to read request: {exc}") from exc


def write_http_response_message(client_socket: socket.socket, response: HTTPResponse) -> int:
    """Write the response head, then the body, as two separate sends."""
    prepared = prepare_response(response)
    try:
        client_socket.sendall(prepared.head)
    except OSError as exc:
        raise HTTPWriteError(f"Failed to write response head: {exc}", head_sent=False) from exc

    try:
        client_socket.sendall(prepared.body)
    except OSError as exc:
        # Headers are already on the wire and cannot be taken back.
        raise HTTPWriteError(f"Failed to write response body: {exc}", head_sent=True) from exc

    return len(prepared.head) + len(prepared.body)
