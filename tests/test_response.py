"""Unit tests for HTTP response serialization."""

from response import HTTPResponse, prepare_response


def test_response_serialization_sets_length_and_default_content_type() -> None:
    response = HTTPResponse(status_code=200, body="hello")

    raw = response.to_bytes()

    assert raw == (
        b"HTTP/1.1 200 OK\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 5\r\n"
        b"\r\n"
        b"hello"
    )


def test_status_lines_use_upper_case_reasons() -> None:
    assert HTTPResponse(status_code=404).status_line == "HTTP/1.1 404 NOT FOUND"
    assert HTTPResponse(status_code=405).status_line == "HTTP/1.1 405 METHOD NOT ALLOWED"
    assert HTTPResponse(status_code=500).status_line == "HTTP/1.1 500 INTERNAL SERVER ERROR"


def test_content_length_counts_bytes_not_characters() -> None:
    response = HTTPResponse(status_code=200, content_type="text/html", body="héllo")

    prepared = prepare_response(response)

    assert b"Content-Type: text/html\r\n" in prepared.head
    assert b"Content-Length: 6\r\n" in prepared.head
    assert prepared.head.endswith(b"\r\n\r\n")
    assert prepared.body == "héllo".encode("utf-8")


def test_binary_body_is_kept_verbatim() -> None:
    payload = bytes(range(256))
    response = HTTPResponse(status_code=200, content_type="image/png", body=payload)

    assert response.to_bytes().endswith(b"\r\n\r\n" + payload)
