"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import itertools
import logging
import socket
import sys
import threading
from collections.abc import Sequence

from config import (
    ACCEPT_POLL_SECS,
    CONFIG_PATH,
    LISTEN_BACKLOG,
    LOG_LEVEL,
    SOCKET_TIMEOUT_SECS,
    ServerConfig,
    load_config,
)
from handlers.static_files import build_response
from request import DEFAULT_REQUEST, decode_for_log, parse_http_request
from socket_handler import (
    HTTPReadError,
    HTTPWriteError,
    SocketTimeoutError,
    read_http_request,
    write_http_response_message,
)

logger = logging.getLogger(__name__)


class HTTPServer:
    """Accepts connections and handles each one on its own thread.

    The configuration is immutable and shared by reference with every
    connection thread. There is no cap on concurrent connections.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        *,
        host: str | None = None,
        port: int | None = None,
        socket_timeout_secs: float = SOCKET_TIMEOUT_SECS,
    ) -> None:
        self.config = config or load_config()
        self.host = host if host is not None else self.config.address
        self.port = port if port is not None else self.config.port
        self.socket_timeout_secs = socket_timeout_secs

        self._server_socket: socket.socket | None = None
        self._connection_ids = itertools.count(1)
        self._running = False

    def bind(self) -> socket.socket:
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
        except OSError:
            server_socket.close()
            raise
        server_socket.settimeout(ACCEPT_POLL_SECS)
        self.port = server_socket.getsockname()[1]
        return server_socket

    def start(self) -> None:
        """Bind the listener and run the accept loop until stop() is called."""
        with self.bind() as server_socket:
            self._server_socket = server_socket
            self._running = True
            logger.info("Server is listening on http://%s:%s", self.host, self.port)
            while self._running:
                try:
                    client_socket, address = server_socket.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    if not self._running:
                        break
                    logger.error("Connection failed: %s", exc)
                    continue
                self._spawn_handler(client_socket, address)

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None

    def _spawn_handler(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        connection_id = next(self._connection_ids)
        worker = threading.Thread(
            target=self._handle_client,
            args=(client_socket, address),
            name=f"http-conn-{connection_id}",
            daemon=True,
        )
        worker.start()

    def _handle_client(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        with client_socket:
            try:
                self._serve_connection(client_socket)
            except SocketTimeoutError as exc:
                logger.warning("Dropping connection from %s: %s", address[0], exc)
            except HTTPReadError as exc:
                logger.error("Error handling connection from %s: %s", address[0], exc)
            except HTTPWriteError as exc:
                if exc.head_sent:
                    logger.error("Partial response to %s, headers already sent: %s", address[0], exc)
                else:
                    logger.error("Error handling connection from %s: %s", address[0], exc)
            except OSError as exc:
                logger.error("Error handling connection from %s: %s", address[0], exc)
            except Exception:
                logger.exception("Unhandled error in connection handler")

    def _serve_connection(self, client_socket: socket.socket) -> None:
        client_socket.settimeout(self.socket_timeout_secs)
        raw_request = read_http_request(client_socket)
        logger.info("Request: %s", decode_for_log(raw_request))

        request = parse_http_request(raw_request) or DEFAULT_REQUEST
        logger.info("Method: %s, Path: %s", request.method, request.path)

        response = build_response(request, self.config)
        write_http_response_message(client_socket, response)
        logger.info("%s %s -> %s", request.method, request.path, response.status_code)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve static files from a content root")
    parser.add_argument("--config", default=CONFIG_PATH, help="path to the TOML config file")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )
    server = HTTPServer(load_config(args.config))
    try:
        server.start()
    except OSError as exc:
        logger.error("Failed to bind %s:%s: %s", server.host, server.port, exc)
        return 1
    except KeyboardInterrupt:
        server.stop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
