"""Command that serves the demo API with request logging."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO
from wsgiref.simple_server import WSGIRequestHandler, make_server

from .middleware import request_middleware
from .router import Router

DEFAULT_PORT = 8080


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format: str, *args: object) -> None:
        pass


def create_app(stream: Optional[TextIO] = None):
    """Build the routed application wrapped in the request-logging middleware."""
    router = Router()
    router.register_routes()
    return request_middleware(router, stream)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="reqlog", description="Serve the request-logging API.")
    parser.add_argument("--host", default="", help="address to bind (default: all interfaces)")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        server = make_server(args.host, args.port, create_app(), handler_class=_QuietHandler)
    except OSError as err:
        print(f"Server startup error: {err}", file=sys.stderr)
        return 1

    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass
    return 0