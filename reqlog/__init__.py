"""WSGI application with single-line structured JSON request logging."""

__version__ = "0.1.0"

__all__ = [
    "applogger",
    "auth",
    "configuration",
    "context",
    "handlers",
    "middleware",
    "models",
    "response_wrapper",
    "router",
    "server",
]