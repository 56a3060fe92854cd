"""Request handlers of the demo API and helpers for writing responses."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, is_dataclass
from http import HTTPStatus
from typing import Any, Callable, List, MutableMapping

from .context import set_status_code

Environ = MutableMapping[str, Any]
StartResponse = Callable[..., Any]

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

MOCK_USER_UID = "864c857e-bc03-7b09-5b8f-750d312636c3"


@dataclass(frozen=True)
class ErrorResponse:
    error: str
    message: str


@dataclass(frozen=True)
class HealthResponse:
    message: str


@dataclass(frozen=True)
class Product:
    id: str
    name: str


@dataclass(frozen=True)
class UserProfileMeResponse:
    uid: str
    first_name: str
    last_name: str
    email: str
    phone: str


@dataclass(frozen=True)
class UserMeResponse:
    uid: str


def _status_line(status_code: int) -> str:
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        phrase = ""
    return f"{status_code} {phrase}".rstrip()


def http_error(start_response: StartResponse, message: str, status_code: int) -> List[bytes]:
    """Send a plain-text error response with ``message`` as its body."""
    body = (message + "\n").encode("utf-8")
    start_response(
        _status_line(status_code),
        [
            ("Content-Type", TEXT_CONTENT_TYPE),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def write_json_response(
    environ: Environ, start_response: StartResponse, status_code: int, data: Any
) -> List[bytes]:
    """Send ``data`` encoded as JSON with the given status."""
    payload = asdict(data) if is_dataclass(data) and not isinstance(data, type) else data
    try:
        body = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except (TypeError, ValueError) as err:
        return http_error(start_response, str(err), HTTPStatus.INTERNAL_SERVER_ERROR)
    start_response(
        _status_line(status_code),
        [("Content-Type", JSON_CONTENT_TYPE), ("Content-Length", str(len(body)))],
    )
    return [body]


def write_error_response(
    environ: Environ, start_response: StartResponse, status_code: int, message: str
) -> List[bytes]:
    """Record ``status_code`` in the request and send a plain-text error."""
    set_status_code(environ, status_code)
    return http_error(start_response, message, status_code)


def _error_handler(status_code: int, error: str, message: str):
    def handler(environ: Environ, start_response: StartResponse) -> List[bytes]:
        return write_json_response(
            environ, start_response, status_code, ErrorResponse(error=error, message=message)
        )

    return handler


def handle_error400(environ: Environ, start_response: StartResponse) -> List[bytes]:
    return _error_handler(400, "bad_request", "Invalid request parameters")(environ, start_response)


def handle_error401(environ: Environ, start_response: StartResponse) -> List[bytes]:
    return _error_handler(401, "unauthorized", "Authentication required")(environ, start_response)


def handle_error403(environ: Environ, start_response: StartResponse) -> List[bytes]:
    return _error_handler(403, "forbidden", "Access denied")(environ, start_response)


def handle_error404(environ: Environ, start_response: StartResponse) -> List[bytes]:
    return _error_handler(404, "not_found", "Resource not found")(environ, start_response)


def handle_error500(environ: Environ, start_response: StartResponse) -> List[bytes]:
    return _error_handler(500, "internal_server_error", "Internal server error occurred")(
        environ, start_response
    )


def handle_health(environ: Environ, start_response: StartResponse) -> List[bytes]:
    """Health check: always answers ``{"message": "ok"}``."""
    return write_json_response(environ, start_response, 200, HealthResponse(message="ok"))


def handle_product_by_id(environ: Environ, start_response: StartResponse) -> List[bytes]:
    """Product lookup; deliberately fails with a server error."""
    return http_error(start_response, "server error", 500)


def handle_user_profile_me(environ: Environ, start_response: StartResponse) -> List[bytes]:
    """Profile of the current user; deliberately rejects the request."""
    return http_error(start_response, "Incorrect request", 400)


def handle_user_me(environ: Environ, start_response: StartResponse) -> List[bytes]:
    """The current user's identifier (a fixed mock value)."""
    return write_json_response(environ, start_response, 200, UserMeResponse(uid=MOCK_USER_UID))