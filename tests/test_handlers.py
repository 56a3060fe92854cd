import json
from wsgiref.util import setup_testing_defaults

import pytest

from reqlog.context import get_status_code
from reqlog.handlers import (
    Product,
    handle_error400,
    handle_error401,
    handle_error403,
    handle_error404,
    handle_error500,
    handle_health,
    handle_product_by_id,
    handle_user_me,
    handle_user_profile_me,
    http_error,
    write_error_response,
    write_json_response,
)


class StartResponse:
    def __init__(self):
        self.status = None
        self.headers = {}

    def __call__(self, status, headers, exc_info=None):
        self.status = status
        self.headers = dict(headers)
        return lambda data: None

    @property
    def code(self):
        return int(self.status.split()[0])


def make_environ(path="/"):
    environ = {}
    setup_testing_defaults(environ)
    environ["PATH_INFO"] = path
    return environ


def test_health_returns_ok_json():
    start = StartResponse()
    body = b"".join(handle_health(make_environ(), start))
    assert start.code == 200
    assert start.headers["Content-Type"] == "application/json; charset=utf-8"
    assert json.loads(body) == {"message": "ok"}


def test_user_me_returns_mock_uid():
    start = StartResponse()
    body = b"".join(handle_user_me(make_environ(), start))
    assert start.code == 200
    assert json.loads(body) == {"uid": "864c857e-bc03-7b09-5b8f-750d312636c3"}


@pytest.mark.parametrize(
    "handler, code, error, message",
    [
        (handle_error400, 400, "bad_request", "Invalid request parameters"),
        (handle_error401, 401, "unauthorized", "Authentication required"),
        (handle_error403, 403, "forbidden", "Access denied"),
        (handle_error404, 404, "not_found", "Resource not found"),
        (handle_error500, 500, "internal_server_error", "Internal server error occurred"),
    ],
)
def test_error_handlers(handler, code, error, message):
    start = StartResponse()
    body = b"".join(handler(make_environ(), start))
    assert start.code == code
    assert json.loads(body) == {"error": error, "message": message}


def test_product_by_id_fails_with_server_error():
    start = StartResponse()
    body = b"".join(handle_product_by_id(make_environ("/api/v1/products/10010000"), start))
    assert start.code == 500
    assert body.decode().strip() == "server error"


def test_user_profile_me_rejects_request():
    start = StartResponse()
    body = b"".join(handle_user_profile_me(make_environ(), start))
    assert start.code == 400
    assert body.decode().strip() == "Incorrect request"


def test_http_error_headers_and_length():
    start = StartResponse()
    body = b"".join(http_error(start, "boom", 418))
    assert start.code == 418
    assert start.headers["Content-Type"] == "text/plain; charset=utf-8"
    assert start.headers["X-Content-Type-Options"] == "nosniff"
    assert int(start.headers["Content-Length"]) == len(body)
    assert body.decode().strip() == "boom"


def test_write_json_response_round_trips_dataclass():
    start = StartResponse()
    body = b"".join(write_json_response(make_environ(), start, 201, Product(id="7", name="Widget")))
    assert start.code == 201
    assert json.loads(body) == {"id": "7", "name": "Widget"}
    assert int(start.headers["Content-Length"]) == len(body)


def test_write_json_response_unserializable_is_server_error():
    start = StartResponse()
    write_json_response(make_environ(), start, 200, {"value": object()})
    assert start.code == 500


def test_write_error_response_records_status():
    environ = make_environ()
    start = StartResponse()
    body = b"".join(write_error_response(environ, start, 403, "nope"))
    assert get_status_code(environ) == 403
    assert start.code == 403
    assert body.decode().strip() == "nope"