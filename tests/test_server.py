import io
import json
import socket
from wsgiref.util import setup_testing_defaults

from reqlog.server import create_app, main


class StartResponse:
    def __init__(self):
        self.status = None

    def __call__(self, status, headers, exc_info=None):
        self.status = status
        return lambda data: None


def call(app, path):
    environ = {}
    setup_testing_defaults(environ)
    environ["PATH_INFO"] = path
    start = StartResponse()
    body = b"".join(app(environ, start))
    return int(start.status.split()[0]), body


def test_create_app_serves_and_logs(monkeypatch):
    monkeypatch.delenv("ENV", raising=False)
    stream = io.StringIO()
    app = create_app(stream)
    code, body = call(app, "/api/v1/health")
    assert code == 200
    assert json.loads(body) == {"message": "ok"}
    record = json.loads(stream.getvalue())
    assert record["http_request"]["path"] == "/api/v1/health"
    assert record["msg"] == "request completed"


def test_create_app_logs_each_request(monkeypatch):
    monkeypatch.delenv("ENV", raising=False)
    stream = io.StringIO()
    app = create_app(stream)
    call(app, "/api/v1/health")
    call(app, "/api/v1/products/10010000")
    records = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [r["http_request"]["status"] for r in records] == [200, 500]
    assert records[0]["http_request"]["request_id"] != records[1]["http_request"]["request_id"]
    assert records[1]["msg"] == "request failed"


def test_main_reports_startup_error(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
        taken.bind(("127.0.0.1", 0))
        taken.listen(1)
        port = taken.getsockname()[1]
        status = main(["--host", "127.0.0.1", "--port", str(port)])
    assert status == 1
    assert "Server startup error" in capsys.readouterr().err