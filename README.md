# reqlog

A small WSGI application that writes exactly one structured JSON log line per
request. Each line records the HTTP request (method, path, status, latency,
user agent, referer, remote address and a generated request ID), the system it
ran on (environment, service name, hostname) and the authorization result for
the caller.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Running the server

```
reqlog
```

Options:

- `--host HOST`: address to bind (default: all interfaces)
- `--port PORT`: port to listen on (default: 8080)

The server is `wsgiref`'s simple server; its own per-request access lines are
suppressed, so the JSON lines on standard output are the only request log.
It serves these routes:

| Route                          | Access  | Response                          |
|--------------------------------|---------|-----------------------------------|
| `/api/v1/health`               | public  | `200 {"message":"ok"}`            |
| `/api/v1/products/{id}`        | public  | `500` plain text `server error`   |
| `/api/v1/users/me`             | private | `200 {"uid":"..."}`               |
| `/api/v1/users/profile/me`     | private | `400` plain text `Incorrect request` |

Any other path answers `404 page not found`.

Private routes pass through an authorizer first. The authorizer that ships
with the package, `reqlog.auth.Auth`, accepts every request as tenant
`tenant_123`, member `member_456`, role `general`. If an authorizer raises
`reqlog.auth.AuthorizationError`, the request is answered with `401` and the
log line records role `failed`. Public routes keep the anonymous identity
(`default` / `unknown` / `anonymous`) every request starts with.

## Log levels

The environment comes from the `ENV` variable and defaults to `dev`. In `dev`
the logger emits debug messages and above; in any other environment it emits
info and above. Responses with status 5xx are logged at `ERROR` level as
`request failed`; everything else is logged at `INFO` level as
`request completed`.

A typical line (wrapped here for reading; the real line is compact JSON):

```json
{"time":"...","level":"INFO","msg":"request completed",
 "http_request":{"method":"GET","path":"/api/v1/health","status":200,
                 "latency":"153.2µs","user_agent":"curl/8.0","referer":"",
                 "remote_addr":"127.0.0.1:54321","request_id":"..."},
 "system":{"environment":"dev","service":"dev-slog-server","hostname":"..."},
 "authorized":{"tenant_id":"default","member_id":"unknown","role":"anonymous"}}
```

## Using it as a library

```python
import sys
from wsgiref.simple_server import make_server

from reqlog.server import create_app

app = create_app(sys.stdout)
make_server("", 8080, app).serve_forever()
```

The pieces can also be used on their own:

- `reqlog.middleware.request_middleware(app, stream)` wraps any WSGI
  application so each request ends with a single summary line written to
  `stream` (standard output if omitted).
- `reqlog.auth.with_auth(authorizer, handler)` puts an `Authorizer` in front
  of a single handler; subclass `reqlog.auth.Authorizer` and implement
  `authorize(environ)` to return an `AuthorizedInfo` or raise
  `AuthorizationError`.
- `reqlog.router.Router` dispatches by path. `handle(pattern, handler)`
  registers a handler; a `{name}` segment matches one path segment and the
  captured values are stored in `environ["reqlog.path_params"]`. Literal
  routes take precedence over wildcard ones.
- `reqlog.applogger.new_logger(env, stream)` returns an `AppLogger` with
  `debug`, `info`, `warn`, `error` and `log_request` methods writing JSON
  lines.

## What it does not do

The API is a demonstration of request logging, not a real service: there is
no storage, the product and profile routes fail on purpose, `/api/v1/users/me`
returns a fixed identifier, and the bundled authorizer checks no credentials.
The server is the standard library's single-threaded development server.