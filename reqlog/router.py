"""URL routing for the demo API."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, MutableMapping, Optional

from .auth import Auth, Authorizer, with_auth
from .handlers import (
    handle_health,
    handle_product_by_id,
    handle_user_me,
    handle_user_profile_me,
    http_error,
)

Environ = MutableMapping[str, Any]
WSGIApp = Callable[[Environ, Callable[..., Any]], Iterable[bytes]]

PATH_PARAMS_KEY = "reqlog.path_params"


@dataclass(frozen=True)
class _Route:
    regex: re.Pattern
    wildcards: int
    handler: WSGIApp


def _compile(pattern: str) -> tuple[re.Pattern, int]:
    parts = []
    wildcards = 0
    for segment in pattern.split("/"):
        if segment.startswith("{") and segment.endswith("}"):
            name = segment[1:-1]
            if not name.isidentifier():
                raise ValueError(f"bad wildcard {segment!r} in pattern {pattern!r}")
            parts.append(f"(?P<{name}>[^/]+)")
            wildcards += 1
        else:
            parts.append(re.escape(segment))
    return re.compile("/".join(parts)), wildcards


class Router:
    """Dispatch requests to handlers by path; literal routes win over wildcards."""

    def __init__(self, authorizer: Optional[Authorizer] = None) -> None:
        self.authorizer = authorizer if authorizer is not None else Auth()
        self._routes: dict[str, _Route] = {}

    def handle(self, pattern: str, handler: WSGIApp) -> None:
        """Register ``handler`` for ``pattern``; ``{name}`` matches one path segment."""
        if pattern in self._routes:
            raise ValueError(f"pattern {pattern!r} is already registered")
        regex, wildcards = _compile(pattern)
        self._routes[pattern] = _Route(regex, wildcards, handler)

    def register_routes(self) -> None:
        self.handle("/api/v1/health", handle_health)
        self.handle("/api/v1/products/{id}", handle_product_by_id)
        self.handle("/api/v1/users/me", with_auth(self.authorizer, handle_user_me))
        self.handle(
            "/api/v1/users/profile/me", with_auth(self.authorizer, handle_user_profile_me)
        )

    def __call__(self, environ: Environ, start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = environ.get("PATH_INFO") or "/"
        for route in sorted(self._routes.values(), key=lambda r: r.wildcards):
            match = route.regex.fullmatch(path)
            if match:
                environ[PATH_PARAMS_KEY] = match.groupdict()
                return route.handler(environ, start_response)
        return http_error(start_response, "404 page not found", 404)