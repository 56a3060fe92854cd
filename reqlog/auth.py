"""Authorization of requests and the middleware that applies it."""

from __future__ import annotations

import abc
from typing import Any, Callable, Iterable, MutableMapping

from .context import set_authorized_info
from .handlers import http_error
from .models import AuthorizedInfo

Environ = MutableMapping[str, Any]
WSGIApp = Callable[[Environ, Callable[..., Any]], Iterable[bytes]]

_FAILED_AUTH_INFO = AuthorizedInfo(tenant_id="unknown", member_id="unknown", role="failed")


class AuthorizationError(Exception):
    """Raised when a request cannot be authorized."""


class Authorizer(abc.ABC):
    """Decides who a request is made on behalf of."""

    @abc.abstractmethod
    def authorize(self, environ: Environ) -> AuthorizedInfo:
        """Return the caller's identity or raise :class:`AuthorizationError`."""


class Auth(Authorizer):
    """Authorizer that accepts every request as a fixed general member."""

    def authorize(self, environ: Environ) -> AuthorizedInfo:
        return AuthorizedInfo(tenant_id="tenant_123", member_id="member_456", role="general")


def with_auth(authorizer: Authorizer, next_handler: WSGIApp) -> WSGIApp:
    """Wrap ``next_handler`` so it runs only for authorized requests."""

    def app(environ: Environ, start_response: Callable[..., Any]) -> Iterable[bytes]:
        try:
            info = authorizer.authorize(environ)
        except AuthorizationError as err:
            set_authorized_info(environ, _FAILED_AUTH_INFO)
            return http_error(start_response, str(err), 401)
        set_authorized_info(environ, info)
        return next_handler(environ, start_response)

    return app