"""Structured records attached to each request log line."""

from __future__ import annotations

import socket
from dataclasses import asdict, dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class SystemInfo:
    """Information about the running service."""

    environment: str
    service: str
    hostname: str

    @classmethod
    def for_environment(cls, env: str) -> SystemInfo:
        """Build the system information for ``env`` on this host."""
        try:
            hostname = socket.gethostname()
        except OSError:
            hostname = ""
        return cls(environment=env, service=f"{env}-slog-server", hostname=hostname)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AuthorizedInfo:
    """Who the request was made on behalf of."""

    tenant_id: str
    member_id: str
    role: str

    @classmethod
    def initial(cls) -> AuthorizedInfo:
        """The anonymous identity every request starts with."""
        return cls(tenant_id="default", member_id="unknown", role="anonymous")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HTTPRequestInfo:
    """Summary of one handled HTTP request."""

    method: str
    path: str
    status: int
    latency: str
    user_agent: str
    referer: str
    remote_addr: str
    request_id: str

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        status: int,
        latency: str,
        request_id: str,
    ) -> HTTPRequestInfo:
        """Collect request details from a WSGI environ."""
        remote_addr = environ.get("REMOTE_ADDR", "")
        remote_port = environ.get("REMOTE_PORT")
        if remote_port:
            remote_addr = f"{remote_addr}:{remote_port}"
        return cls(
            method=environ.get("REQUEST_METHOD", ""),
            path=environ.get("PATH_INFO", ""),
            status=status,
            latency=latency,
            user_agent=environ.get("HTTP_USER_AGENT", ""),
            referer=environ.get("HTTP_REFERER", ""),
            remote_addr=remote_addr,
            request_id=request_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)