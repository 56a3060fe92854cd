"""Middleware that writes one structured log line per request."""

from __future__ import annotations

import time
from typing import Any, Callable, Iterable, List, MutableMapping, Optional, TextIO

from .applogger import new_logger
from .configuration import get_environment
from .context import (
    get_authorized_info,
    get_request_id,
    get_system_info,
    set_authorized_info,
    set_request_id,
    set_system_info,
)
from .models import AuthorizedInfo, HTTPRequestInfo, SystemInfo
from .response_wrapper import ResponseRecorder

Environ = MutableMapping[str, Any]
WSGIApp = Callable[[Environ, Callable[..., Any]], Iterable[bytes]]

_NS_PER_US = 1_000
_NS_PER_MS = 1_000_000
_NS_PER_S = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_S
_NS_PER_HOUR = 60 * _NS_PER_MIN


def _fraction(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    digits = len(str(unit)) - 1
    frac_text = f"{frac:0{digits}d}".rstrip("0")
    return f"{whole}.{frac_text}" if frac_text else str(whole)


def _format_duration(ns: int) -> str:
    ns = max(ns, 0)
    if ns == 0:
        return "0s"
    if ns < _NS_PER_US:
        return f"{ns}ns"
    if ns < _NS_PER_MS:
        return _fraction(ns, _NS_PER_US) + "µs"
    if ns < _NS_PER_S:
        return _fraction(ns, _NS_PER_MS) + "ms"
    hours, rest = divmod(ns, _NS_PER_HOUR)
    minutes, rest = divmod(rest, _NS_PER_MIN)
    text = ""
    if hours:
        text += f"{hours}h"
    if hours or minutes:
        text += f"{minutes}m"
    return text + _fraction(rest, _NS_PER_S) + "s"


def initialize_request_context(environ: Environ) -> None:
    """Give the request an ID, system information and an anonymous identity."""
    set_request_id(environ)
    set_system_info(environ, SystemInfo.for_environment(get_environment()))
    set_authorized_info(environ, AuthorizedInfo.initial())


def _log_request(
    environ: Environ, recorder: ResponseRecorder, elapsed_ns: int, stream: Optional[TextIO]
) -> None:
    http_info = HTTPRequestInfo.from_environ(
        environ,
        recorder.status_code,
        _format_duration(elapsed_ns),
        get_request_id(environ) or "",
    )
    logger = new_logger(get_environment(), stream)
    logger.log_request(
        recorder.status_code,
        http_info,
        get_system_info(environ),
        get_authorized_info(environ),
    )


def request_middleware(app: WSGIApp, stream: Optional[TextIO] = None) -> WSGIApp:
    """Wrap ``app`` so each request ends with a single summary log line."""

    def wrapped(environ: Environ, start_response: Callable[..., Any]) -> List[bytes]:
        started = time.perf_counter_ns()
        initialize_request_context(environ)
        recorder = ResponseRecorder(start_response)
        try:
            result = app(environ, recorder)
            try:
                body = list(result)
            finally:
                close = getattr(result, "close", None)
                if callable(close):
                    close()
        finally:
            _log_request(environ, recorder, time.perf_counter_ns() - started, stream)
        return body

    return wrapped