"""JSON line logger for request summaries."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from typing import Any, Optional, TextIO

from .context import LogFieldKey
from .models import AuthorizedInfo, HTTPRequestInfo, SystemInfo

_ATTRS = "reqlog_attrs"

_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}


def _encode(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(value)


class JSONFormatter(logging.Formatter):
    """Render a record as one JSON object: time, level, msg, then attributes."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).astimezone()
        payload: dict[str, Any] = {
            "time": timestamp.isoformat(timespec="milliseconds"),
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname),
            "msg": record.getMessage(),
        }
        payload.update(getattr(record, _ATTRS, {}))
        return json.dumps(payload, default=_encode, ensure_ascii=False, separators=(",", ":"))


class AppLogger:
    """Application logger writing structured attributes with each message."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def _log(self, level: int, msg: str, attrs: dict[str, Any]) -> None:
        self.logger.log(level, msg, extra={_ATTRS: attrs})

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)

    def warn(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.WARNING, msg, kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.ERROR, msg, kwargs)

    def log_request(
        self,
        status_code: int,
        http_info: HTTPRequestInfo,
        system_info: Optional[SystemInfo],
        authorized_info: Optional[AuthorizedInfo],
    ) -> None:
        """Write the single summary line for a request, at a level set by its status."""
        attrs = {
            str(LogFieldKey.HTTP_REQUEST): http_info,
            str(LogFieldKey.SYSTEM): system_info,
            str(LogFieldKey.AUTHORIZED): authorized_info,
        }
        if status_code >= 500:
            self._log(logging.ERROR, "request failed", attrs)
        else:
            # Client errors are logged as info: they are not server warnings.
            self._log(logging.INFO, "request completed", attrs)


def new_logger(env: str, stream: Optional[TextIO] = None) -> AppLogger:
    """Create a logger writing JSON lines; debug output only in ``dev``."""
    level = logging.DEBUG if env == "dev" else logging.INFO
    logger = logging.Logger("reqlog", level)
    logger.propagate = False
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    return AppLogger(logger)