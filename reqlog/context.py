"""Per-request values stored in the WSGI environ."""

from __future__ import annotations

import enum
import uuid
from typing import Any, MutableMapping, Optional

from .models import AuthorizedInfo, SystemInfo

_REQUEST_ID_KEY = "reqlog.request_id"
_SYSTEM_INFO_KEY = "reqlog.system_info"
_AUTHORIZED_INFO_KEY = "reqlog.authorized_info"
_STATUS_CODE_KEY = "reqlog.status_code"

Environ = MutableMapping[str, Any]


class LogFieldKey(str, enum.Enum):
    """Names of the structured fields in a request log line."""

    HTTP_REQUEST = "http_request"
    SYSTEM = "system"
    AUTHORIZED = "authorized"

    def __str__(self) -> str:
        return self.value


def set_system_info(environ: Environ, info: SystemInfo) -> None:
    environ[_SYSTEM_INFO_KEY] = info


def get_system_info(environ: Environ) -> Optional[SystemInfo]:
    info = environ.get(_SYSTEM_INFO_KEY)
    return info if isinstance(info, SystemInfo) else None


def set_authorized_info(environ: Environ, info: AuthorizedInfo) -> None:
    environ[_AUTHORIZED_INFO_KEY] = info


def get_authorized_info(environ: Environ) -> Optional[AuthorizedInfo]:
    info = environ.get(_AUTHORIZED_INFO_KEY)
    return info if isinstance(info, AuthorizedInfo) else None


def set_request_id(environ: Environ) -> str:
    """Generate a fresh request ID, store it and return it."""
    request_id = str(uuid.uuid4())
    environ[_REQUEST_ID_KEY] = request_id
    return request_id


def get_request_id(environ: Environ) -> Optional[str]:
    request_id = environ.get(_REQUEST_ID_KEY)
    return request_id if isinstance(request_id, str) else None


def set_status_code(environ: Environ, status_code: int) -> None:
    environ[_STATUS_CODE_KEY] = status_code


def get_status_code(environ: Environ) -> Optional[int]:
    status_code = environ.get(_STATUS_CODE_KEY)
    if isinstance(status_code, int) and not isinstance(status_code, bool):
        return status_code
    return None