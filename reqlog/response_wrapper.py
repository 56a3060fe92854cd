"""Wrapper around WSGI ``start_response`` that records the status code."""

from __future__ import annotations

from typing import Any, Callable, Optional

StartResponse = Callable[..., Any]


class ResponseRecorder:
    """Pass calls through to ``start_response`` and remember the status."""

    def __init__(self, start_response: StartResponse) -> None:
        self._start_response = start_response
        self._status_code = 200

    def __call__(self, status: str, headers: list, exc_info: Optional[tuple] = None) -> Any:
        self._status_code = int(status.split(None, 1)[0])
        return self._start_response(status, headers, exc_info)

    @property
    def status_code(self) -> int:
        """The last status sent, or 200 if none was."""
        return self._status_code