"""Exceptions raised by reqlens."""

from __future__ import annotations

from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .timing.models import TimingSnapshot


class ReqlensError(Exception):
    """Base class for reqlens errors."""


class InvalidRequestError(ReqlensError):
    """Request configuration cannot be built."""


class InvalidUrlError(InvalidRequestError):
    """URL cannot be parsed into scheme, host and port."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Invalid URL '{url}': {reason}")
        self.url = url
        self.reason = reason


class InvalidStateError(ReqlensError):
    """Timer operations were called out of order."""


class TransportError(ReqlensError):
    """The real HTTP request failed below the HTTP layer.

    Carries whatever timing was gathered before the failure so the
    breakdown can still be rendered.
    """

    def __init__(
        self,
        message: str,
        timing: Optional[TimingSnapshot] = None,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.timing = timing
        self.cause = cause
        self.status = status
        self.body = body
