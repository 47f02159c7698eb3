"""Typed failures raised by the shared JSON API client."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HttpError(Exception):
    """Any failed outbound call; ``url`` is the path when no reply arrived."""

    message: str
    method: str
    url: str
    retryable: bool = False

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class HttpRequestError(HttpError):
    """No reply: connect failure, timeout or protocol error."""

    cause: Exception | None = None


@dataclass(frozen=True)
class HttpStatusError(HttpError):
    """Reply arrived with any non-2xx status; redirects are not followed."""

    status_code: int = 0
    response_body: str = ""


@dataclass(frozen=True)
class HttpJsonDecodeError(HttpError):
    """2xx reply whose body is not JSON or nests too deeply to decode."""

    status_code: int = 0
    response_body: str = ""
    cause: Exception | None = None
