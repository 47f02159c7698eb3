"""Typed result model for in-process component boundaries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from packages.grok_shared.errors import ErrorCategory, ErrorDetail


T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success payload or terminal errors for one public API call."""

    payload: T | None
    errors: list[ErrorDetail] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return True when no errors are present."""
        return len(self.errors) == 0

    @property
    def has_payload(self) -> bool:
        """Return True when payload is present."""
        return self.payload is not None

    @property
    def invalid_params(self) -> bool:
        """Return True when the call was rejected before any outbound request."""
        return any(item.category is ErrorCategory.VALIDATION for item in self.errors)

    def error_text(self) -> str:
        """Join error messages into one display string."""
        return "\n".join(item.message for item in self.errors)
