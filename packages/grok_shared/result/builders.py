"""Convenience constructors for typed results."""

from __future__ import annotations

from typing import Iterable, TypeVar

from packages.grok_shared.errors import ErrorDetail

from .result import Result


T = TypeVar("T")


def success(*, payload: T) -> Result[T]:
    """Build a successful result with payload and no errors."""
    return Result[T](payload=payload, errors=[])


def failure(*, errors: Iterable[ErrorDetail]) -> Result[T]:
    """Build a failed result with one or more errors."""
    normalized = list(errors)
    if not normalized:
        raise ValueError("failure requires at least one error")
    return Result[T](payload=None, errors=normalized)
