"""Constructors for the error categories tool calls can fail with."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail


def invalid_params_error(
    message: str,
    *,
    code: str = codes.INVALID_PARAMS,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """Caller input was rejected before any upstream call; never retryable."""
    return _detail(ErrorCategory.VALIDATION, code, message, False, metadata)


def dependency_error(
    message: str,
    *,
    code: str = codes.DEPENDENCY_UNAVAILABLE,
    retryable: bool = True,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    """The xAI API was unreachable, refused the call, or replied badly."""
    return _detail(ErrorCategory.DEPENDENCY, code, message, retryable, metadata)


def internal_error(
    message: str,
    *,
    code: str = codes.INTERNAL_ERROR,
    metadata: Mapping[str, str] | None = None,
) -> ErrorDetail:
    return _detail(ErrorCategory.INTERNAL, code, message, False, metadata)


def _detail(
    category: ErrorCategory,
    code: str,
    message: str,
    retryable: bool,
    metadata: Mapping[str, str] | None,
) -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        retryable=retryable,
        metadata=dict(metadata or {}),
    )
