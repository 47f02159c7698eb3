"""Public shared error API for grok-chat components."""

from . import codes
from .factories import dependency_error, internal_error, invalid_params_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "ErrorCategory",
    "ErrorDetail",
    "codes",
    "dependency_error",
    "internal_error",
    "invalid_params_error",
]
