"""Public shared result API for grok-chat components."""

from .builders import failure, success
from .result import Result

__all__ = [
    "Result",
    "failure",
    "success",
]
