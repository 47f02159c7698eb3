"""Pydantic ingress validation models for the Grok tool service.

Models run before any outbound request is built. Failed issues are turned
into caller-facing reasons by :func:`issue_reason`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

from resources.adapters.xai.models import MAX_TOKENS_LIMIT

MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0
IMAGE_URL_SCHEMES: tuple[str, ...] = ("http://", "https://")

_REASONS: Mapping[str, str] = {
    "temperature": "temperature must be a finite number between 0.0 and 2.0, got {value}",
    "max_tokens": (
        f"max_tokens must be an integer between 0 and {MAX_TOKENS_LIMIT}, got {{value}}"
    ),
    "image_url": "image_url must start with http:// or https://",
}


class SearchType(StrEnum):
    """Which live-lookup capabilities a search call enables."""

    WEB = "web"
    X = "x"
    BOTH = "both"


class ImageDetail(StrEnum):
    """Image resolution hint forwarded with vision requests."""

    LOW = "low"
    HIGH = "high"
    AUTO = "auto"


class _ValidationModel(BaseModel):
    """Base strict request-validation model."""

    model_config = ConfigDict(frozen=True, extra="forbid")


class SamplingParams(_ValidationModel):
    """Sampling controls shared by chat, vision and search calls."""

    temperature: float | None = Field(
        default=None, ge=MIN_TEMPERATURE, le=MAX_TEMPERATURE, allow_inf_nan=False
    )
    max_tokens: StrictInt | None = Field(default=None, ge=0, le=MAX_TOKENS_LIMIT)


class VisionParams(SamplingParams):
    """Sampling controls plus the image reference of a vision call."""

    image_url: str

    @field_validator("image_url")
    @classmethod
    def _validate_image_url(cls, value: str) -> str:
        if not value.startswith(IMAGE_URL_SCHEMES):
            raise ValueError("unsupported image_url scheme")
        return value


def issue_reason(issue: Mapping[str, Any]) -> tuple[str, str]:
    """Return ``(field, reason)`` for one pydantic error issue."""
    location = issue.get("loc", ())
    field = str(location[0]) if location else "payload"
    template = _REASONS.get(field)
    if template is None:
        return field, f"{field}: {issue.get('msg', 'invalid value')}"
    return field, template.format(value=issue.get("input"))
