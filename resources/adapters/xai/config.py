"""Pydantic settings for the xAI adapter resource."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, model_validator

from packages.grok_shared.config import (
    ConfigurationError,
    GrokSettings,
    resolve_component_settings,
)
from resources.adapters.xai.component import RESOURCE_COMPONENT_ID

DEFAULT_BASE_URL = "https://api.x.ai/v1"


class XaiAdapterSettings(BaseModel):
    """Runtime configuration for the HTTP-backed xAI adapter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: str = ""
    api_key_env: str = "XAI_API_KEY"
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = Field(default=300.0, gt=0)

    @model_validator(mode="after")
    def _validate_base_url(self) -> "XaiAdapterSettings":
        """Require an absolute http(s) base URL."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return self


def resolve_xai_adapter_settings(settings: GrokSettings) -> XaiAdapterSettings:
    """Resolve xAI adapter settings from ``components.adapter.xai``."""
    return resolve_component_settings(
        settings=settings,
        component_id=RESOURCE_COMPONENT_ID,
        model=XaiAdapterSettings,
    )


def resolve_api_key(settings: XaiAdapterSettings) -> str:
    """Return the bearer credential from the inline value or environment.

    The inline ``api_key`` wins when non-blank; otherwise the variable named
    by ``api_key_env`` is read. A blank result is a startup error.
    """
    inline_key = settings.api_key.strip()
    if inline_key != "":
        return inline_key
    env_key = settings.api_key_env.strip()
    if env_key == "":
        raise ConfigurationError("no xAI API key configured and api_key_env is empty")
    resolved = os.environ.get(env_key, "").strip()
    if resolved == "":
        raise ConfigurationError(f"environment variable '{env_key}' must be set")
    return resolved
