"""Pydantic settings for the Grok tool service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.grok_shared.config import GrokSettings, resolve_component_settings
from services.action.grok_tools.component import SERVICE_COMPONENT_ID

DEFAULT_MODEL = "grok-4-1-fast-non-reasoning"
DEFAULT_EMBEDDING_MODEL = "grok-2-text-embedding"


class GrokToolsServiceSettings(BaseModel):
    """Model defaults and listing cache lifetime for the tool service."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    default_model: str = DEFAULT_MODEL
    default_embedding_model: str = DEFAULT_EMBEDDING_MODEL
    models_cache_ttl_seconds: float = Field(default=300.0, gt=0)

    @field_validator("default_model", "default_embedding_model")
    @classmethod
    def _require_model_name(cls, value: str) -> str:
        """Reject blank model identifiers."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("model identifiers must be non-empty")
        return normalized


def resolve_grok_tools_service_settings(
    settings: GrokSettings,
) -> GrokToolsServiceSettings:
    """Resolve service settings from ``components.service.grok_tools``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=GrokToolsServiceSettings,
    )
