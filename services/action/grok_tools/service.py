"""Authoritative in-process Python API for the Grok tool service."""

from __future__ import annotations

from abc import ABC, abstractmethod

from packages.grok_shared.config import GrokSettings
from packages.grok_shared.result import Result
from resources.adapters.xai.adapter import XaiAdapter
from services.action.grok_tools.validation import ImageDetail, SearchType


class GrokToolsService(ABC):
    """Public API for the five Grok tools.

    Every method returns a ``Result[str]`` carrying either the rendered text
    or the errors; remote failures never escape as exceptions.
    """

    @abstractmethod
    async def chat(
        self,
        *,
        prompt: str,
        system_prompt: str | None = None,
        messages: str | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        response_schema: str | None = None,
    ) -> Result[str]:
        """Run one chat completion, optionally continuing a prior conversation."""

    @abstractmethod
    async def chat_with_vision(
        self,
        *,
        prompt: str,
        image_url: str,
        detail: ImageDetail | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Result[str]:
        """Ask about one remote image; ``detail`` defaults to ``high``."""

    @abstractmethod
    async def chat_with_search(
        self,
        *,
        prompt: str,
        system_prompt: str | None = None,
        search_type: SearchType | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Result[str]:
        """Answer with live web and/or X search grounding."""

    @abstractmethod
    async def embedding(
        self,
        *,
        input: str,
        model: str | None = None,
    ) -> Result[str]:
        """Generate embeddings for a JSON-encoded string or string array."""

    @abstractmethod
    async def list_models(self) -> Result[str]:
        """List available models, served from cache while fresh."""

    @abstractmethod
    async def aclose(self) -> None:
        """Release adapter resources."""


def build_grok_tools_service(
    *,
    settings: GrokSettings,
    adapter: XaiAdapter | None = None,
) -> GrokToolsService:
    """Build the default service implementation from typed settings.

    Without an explicit adapter the HTTP adapter is built, which requires a
    configured API key and raises ``ConfigurationError`` otherwise.
    """
    from resources.adapters.xai import (
        HttpXaiAdapter,
        resolve_api_key,
        resolve_xai_adapter_settings,
    )
    from services.action.grok_tools.cache import ModelCache
    from services.action.grok_tools.config import resolve_grok_tools_service_settings
    from services.action.grok_tools.implementation import DefaultGrokToolsService

    service_settings = resolve_grok_tools_service_settings(settings)
    if adapter is None:
        adapter_settings = resolve_xai_adapter_settings(settings)
        adapter = HttpXaiAdapter(
            settings=adapter_settings,
            api_key=resolve_api_key(adapter_settings),
        )
    return DefaultGrokToolsService(
        settings=service_settings,
        adapter=adapter,
        cache=ModelCache(ttl_seconds=service_settings.models_cache_ttl_seconds),
    )
