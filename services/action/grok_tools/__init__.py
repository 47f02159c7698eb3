"""Grok tool service exports."""

from services.action.grok_tools.cache import ModelCache
from services.action.grok_tools.component import SERVICE_COMPONENT_ID
from services.action.grok_tools.config import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_MODEL,
    GrokToolsServiceSettings,
    resolve_grok_tools_service_settings,
)
from services.action.grok_tools.implementation import DefaultGrokToolsService
from services.action.grok_tools.service import (
    GrokToolsService,
    build_grok_tools_service,
)
from services.action.grok_tools.validation import ImageDetail, SearchType

__all__ = [
    "DEFAULT_EMBEDDING_MODEL",
    "DEFAULT_MODEL",
    "DefaultGrokToolsService",
    "GrokToolsService",
    "GrokToolsServiceSettings",
    "ImageDetail",
    "ModelCache",
    "SERVICE_COMPONENT_ID",
    "SearchType",
    "build_grok_tools_service",
    "resolve_grok_tools_service_settings",
]
