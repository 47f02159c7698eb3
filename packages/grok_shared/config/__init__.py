"""Public API for shared grok-chat configuration utilities."""

from .loader import ConfigurationError, load_settings
from .models import (
    DEFAULT_CONFIG_PATH,
    ComponentsSettings,
    GrokSettings,
    LoggingSettings,
    resolve_component_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ComponentsSettings",
    "ConfigurationError",
    "GrokSettings",
    "LoggingSettings",
    "load_settings",
    "resolve_component_settings",
]
