"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables
3) YAML config file (``~/.config/grok-chat/config.yaml`` unless overridden)
4) Built-in model defaults

Environment variable format:
- Prefix: ``GROK_CHAT_``
- Nested keys: ``__`` separator
- Example: ``GROK_CHAT_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import GrokSettings


class ConfigurationError(RuntimeError):
    """Startup configuration is missing or invalid."""


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> GrokSettings:
    """Load root settings, optionally reading YAML from an explicit path."""
    settings_cls = GrokSettings
    if config_path is not None:
        settings_cls = _file_bound_settings(Path(config_path).expanduser())
    return settings_cls(**dict(cli_params or {}))


def _file_bound_settings(path: Path) -> type[GrokSettings]:
    """Return a settings subclass whose YAML source reads ``path``."""

    class _FileBoundSettings(GrokSettings):
        _config_path: ClassVar[Path] = path

    return _FileBoundSettings
