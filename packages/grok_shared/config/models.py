"""Typed configuration models for grok-chat runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "grok-chat" / "config.yaml"

COMPONENT_KINDS: tuple[str, ...] = ("service", "adapter")

LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseModel):
    """Stderr logging options applied once at startup."""

    level: LogLevelName = "INFO"
    json_output: bool = False
    service: str = "grok-chat"
    environment: str = "dev"


class _ComponentGroup(BaseModel):
    """Per-component settings keyed by component name; validated on resolve."""

    model_config = ConfigDict(extra="allow")


class ComponentsSettings(BaseModel):
    """The ``components`` subtree, grouped as ``components.<kind>.<name>``."""

    model_config = ConfigDict(extra="allow")

    service: _ComponentGroup = Field(default_factory=_ComponentGroup)
    adapter: _ComponentGroup = Field(default_factory=_ComponentGroup)

    @model_validator(mode="before")
    @classmethod
    def _reject_flat_component_keys(cls, value: object) -> object:
        if not isinstance(value, dict):
            return value
        for key in value:
            kind, separator, name = str(key).partition("_")
            if separator and kind in COMPONENT_KINDS:
                raise ValueError(
                    f"components.{key} is invalid; "
                    f"use components.{kind}.{name} instead"
                )
        return value


class GrokSettings(BaseSettings):
    """Root settings: init kwargs over ``GROK_CHAT_*`` env over YAML over defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GROK_CHAT_",
        env_nested_delimiter="__",
        extra="ignore",
        nested_model_default_partial_update=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    components: ComponentsSettings = Field(default_factory=ComponentsSettings)

    _config_path: ClassVar[Path] = DEFAULT_CONFIG_PATH

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlConfigSettingsSource(
            settings_cls, yaml_file=cls._config_path, yaml_file_encoding="utf-8"
        )
        return init_settings, env_settings, yaml_settings


TComponentSettings = TypeVar("TComponentSettings", bound=BaseModel)


def resolve_component_settings(
    *,
    settings: GrokSettings,
    component_id: str,
    model: type[TComponentSettings],
) -> TComponentSettings:
    """Validate ``components.<kind>.<name>`` for ``<kind>_<name>`` into ``model``.

    A component with no configured block gets the model defaults.
    """
    kind, separator, name = component_id.partition("_")
    if not separator or kind not in COMPONENT_KINDS:
        raise ValueError(f"component id '{component_id}' has no known kind prefix")

    group: _ComponentGroup = getattr(settings.components, kind)
    raw: Any = (group.model_extra or {}).get(name, {})
    if not isinstance(raw, dict):
        raise TypeError(f"components.{kind}.{name} must resolve to an object mapping")
    return model.model_validate(raw)
