"""grok-chat command-line entrypoint implemented with Typer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from actors.mcp_host.server import build_server
from packages.grok_shared.config import ConfigurationError, load_settings
from packages.grok_shared.logging import configure_logging, get_logger
from services.action.grok_tools import build_grok_tools_service

_LOGGER = get_logger(__name__)

SUCCESS_EXIT_CODE = 0
CONFIG_ERROR_EXIT_CODE = 2


class LogLevel(str, Enum):
    """Log levels accepted on the command line."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


@dataclass(frozen=True)
class CliConfig:
    """Global CLI options shared by all commands."""

    config_path: Path | None
    log_level: LogLevel | None
    json_logs: bool


def _cli_params(cfg: CliConfig) -> dict[str, Any]:
    """Map CLI options onto the highest-precedence settings source."""
    logging_params: dict[str, Any] = {}
    if cfg.log_level is not None:
        logging_params["level"] = cfg.log_level.value
    if cfg.json_logs:
        logging_params["json_output"] = True
    return {"logging": logging_params} if logging_params else {}


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="xAI Grok MCP server")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="GROK_CHAT_CONFIG",
        help="YAML config file (default: ~/.config/grok-chat/config.yaml)",
    ),
    log_level: LogLevel | None = typer.Option(
        None, case_sensitive=False, help="Override logging.level"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(config_path=config, log_level=log_level, json_logs=json_logs)


@app.command("serve")
def serve(ctx: typer.Context) -> None:
    """Serve the Grok tools over MCP stdio until the client disconnects."""
    cfg = _require_config(ctx)
    try:
        settings = load_settings(cli_params=_cli_params(cfg), config_path=cfg.config_path)
        configure_logging(
            level=settings.logging.level,
            json_output=settings.logging.json_output,
            service=settings.logging.service,
            environment=settings.logging.environment,
        )
        service = build_grok_tools_service(settings=settings)
    except (ConfigurationError, ValidationError) as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=CONFIG_ERROR_EXIT_CODE) from exc

    _LOGGER.info("starting MCP server via stdio")
    build_server(service).run()
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


if __name__ == "__main__":
    app()
