"""CLI entry point for task-service.

Usage:
    task-service serve                     # Start the HTTP server on localhost:1234
    task-service serve --port 8080         # Start on another port
    task-service init-config               # Create config file
    task-service show-config               # Print effective settings
    task-service --version                 # Show version
"""

import contextlib
import json
import sys
from pathlib import Path
from typing import Any

import click

from task_service import __version__
from task_service.config import (
    Settings,
    get_config_path,
    get_default_config,
    load_settings_with_toml,
)


def resolve_settings(options: dict[str, Any], **overrides: Any) -> Settings:
    """Build settings from config file, environment and CLI options.

    Args:
        options: Group-level CLI options (config_path, log_level)
        **overrides: Command-level values; None means "not given"

    Returns:
        Effective settings
    """
    config_path = options.get("config_path")
    settings = load_settings_with_toml(Path(config_path) if config_path else None)

    update = {key: value for key, value in overrides.items() if value is not None}
    if options.get("log_level"):
        update["log_level"] = options["log_level"]
    if update:
        settings = Settings.model_validate({**settings.model_dump(), **update})
    return settings


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    type=click.Path(exists=False),
    help="Override global config file path",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Override log level",
)
@click.version_option(version=__version__, prog_name="task-service")
@click.pass_context
def main(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """In-memory task tracking HTTP service.

    Configuration is loaded from (in priority order):
    1. CLI arguments
    2. Environment variables (TASK_SERVICE_*)
    3. Global config file (~/.config/task-service/config.toml)
    4. Built-in defaults
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["log_level"] = log_level

    # No subcommand: run the server with defaults
    if ctx.invoked_subcommand is None:
        ctx.invoke(serve)


@main.command()
@click.option("--host", type=str, help="Bind address")
@click.option("--port", type=int, help="Bind port")
@click.option("--metrics/--no-metrics", default=None, help="Expose /health and /metrics")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, metrics: bool | None) -> None:
    """Run the task API server."""
    import uvicorn

    from task_service.api.http_server import create_http_server
    from task_service.utils.logging import get_logger, setup_logging

    settings = resolve_settings(ctx.obj, host=host, port=port, metrics_enabled=metrics)
    setup_logging(settings)
    logger = get_logger(__name__)

    app = create_http_server(expose_metrics=settings.metrics_enabled)

    logger.info(
        "starting_task_service",
        version=__version__,
        host=settings.host,
        port=settings.port,
    )
    try:
        # httptools rejects methods outside its fixed list, including UPDATE
        uvicorn.run(
            app,
            host=settings.host,
            port=settings.port,
            http="h11",
            log_level="warning",
        )
    finally:
        logger.info("task_service_stopped")


@main.command()
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init_config(ctx: click.Context, force: bool) -> None:
    """Create global configuration file with defaults."""
    import tomli_w

    config_path = Path(ctx.obj.get("config_path") or get_config_path())

    if config_path.exists() and not force:
        click.echo(f"Config file already exists: {config_path}", err=True)
        click.echo("Use --force to overwrite.", err=True)
        sys.exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "wb") as f:
        tomli_w.dump(get_default_config(), f)

    with contextlib.suppress(OSError):
        config_path.chmod(0o600)

    click.echo(f"Created config file: {config_path}")


@main.command()
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Print the effective settings as JSON."""
    settings = resolve_settings(ctx.obj)
    click.echo(json.dumps(settings.model_dump(), indent=2))


if __name__ == "__main__":
    main()
