"""Command-line interface for numfmt."""

from __future__ import annotations

import dataclasses
from typing import List, Optional

import typer

from .config import Config, parse_options
from .formatter import FormatOptions, Formatter
from .logger import get_logger, setup_logger

logger = get_logger(__name__)

app = typer.Typer(add_completion=False, help="Format decimal numbers for display")


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log level (default: general.log_level from the config file, else WARNING)",
    ),
    log_file: Optional[str] = typer.Option(
        None,
        "--log-file",
        help="Rotating log file (default: general.log_file from the config file)",
    ),
) -> None:
    ctx.obj = {"log_level": log_level, "log_file": log_file}
    try:
        setup_logger(level=log_level or "WARNING", log_file=log_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc
    except OSError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-file") from exc


@app.command("format")
def format_command(
    ctx: typer.Context,
    values: List[str] = typer.Argument(..., help="Values to format"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Formatter profile from the config file"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to YAML config file"),
    preset: Optional[str] = typer.Option(None, "--preset", help="Base preset: currency or percent"),
    group_separator: Optional[str] = typer.Option(None, "--group-separator"),
    group_size: Optional[int] = typer.Option(None, "--group-size"),
    decimal_separator: Optional[str] = typer.Option(None, "--decimal-separator"),
    round_places: Optional[int] = typer.Option(None, "--round-places"),
    shift: Optional[int] = typer.Option(None, "--shift"),
    min_decimal_places: Optional[int] = typer.Option(None, "--min-decimal-places"),
    template: Optional[str] = typer.Option(None, "--template"),
    negative_template: Optional[str] = typer.Option(None, "--negative-template"),
) -> None:
    overrides = {
        "group_separator": group_separator,
        "group_size": group_size,
        "decimal_separator": decimal_separator,
        "round_places": round_places,
        "shift": shift,
        "min_decimal_places": min_decimal_places,
        "template": template,
        "negative_template": negative_template,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}

    try:
        options = _base_options(ctx, profile, config_path, preset)
        options = dataclasses.replace(options, **overrides)
    except (OSError, KeyError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    logger.debug(f"Formatting {len(values)} value(s) with {options}")
    formatter = Formatter(options)
    for value in values:
        typer.echo(formatter.format(value))


@app.command("profiles")
def profiles_command(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to YAML config file"),
) -> None:
    try:
        config = _load_config(ctx, config_path)
    except (OSError, ValueError) as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for name in config.profile_names():
        typer.echo(name)


def _base_options(
    ctx: typer.Context,
    profile: Optional[str],
    config_path: Optional[str],
    preset: Optional[str],
) -> FormatOptions:
    if profile and preset:
        raise ValueError("--profile and --preset cannot be used together")
    if preset:
        return parse_options({"preset": preset}, profile="--preset")
    if profile:
        return _load_config(ctx, config_path).formatter(profile).options
    return FormatOptions()


def _load_config(ctx: typer.Context, config_path: Optional[str]) -> Config:
    config = Config.load(config_path)
    # Explicit --log-level and --log-file win over the config file
    explicit = ctx.obj or {}
    setup_logger(
        level=explicit.get("log_level") or config.general.log_level,
        log_file=explicit.get("log_file") or config.general.log_file,
    )
    return config


def main() -> None:
    app()
