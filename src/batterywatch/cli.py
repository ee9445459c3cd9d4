"""Battery watchdog CLI application.

This module provides the command-line interface for the battery watchdog:
running it against a live telemetry stream, replaying recorded telemetry,
and configuration utilities.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Final

import typer
import yaml
from pydantic import ValidationError

from batterywatch.scheduler import WakeUpResult, WakeUpScheduler
from batterywatch.settings import WatchdogSettings
from batterywatch.watchdog import BatteryWatchdog

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery telemetry watchdog CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "batterywatch.cli"

CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
DRY_RUN_OPTION = typer.Option(False, "--dry-run", help="Log notifications instead of sending")
SOURCE_OPTION = typer.Option(
    None, "--source", "-s", exists=True, dir_okay=False, help="Read telemetry from file"
)
TELEMETRY_ARGUMENT = typer.Argument(
    ..., exists=True, dir_okay=False, help="File with one battery.info JSON per line"
)
DST_ARGUMENT = typer.Argument(..., help="Output batterywatch.yaml")


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load_settings(config: Path | None, dry_run: bool) -> WatchdogSettings:
    try:
        settings = WatchdogSettings.load(config) if config else WatchdogSettings()
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    if dry_run:
        settings = settings.model_copy(update={"dry_run": True})
    return settings


def _telemetry_lines(lines: Iterable[str]) -> Iterable[str]:
    for line in lines:
        line = line.strip()
        if line and not line.startswith("#"):
            yield line


@app.command()
def run(
    config: Path | None = CONFIG_OPTION,
    source: Path | None = SOURCE_OPTION,
    debug: bool = DEBUG_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Watch a telemetry stream (stdin by default) and poll wake-ups periodically."""
    _configure_logging(debug)
    settings = _load_settings(config, dry_run)
    watchdog = BatteryWatchdog.from_settings(settings)
    scheduler = WakeUpScheduler(watchdog, settings.poll_seconds)
    scheduler.start()

    try:
        if source is not None:
            with source.open(encoding="utf-8") as stream:
                for line in _telemetry_lines(stream):
                    watchdog.handle_message(line)
        else:
            for line in _telemetry_lines(sys.stdin):
                watchdog.handle_message(line)
    finally:
        scheduler.stop()
        watchdog.close()


@app.command()
def replay(
    telemetry: Path = TELEMETRY_ARGUMENT,
    config: Path | None = CONFIG_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Replay recorded telemetry, polling wake-ups after every sample.

    Notifications are logged rather than sent, and no shutdown is issued.
    """
    _configure_logging(debug)
    settings = _load_settings(config, dry_run=True)
    watchdog = BatteryWatchdog.from_settings(settings)
    scheduler = WakeUpScheduler(watchdog, settings.poll_seconds)

    try:
        for line in _telemetry_lines(telemetry.read_text(encoding="utf-8").splitlines()):
            decision = watchdog.handle_message(line)
            if decision is not None and decision.shutdown:
                typer.echo("shutdown requested")
                break
            result = scheduler.poll_once()
            if result is not WakeUpResult.NONE:
                typer.echo(f"wake-up: {result.value}")
    finally:
        watchdog.close()

    typer.echo(json.dumps(watchdog.get_status_report()))


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path):
    """Validate a YAML config file against the schema."""
    try:
        WatchdogSettings.load(file)
        typer.echo("✅ Config valid")
    except (FileNotFoundError, RuntimeError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@config_app.command("wizard")
def wizard(dst: Path = DST_ARGUMENT):
    """Interactive prompt to create a config file."""
    typer.echo("Interactive config builder - press Enter for defaults.")

    while True:
        data: dict[str, Any] = {
            "invoker_url": typer.prompt("Skill invocation endpoint", default="") or None,
            "visibility_url": typer.prompt("Visibility endpoint", default="") or None,
            "shutdown_mode": typer.prompt("Shutdown mode [system|url]", default="system"),
            "poll_seconds": float(typer.prompt("Wake-up poll interval (s)", default="60")),
        }
        try:
            cfg = WatchdogSettings(**data)
            break  # valid → exit loop
        except ValidationError as err:
            typer.secho("\nConfig error(s):", fg=typer.colors.RED, err=True)
            for e in err.errors():
                typer.secho(f"  • {e['loc'][0]} - {e['msg']}", fg=typer.colors.RED, err=True)
            typer.echo("Please re-enter the values.\n")

    dst.write_text(yaml.safe_dump(cfg.model_dump(), sort_keys=False), encoding="utf-8")
    typer.secho(f"Config written to {dst}", fg=typer.colors.GREEN)


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
