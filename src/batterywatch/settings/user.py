"""User-configurable settings loaded from a YAML file."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import ClassVar, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from batterywatch.constants import (
    CRITICAL_SHUTDOWN_LEVEL,
    DANGER_HIGH_TEMPERATURE,
    DANGER_ANNOUNCE_INTERVAL,
    DANGER_LOW_TEMPERATURE,
    DEFAULT_POLL_SECONDS,
    DEFAULT_SHUTDOWN_URL,
    DEFAULT_SKILL_BASE_URL,
)

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class WatchdogSettings(BaseModel):
    """Settings for the battery watchdog and its collaborators.

    Every field has a default, so an empty config file yields a watchdog
    that logs notifications instead of sending them and reports the device
    as idle.
    """

    # Default search paths for configuration
    DEFAULT_CONFIG_PATHS: ClassVar[list[Path]] = [
        Path("batterywatch.yaml"),
        Path("~/.config/batterywatch/config.yaml").expanduser(),
        Path("/etc/batterywatch/config.yaml"),
    ]

    # Collaborators
    skill_base_url: str = Field(DEFAULT_SKILL_BASE_URL, description="Root of battery skill URLs")
    shutdown_url: str = Field(DEFAULT_SHUTDOWN_URL, description="App URL that powers the device off")
    invoker_url: str | None = Field(
        None, description="HTTP endpoint that opens skill URLs; if null, invocations are logged"
    )
    visibility_url: str | None = Field(
        None, description="HTTP endpoint returning {'appId': ...}; if null, the device is idle"
    )
    http_timeout: float = Field(3.0, gt=0, description="Timeout for collaborator requests (s)")
    shutdown_mode: Literal["system", "url"] = "system"
    dry_run: bool = Field(False, description="Log invocations and shutdowns instead of sending")

    # Decision thresholds
    shutdown_level: int = Field(
        CRITICAL_SHUTDOWN_LEVEL,
        ge=0,
        le=100,
        description="Battery % at or below which a discharging device shuts down",
    )
    danger_high_temp: int = Field(DANGER_HIGH_TEMPERATURE, description="High temperature threshold")
    danger_low_temp: int = Field(DANGER_LOW_TEMPERATURE, description="Low temperature threshold")
    danger_announce_minutes: int = Field(
        int(DANGER_ANNOUNCE_INTERVAL.total_seconds() // 60),
        gt=0,
        description="Minimum minutes between dangerous-temperature wake-ups",
    )

    # Scheduling
    poll_seconds: float = Field(
        DEFAULT_POLL_SECONDS, gt=0, description="Wake-up poll interval of the bundled scheduler"
    )

    @model_validator(mode="after")
    def check_temperature_window(self) -> WatchdogSettings:
        if self.danger_low_temp >= self.danger_high_temp:
            raise ValueError("danger_low_temp must be below danger_high_temp")
        return self

    @property
    def danger_announce_interval(self) -> timedelta:
        """Dangerous-temperature announce window as a timedelta."""
        return timedelta(minutes=self.danger_announce_minutes)

    @classmethod
    def load(cls, path: Path | None = None) -> WatchdogSettings:
        """Load configuration from a YAML file.

        Args:
            path: Path to config file (optional, searches default locations if None)

        Returns:
            Validated WatchdogSettings object

        Raises:
            FileNotFoundError: If no config file is found
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get("BATTERYWATCH_CONFIG")
            if env_path:
                path = Path(env_path)
                if not path.exists():
                    raise FileNotFoundError(
                        f"Config file from BATTERYWATCH_CONFIG not found: {path}"
                    )
            else:
                for default_path in cls.DEFAULT_CONFIG_PATHS:
                    if default_path.exists():
                        path = default_path
                        break
                else:
                    raise FileNotFoundError(
                        "No configuration file found. Create batterywatch.yaml "
                        "or set BATTERYWATCH_CONFIG."
                    )

        import yaml  # local import to avoid hard dep for callers

        try:
            raw = _interpolate_env(path.read_text())
            data = yaml.safe_load(raw) or {}
        except Exception as exc:  # pragma: no cover
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
