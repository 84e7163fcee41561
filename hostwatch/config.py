"""
Configuration for hostwatch.

Monitor settings are resolved once at startup from, in increasing order of
precedence: built-in defaults, an optional YAML file, HOSTWATCH_* environment
variables and explicit overrides (CLI flags). Notifier settings (sender,
destination, API credentials) come from the environment only.

Both objects are frozen; nothing re-reads configuration after startup.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from hostwatch.errors import ConfigurationInvalid

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".hostwatch"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_BASE_URL = "https://api.infobip.com"

# Environment variable -> MonitorConfig field
ENV_OVERRIDES = {
    "HOSTWATCH_CPU_THRESHOLD": "cpu_usage_threshold",
    "HOSTWATCH_MEM_THRESHOLD": "mem_usage_threshold_percent",
    "HOSTWATCH_CYCLES_FOR_ALERT": "cycles_for_alert",
    "HOSTWATCH_CYCLES_BETWEEN_ALERT": "cycles_between_alert",
    "HOSTWATCH_REFRESH_INTERVAL": "refresh_interval",
    "HOSTWATCH_DISPATCH_TIMEOUT": "dispatch_timeout",
}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class MonitorConfig:
    """Thresholds and timing for the monitor loop.

    Attributes:
        cpu_usage_threshold: Per-core CPU percentage that counts as a breach (strict >)
        mem_usage_threshold_percent: Memory used percentage that counts as a breach
        cycles_for_alert: Consecutive breaching ticks needed before alerting
        cycles_between_alert: Non-breaching ticks needed after an alert before re-arming
        refresh_interval: Seconds between ticks
        dispatch_timeout: Seconds to wait for a tick's alert deliveries
    """

    cpu_usage_threshold: float = 90.0
    mem_usage_threshold_percent: int = 80
    cycles_for_alert: int = 15
    cycles_between_alert: int = 10
    refresh_interval: float = 1.0
    dispatch_timeout: float = 10.0

    def __post_init__(self):
        if not _is_number(self.cpu_usage_threshold) or not 0 <= self.cpu_usage_threshold <= 100:
            raise ConfigurationInvalid("cpu_usage_threshold must be a number between 0 and 100")
        if (
            not _is_int(self.mem_usage_threshold_percent)
            or not 0 <= self.mem_usage_threshold_percent <= 100
        ):
            raise ConfigurationInvalid(
                "mem_usage_threshold_percent must be an integer between 0 and 100"
            )
        if not _is_int(self.cycles_for_alert) or self.cycles_for_alert < 1:
            raise ConfigurationInvalid("cycles_for_alert must be an integer of at least 1")
        if not _is_int(self.cycles_between_alert) or self.cycles_between_alert < 0:
            raise ConfigurationInvalid("cycles_between_alert must be a non-negative integer")
        if not _is_number(self.refresh_interval) or self.refresh_interval <= 0:
            raise ConfigurationInvalid("refresh_interval must be a positive number of seconds")
        if not _is_number(self.dispatch_timeout) or self.dispatch_timeout <= 0:
            raise ConfigurationInvalid("dispatch_timeout must be a positive number of seconds")


@dataclass(frozen=True)
class NotifierSettings:
    """Process-wide delivery settings, read from the environment at startup."""

    sender: str = ""
    destination: str = ""
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 10.0


_FIELD_TYPES = {f.name: f.type for f in fields(MonitorConfig)}


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw value (YAML scalar or env string) to the field's type."""
    expected = _FIELD_TYPES[name]
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value) if expected in (int, "int") else float(value)
        except ValueError:
            raise ConfigurationInvalid(f"{name}: cannot parse {value!r}") from None
    if expected in (float, "float") and _is_int(value):
        return float(value)
    return value


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationInvalid(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationInvalid(f"Malformed YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationInvalid(f"{path}: top level must be a mapping")

    unknown = sorted(set(data) - set(_FIELD_TYPES))
    if unknown:
        raise ConfigurationInvalid(f"{path}: unknown keys: {', '.join(map(str, unknown))}")
    return data


def load_config(
    path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> MonitorConfig:
    """
    Resolve the monitor configuration.

    Args:
        path: YAML file to read. When None, ~/.hostwatch/config.yaml is used
              if it exists. An explicit path that does not exist is an error.
        env: Environment mapping (defaults to os.environ)
        overrides: Field values that win over every other source; None values
                   are ignored

    Returns:
        Validated MonitorConfig

    Raises:
        ConfigurationInvalid: on unreadable files, unknown keys, unparsable
                              values or values failing validation
    """
    env = os.environ if env is None else env
    values: dict[str, Any] = {}

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationInvalid(f"Config file not found: {config_path}")
    else:
        config_path = CONFIG_FILE if CONFIG_FILE.exists() else None

    if config_path is not None:
        logger.debug(f"Loading config from {config_path}")
        values.update(_read_yaml(config_path))

    for var, name in ENV_OVERRIDES.items():
        raw = env.get(var)
        if raw is not None and raw.strip():
            values[name] = raw

    for name, value in (overrides or {}).items():
        if value is not None:
            if name not in _FIELD_TYPES:
                raise ConfigurationInvalid(f"Unknown setting: {name}")
            values[name] = value

    return MonitorConfig(**{name: _coerce(name, value) for name, value in values.items()})


def load_notifier_settings(
    env: Mapping[str, str] | None = None, require_route: bool = True
) -> NotifierSettings:
    """
    Read delivery settings from the environment.

    WA_SENDER and WA_DESTINATION identify the WhatsApp sender and recipient,
    IB_API_KEY and IB_BASE_URL the Infobip account.

    Raises:
        ConfigurationInvalid: if require_route is set and any of sender,
                              destination or API key is missing
    """
    env = os.environ if env is None else env

    settings = NotifierSettings(
        sender=env.get("WA_SENDER", "").strip(),
        destination=env.get("WA_DESTINATION", "").strip(),
        api_key=env.get("IB_API_KEY", "").strip(),
        base_url=(env.get("IB_BASE_URL", "").strip() or DEFAULT_BASE_URL),
    )

    if require_route:
        missing = [
            var
            for var, value in (
                ("WA_SENDER", settings.sender),
                ("WA_DESTINATION", settings.destination),
                ("IB_API_KEY", settings.api_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationInvalid(
                f"Missing required environment variables: {', '.join(missing)}"
            )

    return settings
