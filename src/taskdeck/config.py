"""Configuration management for taskdeck."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TASKDECK_HOME = Path(os.environ.get("TASKDECK_HOME", Path.home() / "taskdeck"))
CONFIG_FILE = TASKDECK_HOME / "config" / "taskdeck.conf"
DATA_DIR = TASKDECK_HOME / "data"


@dataclass
class Config:
    """taskdeck configuration."""

    api_base_url: str = ""
    api_token: str = ""
    user_id: str = ""
    # When set, tasks and completions are read from this JSON file instead of the API
    snapshot_file: str = ""
    box_count: int = 10
    sort_by: str = "priority"
    timezone: str = "UTC"
    sweep_interval_minutes: int = 60


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, using {default}")
        return default


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from taskdeck.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "api_token":
                config.api_token = value
            case "user_id":
                config.user_id = value
            case "snapshot_file":
                config.snapshot_file = value
            case "box_count":
                config.box_count = _parse_int(key, value, config.box_count)
            case "sort_by":
                config.sort_by = value.lower()
            case "timezone":
                config.timezone = value
            case "sweep_interval_minutes":
                config.sweep_interval_minutes = _parse_int(key, value, config.sweep_interval_minutes)
            case _:
                logger.debug(f"Ignoring unknown config key {key}")

    return config
