"""Service configuration, read from YAML with environment overrides."""

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from eanlookup.services.ean_search import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("/etc/eanlookup/config.yaml")


class Settings(BaseModel):
    """Runtime settings for the lookup service."""

    token: str | None = None
    timeout: float = DEFAULT_TIMEOUT


def load_settings(path: Path | str | None = None) -> Settings:
    """Load settings from *path*, ``$EANLOOKUP_CONFIG`` or the default location.

    A missing file yields the defaults.  ``$EAN_SEARCH_TOKEN`` and
    ``$EANLOOKUP_TIMEOUT`` take precedence over the file.
    """
    if path is None:
        path = os.environ.get("EANLOOKUP_CONFIG", DEFAULT_CONFIG_PATH)
    config_path = Path(path)

    data: dict = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            raise ValueError(f"Cannot read config file {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")
    else:
        logger.debug("No config file at %s, using defaults", config_path)

    token = os.environ.get("EAN_SEARCH_TOKEN")
    if token:
        data["token"] = token
    timeout = os.environ.get("EANLOOKUP_TIMEOUT")
    if timeout:
        data["timeout"] = timeout

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
