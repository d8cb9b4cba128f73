"""YAML configuration loader with environment variable overrides.

Configuration is layered (later layers win):

    1. config/config.yaml  -- static defaults checked into the repo
    2. .env file           -- local overrides, not committed
    3. Environment vars    -- set at deploy time

``load_config()`` reads the YAML file, then deep-merges the env-backed
:class:`Settings` values on top, so a key set in both places takes the
environment's value while YAML-only keys (CORS origins, for instance) pass
through untouched.
"""

from pathlib import Path

import yaml

from src.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file is
              treated as empty.
        settings: Settings to merge on top; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "collections": {
            "base_url": settings.collections_base_url,
            "timeout": settings.collections_timeout,
        },
        "geocoder": {
            "url": settings.geocoder_url,
            "user_agent": settings.geocoder_user_agent(),
            "timeout": settings.geocoder_timeout,
            "pacing_seconds": settings.geocoder_pacing_seconds,
            "batch_timeout": settings.geocode_batch_timeout,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
