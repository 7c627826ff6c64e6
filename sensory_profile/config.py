"""Global configuration for sensory-profile.

The config file lives at ``~/.config/sensory-profile/config.yaml``. The
home directory can be moved with ``SENSORY_PROFILE_HOME``; the registry
path and log level can be overridden with ``SENSORY_PROFILE_REGISTRY`` and
``SENSORY_PROFILE_LOG_LEVEL``.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from sensory_profile.registry.models import DEFAULT_CHILD_NAME
from sensory_profile.registry.questionnaires import DEFAULT_REGISTRY_PATH

HOME_ENV = "SENSORY_PROFILE_HOME"
REGISTRY_ENV = "SENSORY_PROFILE_REGISTRY"
LOG_LEVEL_ENV = "SENSORY_PROFILE_LOG_LEVEL"

CONFIG_FILENAME = "config.yaml"
DEFAULT_CHAT_DAILY_LIMIT = 20


class ConfigError(Exception):
    """Raised when the config file cannot be parsed."""

    pass


class GlobalConfig(BaseModel):
    """Settings read from config.yaml."""

    registry_path: str | None = None
    questionnaire_id: str = "sensory_profile"
    questionnaire_version: str | None = None
    default_child_name: str = DEFAULT_CHILD_NAME
    chat_daily_limit: int = Field(default=DEFAULT_CHAT_DAILY_LIMIT, ge=0)
    results_path: str | None = None
    log_level: str = "WARNING"


def get_home() -> Path:
    """Directory holding config.yaml and the default results file."""
    env_home = os.environ.get(HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / ".config" / "sensory-profile"


def get_config_path() -> Path:
    return get_home() / CONFIG_FILENAME


def load_global_config(path: Path | None = None) -> GlobalConfig:
    """Load config.yaml, apply environment overrides, and return the result.

    A missing file gives the defaults.

    Raises:
        ConfigError: If the file is not a YAML mapping.
    """
    path = path or get_config_path()
    data: dict = {}
    if path.exists():
        with open(path) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"Config file must be a mapping: {path}")
        data = loaded or {}

    if os.environ.get(REGISTRY_ENV):
        data["registry_path"] = os.environ[REGISTRY_ENV]
    if os.environ.get(LOG_LEVEL_ENV):
        data["log_level"] = os.environ[LOG_LEVEL_ENV]

    return GlobalConfig(**data)


def save_global_config(config: GlobalConfig, path: Path | None = None) -> Path:
    """Write the config to config.yaml and return the file path."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.model_dump(), f, sort_keys=False)
    return path


def get_registry_path(config: GlobalConfig | None = None) -> Path:
    """Registry root from config, falling back to the bundled registry."""
    config = config or load_global_config()
    if config.registry_path:
        return Path(config.registry_path).expanduser()
    return DEFAULT_REGISTRY_PATH


def get_results_path(config: GlobalConfig | None = None) -> Path:
    config = config or load_global_config()
    if config.results_path:
        return Path(config.results_path).expanduser()
    return get_home() / "results.jsonl"
