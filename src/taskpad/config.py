"""Configuration management for taskpad."""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

from .storage import DEFAULT_DATA_FILE


logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TASKPAD_CONFIG"
DATA_FILE_ENV_VAR = "TASKPAD_DATA_FILE"
DEFAULT_CONFIG_PATH = Path("~/.taskpad/config.yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ConfigModel:
    """Settings for the taskpad shells."""

    # Relative paths resolve against the working directory
    data_file: str = str(DEFAULT_DATA_FILE)

    log_level: str = "WARNING"

    # Display preferences
    no_color: bool = False
    show_banner: bool = True

    def __post_init__(self):
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            logger.warning("Unknown log level %r, using WARNING", self.log_level)
            self.log_level = "WARNING"

    @property
    def data_path(self) -> Path:
        return Path(os.path.expanduser(self.data_file))

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.safe_dump(asdict(self), default_flow_style=False, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in data.items() if k in known})


def get_config_path(config_path: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the config file location.

    Priority: explicit path > ``TASKPAD_CONFIG`` > ``~/.taskpad/config.yaml``.
    """
    if config_path is None:
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
    return Path(config_path).expanduser()


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults.

    A missing file is not created. ``TASKPAD_DATA_FILE`` overrides the
    configured data file.
    """
    path = get_config_path(config_path)
    config = ConfigModel()

    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                config = ConfigModel.from_yaml(f.read())
            logger.debug("Loaded configuration from %s", path)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.warning("Failed to load config from %s: %s; using defaults", path, e)
            config = ConfigModel()

    data_file = os.environ.get(DATA_FILE_ENV_VAR)
    if data_file:
        config.data_file = data_file
    return config


def save_config(config: ConfigModel, config_path: Optional[Union[str, Path]] = None) -> Path:
    """Write configuration to file and return the path written."""
    path = get_config_path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(config.to_yaml())
    return path
