"""Configuration management for the checklist application."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import click
import yaml

from .errors import IoFailure


logger = logging.getLogger(__name__)

APP_NAME = "Checklist"
CHECKLIST_FILE_ENV = "CHECKLIST_FILE"
DEFAULT_FILE_NAME = "checklist"


def default_data_dir() -> str:
    return click.get_app_dir(APP_NAME)


@dataclass
class ConfigModel:
    """Global configuration model for the checklist."""

    # File paths
    data_dir: str = field(default_factory=default_data_dir)
    checklist_file: Optional[str] = None  # explicit file, overrides data_dir

    # Display preferences
    no_color: bool = False

    def __post_init__(self):
        """Expand user paths."""
        self.data_dir = os.path.expanduser(self.data_dir)
        if self.checklist_file:
            self.checklist_file = os.path.expanduser(self.checklist_file)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("configuration must be a mapping")

        known = {"data_dir", "checklist_file", "no_color"}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

        return cls(**{key: value for key, value in data.items() if key in known})

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"

    def get_checklist_path(self) -> Path:
        """Checklist file named in the config, or the default inside data_dir."""
        if self.checklist_file:
            return Path(self.checklist_file)
        return Path(self.data_dir) / DEFAULT_FILE_NAME


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults."""
    config = ConfigModel()

    if config_path is None:
        config_path = config.get_config_path()

    if not config_path.exists():
        logger.debug(f"No configuration at {config_path}, using defaults")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_content = f.read()
        config = ConfigModel.from_yaml(yaml_content)
        logger.debug(f"Loaded configuration from {config_path}")
    except (OSError, UnicodeDecodeError, yaml.YAMLError, ValueError, TypeError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        logger.warning("Using default configuration.")
    return config


def resolve_checklist_path(
    config: ConfigModel, override: Optional[Union[str, Path]] = None
) -> Path:
    """Pick the checklist file for this invocation.

    Precedence: explicit ``override``, the ``CHECKLIST_FILE`` environment
    variable, then the config (``checklist_file`` or ``data_dir/checklist``).
    """
    if override:
        path = Path(override)
    elif os.environ.get(CHECKLIST_FILE_ENV):
        path = Path(os.environ[CHECKLIST_FILE_ENV])
    else:
        path = config.get_checklist_path()
    return path.expanduser().absolute()


def ensure_checklist_file(path: Path) -> Path:
    """Create ``path`` (and its parent directories) as an empty file if missing.

    Raises:
        IoFailure: If the file cannot be created.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise IoFailure(path, "create", e) from e

    try:
        with open(path, "x", encoding="utf-8"):
            pass
    except FileExistsError:
        return path
    except OSError as e:
        raise IoFailure(path, "create", e) from e

    logger.info(f"Created empty checklist at {path}")
    return path
