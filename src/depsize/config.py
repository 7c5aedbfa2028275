"""
Global Configuration and Defaults.

Safe defaults live here as module constants. A project may override a
few of them in ``.depsize/config.yaml``:

    data_dir: build/stats
    patterns: ["*stats*.json"]
    limit: 50
    sort:
      field: size
      direction: ASC

Environment variables (``DEPSIZE_DATA_DIR``, ``DEPSIZE_LIMIT``) win over
the file.
"""

import os
from pathlib import Path
from typing import List, Optional, Set

import yaml
from pydantic import BaseModel, Field, ValidationError

from .core.exceptions import ConfigError
from .core.types import SortProps

DEFAULT_CONFIG_PATH = Path(".depsize/config.yaml")

# Files matching these globs are offered as stats documents
STATS_FILE_PATTERNS: List[str] = ["*stats*.json"]

# Directories never searched for stats files
IGNORE_DIRECTORIES: Set[str] = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "__pycache__",
    "node_modules",
    ".depsize",
}

# Stats documents above this size are refused by the loader
MAX_STATS_FILE_BYTES = 512 * 1024 * 1024

# Rows shown by table commands unless --limit is given
DEFAULT_LIMIT = 25


class DepsizeConfig(BaseModel):
    """Effective configuration after file and environment overrides."""
    data_dir: str = "."
    patterns: List[str] = Field(default_factory=lambda: list(STATS_FILE_PATTERNS))
    limit: int = DEFAULT_LIMIT
    sort: SortProps = SortProps()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "DepsizeConfig":
        """
        Load configuration.

        Args:
            config_path: Explicit YAML file. Defaults to ``.depsize/config.yaml``,
                which may be absent.

        Raises:
            ConfigError: If the file cannot be read or does not validate.
        """
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        data = {}
        if path.exists():
            try:
                with open(path, "r") as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigError(f"Cannot read config {path}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"Config {path} must be a mapping")
        elif config_path:
            raise ConfigError(f"Config file not found: {path}")

        env_data_dir = os.getenv("DEPSIZE_DATA_DIR")
        if env_data_dir:
            data["data_dir"] = env_data_dir
        env_limit = os.getenv("DEPSIZE_LIMIT")
        if env_limit:
            data["limit"] = env_limit

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e


def is_ignored_directory(dir_name: str) -> bool:
    """Check if directory name is in the blocklist."""
    return dir_name in IGNORE_DIRECTORIES
