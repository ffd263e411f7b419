"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Load a YAML config file.

    Relative names resolve against the config/ directory; absolute paths are
    used as given. An empty file loads as an empty dict.
    """
    config_path = CONFIG_DIR / filename
    with open(config_path) as f:
        return yaml.safe_load(f) or {}
