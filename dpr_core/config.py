"""
Locations of the YAML configuration and static data files.

  - DPR_CONFIG_DIR (default: <repo>/config)
  - DPR_DATA_DIR   (default: <repo>/data)
"""
import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent


def get_config_dir() -> Path:
    env_path = os.environ.get("DPR_CONFIG_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return ROOT / "config"


def get_data_dir() -> Path:
    env_path = os.environ.get("DPR_DATA_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return ROOT / "data"


def load_yaml(name: str, required: bool = False) -> dict:
    """Load config/<name>; an absent optional file reads as {}."""
    path = get_config_dir() / name
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Config not found: {path}")
        logger.warning("Config %s not found, using built-in defaults", path)
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
