# config_loader.py
import copy
import os
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

CONFIG_ENV_VAR = "HUFFPACK_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")

DEFAULTS = {
    "text": {
        "encoding": "utf-8",
        "errors": "strict",
    },
    "logging": {
        "level": "WARNING",
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    },
}


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge(merged[key], value)
        elif key in merged:
            merged[key] = value
    return merged


def load_config(config_path=None):
    """
    Loads the YAML configuration and fills in defaults for missing keys.

    Parameters:
    config_path (str | Path, optional): Explicit config file. When omitted the
        HUFFPACK_CONFIG environment variable (a .env file is honoured) and then
        the packaged config.yaml are used.

    Returns:
    dict: The merged configuration.
    """
    if config_path is None:
        load_dotenv(find_dotenv(usecwd=True))
        config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH

    with open(config_path, "r") as f:
        config = yaml.safe_load(f)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")
    return _merge(DEFAULTS, config)
