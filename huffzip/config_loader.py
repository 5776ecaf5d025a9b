# config_loader.py
import copy
import os

import yaml

CONFIG_ENV_VAR = "HUFFZIP_CONFIG"

DEFAULT_CONFIG = {
    "io": {"chunk_size": 64 * 1024},
    "logging": {"level": "WARNING"},
    "cli": {"suffix": ".huf"},
}


def load_config(config_path=None):
    """
    Loads the YAML configuration and merges it over DEFAULT_CONFIG.

    Parameters:
    config_path (str, optional): Path to a YAML file. Falls back to the
        HUFFZIP_CONFIG environment variable, then to the defaults alone.

    Returns:
    dict: The merged configuration.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = config_path or os.environ.get(CONFIG_ENV_VAR)
    if not config_path:
        return config

    with open(config_path, "r") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration in {config_path} must be a mapping")
    _merge(config, loaded)
    _validate(config, config_path)
    return config


def _validate(config, config_path):
    io_section = config.get("io")
    if not isinstance(io_section, dict):
        raise ValueError(f"'io' in {config_path} must be a mapping")
    chunk_size = io_section.get("chunk_size")
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int) or chunk_size <= 0:
        raise ValueError(f"io.chunk_size in {config_path} must be a positive integer, got {chunk_size!r}")


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
