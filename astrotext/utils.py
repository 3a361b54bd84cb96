"""
Configuration of astrotext.

The config is read once at import from ``config/config.toml`` next to this
file, or from the path in the ``ASTROTEXT_CONFIG`` environment variable.
"""

import os
import warnings
from copy import deepcopy

import toml

__all__ = ["CONFIG_PATH", "DEFAULT_CONFIG_PATH", "config", "load_config", "get_config"]

# determine CONFIG path
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "config.toml")
CONFIG_PATH = os.getenv("ASTROTEXT_CONFIG", default=DEFAULT_CONFIG_PATH)


def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load a toml config and fill in the keys it does not set.

    Parameters
    ----------
    path : str
        path to the toml file

    Returns
    -------
    dict
        the merged config
    """
    default = toml.load(DEFAULT_CONFIG_PATH)
    if os.path.abspath(path) == os.path.abspath(DEFAULT_CONFIG_PATH):
        return default
    if not os.path.exists(path):
        warnings.warn(
            f"Config {path} does not exist, using {DEFAULT_CONFIG_PATH}.",
            stacklevel=2,
        )
        return default
    user = toml.load(path)
    merged = deepcopy(default)
    for section, values in user.items():
        if isinstance(values, dict):
            merged.setdefault(section, {}).update(values)
        else:
            merged[section] = values
    return merged


# load config
config = load_config(CONFIG_PATH)


def get_config(section: str, key: str):
    """Get ``config[section][key]``."""
    try:
        return config[section][key]
    except KeyError:
        raise KeyError(f"'{section}.{key}' is not in config {CONFIG_PATH}")
