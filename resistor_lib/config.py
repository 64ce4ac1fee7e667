"""
Config Module - JSON Configuration Management
=============================================

Handles loading and saving the reader configuration.
Structure:
  - "camera": capture backend and source
  - "locator", "sampler", "classifier": per-frame processing settings
  - "display", "zoom": GUI settings
"""

import json
import logging
import os

logger = logging.getLogger(__name__)

# Default config file path
DEFAULT_CONFIG_PATH = "reader_config.json"

DEFAULT_CONFIG = {
    "camera": {"backend": "opencv", "source": 0, "width": 1280, "height": 720},
    "locator": {
        "blur_kernel": 5,
        "canny_low": 30, "canny_high": 100,
        "min_area": 1000, "max_area": 50000,
    },
    "sampler": {"num_samples": 10, "patch_size": 10, "on_unclassified": "skip"},
    "classifier": {
        "black_value_max": 50,
        "white_value_min": 200, "white_saturation_max": 50,
        "detect_brown_grey": False,
    },
    "display": {"width": 800, "refresh_ms": 15},
    "zoom": {"min": 1.0, "max": 4.0, "default": 1.0},
}


def load_config(path=DEFAULT_CONFIG_PATH):
    """
    Load configuration from JSON file.

    Missing sections and keys are filled from DEFAULT_CONFIG. If the file
    does not exist it is created with the defaults.

    Parameters
    ----------
    path : str
        Path to config file.

    Returns
    -------
    dict
        Configuration dictionary.
    """
    if not os.path.exists(path):
        save_config(DEFAULT_CONFIG, path)
        return _deep_copy(DEFAULT_CONFIG)

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("Error loading config %s: %s", path, e)
        return _deep_copy(DEFAULT_CONFIG)

    if not isinstance(loaded, dict):
        logger.error("Config %s is not a JSON object, using defaults", path)
        return _deep_copy(DEFAULT_CONFIG)

    config = _deep_copy(loaded)
    for section in DEFAULT_CONFIG:
        config[section] = get_section(loaded, section)
    return config


def save_config(config, path=DEFAULT_CONFIG_PATH):
    """
    Save configuration to JSON file.

    Parameters
    ----------
    config : dict
        Configuration dictionary to save.
    path : str
        Path to config file.
    """
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.error("Error saving config %s: %s", path, e)


def get_section(config, section):
    """
    Get one configuration section merged over its defaults.

    Parameters
    ----------
    config : dict
        Full configuration dictionary.
    section : str
        Section name (e.g. 'locator', 'camera').

    Returns
    -------
    dict
        Copy of the section with every default key present.
    """
    result = _deep_copy(DEFAULT_CONFIG.get(section, {}))
    values = config.get(section, {})
    if isinstance(values, dict):
        result.update(_deep_copy(values))
    return result


def update_config(config, section, values):
    """
    Update configuration for a section in place.

    Parameters
    ----------
    config : dict
        Full configuration dictionary.
    section : str
        Section name.
    values : dict
        Values to update in the section.
    """
    if section not in config or not isinstance(config[section], dict):
        config[section] = {}
    config[section].update(values)


def _deep_copy(obj):
    """Create a deep copy of nested dicts."""
    if isinstance(obj, dict):
        return {k: _deep_copy(v) for k, v in obj.items()}
    return obj
