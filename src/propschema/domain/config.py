from __future__ import annotations

"""
Configuration Domain Management.

Provides the default engine configuration and loading of an optional JSON
project configuration file. Values from the file are merged over the
defaults; validation and coercion happen in the pipeline validator.
"""

import json
import logging
import os
from typing import Any, Dict, List, Optional

from propschema.domain.constants import (
    DEFAULT_CONSTANT_NAME,
    DEFAULT_TSCONFIG_PATH,
    DEFAULT_UI_EXTENSION,
)
from propschema.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
OUTPUT_FORMATS: List[str] = ["json", "module"]

CONFIG_KEYS: List[str] = [
    "source_dir",
    "tsconfig_path",
    "debug",
    "generate_json",
    "extension",
    "constant_name",
    "output_path",
    "output_format",
]


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default engine configuration.

    `generate_json` is part of the public option surface but has no
    behaviour attached to it; it is accepted and carried through unchanged.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Sources
        "source_dir": "",
        "tsconfig_path": DEFAULT_TSCONFIG_PATH,
        "extension": DEFAULT_UI_EXTENSION,

        # Diagnostics
        "debug": False,

        # Output
        "generate_json": False,
        "constant_name": DEFAULT_CONSTANT_NAME,
        "output_path": "",
        "output_format": "json",
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a JSON project configuration file.

    Unknown keys are dropped with a warning. Relative `source_dir` and
    `tsconfig_path` values are resolved against the file's directory.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        Dict[str, Any]: Known keys found in the file.

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{path}' must contain a JSON object.")

    base_dir = os.path.dirname(os.path.abspath(path))
    out: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in CONFIG_KEYS:
            logger.warning(f"Ignoring unknown config key '{key}' in {path}")
            continue
        if key in ("source_dir", "tsconfig_path") and isinstance(value, str) and value:
            value = os.path.normpath(os.path.join(base_dir, value))
        out[key] = value

    logger.debug(f"Loaded {len(out)} config keys from {path}")
    return out


# -----------------------------------------------------------------------------
# Facade API
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Retrieve the effective configuration: defaults, then the optional file.
    """
    config = get_default_config()
    if path:
        config.update(load_config_file(path))
    return config


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys with a non-None value are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out
