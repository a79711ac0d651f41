from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration (CLI, config file, embedding
code) and the extraction engine. Coerces types, normalises the extension
and output format, and fills missing keys with domain defaults.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from propschema.domain.config import OUTPUT_FORMATS, get_default_config

logger = logging.getLogger(__name__)

_IDENTIFIER_RX = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    string_fields = [
        "source_dir", "tsconfig_path", "extension",
        "constant_name", "output_path", "output_format",
    ]
    bool_fields = ["debug", "generate_json"]

    # 3. Field Processing
    for field in string_fields:
        merged[field] = _as_str(
            merged.get(field), defaults.get(field, ""), field, warnings, strict
        )

    for field in bool_fields:
        merged[field] = _as_bool(
            merged.get(field), defaults.get(field, False), field, warnings, strict
        )

    # 4. Domain-Specific Normalization
    merged["extension"] = _normalize_extension(
        merged["extension"], defaults["extension"], warnings, strict
    )
    merged["output_format"] = _normalize_choice(
        merged["output_format"], OUTPUT_FORMATS, "output_format", warnings, strict
    )
    merged["constant_name"] = _normalize_identifier(
        merged["constant_name"], defaults["constant_name"], warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce numbers and human-friendly keywords into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extension(ext: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """Ensure the UI extension is prefixed with a dot."""
    e = ext.strip()
    if not e:
        return fallback
    if not e.startswith("."):
        if strict:
            raise ValueError(f"Invalid extension '{ext}': must start with '.'.")
        warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
        e = "." + e
    return e


def _normalize_choice(value: str, choices: List[str], field: str, warnings: List[str], strict: bool) -> str:
    v = value.strip().lower()
    if v in choices:
        return v
    msg = f"Invalid field '{field}': '{value}' is not one of {choices}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{choices[0]}'.")
    return choices[0]


def _normalize_identifier(value: str, fallback: str, warnings: List[str], strict: bool) -> str:
    """The injected constant must be a valid JavaScript identifier."""
    if _IDENTIFIER_RX.match(value):
        return value
    msg = f"Invalid constant name '{value}': not a JavaScript identifier."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using '{fallback}'.")
    return fallback
