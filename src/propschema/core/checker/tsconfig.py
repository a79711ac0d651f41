from __future__ import annotations

"""
TypeScript Compiler Configuration Loader.

Reads `tsconfig.json` the way tsc does: comments and trailing commas are
tolerated and relative `extends` chains are followed. Only the options that
influence module resolution are retained.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from propschema.domain.errors import TsConfigError

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RX = re.compile(r",(\s*[}\]])")


@dataclass(frozen=True)
class CompilerOptions:
    """
    Resolution-relevant compiler options.

    Attributes:
        config_path: Absolute path of the loaded tsconfig file.
        base_url: Absolute `baseUrl` directory, if configured.
        paths: `paths` mapping; targets are absolute path templates.
    """
    config_path: str
    base_url: Optional[str] = None
    paths: Dict[str, List[str]] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def load_compiler_options(path: str) -> CompilerOptions:
    """
    Load and flatten a tsconfig file.

    Args:
        path: Path of the tsconfig file.

    Returns:
        CompilerOptions: Resolution options with absolute paths.

    Raises:
        TsConfigError: If the file, or any file it extends, is missing or
            is not valid JSON.
    """
    abs_path = os.path.abspath(path)
    options = _load_chain(abs_path, set())
    logger.debug(
        f"Loaded tsconfig {abs_path} (baseUrl={options.get('baseUrl')}, "
        f"{len(options.get('paths') or {})} path aliases)"
    )
    return _to_compiler_options(abs_path, options)


def strip_json_comments(text: str) -> str:
    """
    Remove // and /* */ comments and trailing commas outside of strings.

    Args:
        text: Raw JSONC text.

    Returns:
        str: Text accepted by json.loads.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    return _TRAILING_COMMA_RX.sub(r"\1", "".join(out))


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _read_config(path: str) -> Dict[str, Any]:
    if not os.path.isfile(path):
        raise TsConfigError(path, "file not found")
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            raw = f.read()
    except OSError as e:
        raise TsConfigError(path, str(e)) from e

    clean = strip_json_comments(raw).strip()
    if not clean:
        return {}
    try:
        data = json.loads(clean)
    except json.JSONDecodeError as e:
        raise TsConfigError(path, f"invalid JSON ({e})") from e
    if not isinstance(data, dict):
        raise TsConfigError(path, "top-level value must be an object")
    return data


def _load_chain(path: str, seen: Set[str]) -> Dict[str, Any]:
    """Return compilerOptions merged over the `extends` chain, paths made absolute."""
    if path in seen:
        raise TsConfigError(path, "circular 'extends'")
    seen.add(path)

    data = _read_config(path)
    base_dir = os.path.dirname(path)
    merged: Dict[str, Any] = {}

    parent = data.get("extends")
    if isinstance(parent, str) and parent.startswith("."):
        parent_path = os.path.normpath(os.path.join(base_dir, parent))
        if not parent_path.endswith(".json") and not os.path.isfile(parent_path):
            parent_path += ".json"
        merged.update(_load_chain(parent_path, seen))
    elif parent:
        logger.debug(f"Ignoring non-relative tsconfig extends '{parent}' in {path}")

    own = data.get("compilerOptions") or {}
    if not isinstance(own, dict):
        raise TsConfigError(path, "'compilerOptions' must be an object")

    # Relative options are relative to the file that declares them
    if isinstance(own.get("baseUrl"), str):
        merged["baseUrl"] = os.path.normpath(os.path.join(base_dir, own["baseUrl"]))
    if isinstance(own.get("paths"), dict):
        merged["paths"] = own["paths"]
        merged["pathsBase"] = merged.get("baseUrl") or base_dir

    return merged


def _to_compiler_options(path: str, options: Dict[str, Any]) -> CompilerOptions:
    paths: Dict[str, List[str]] = {}
    paths_base = options.get("pathsBase") or os.path.dirname(path)
    for pattern, targets in (options.get("paths") or {}).items():
        if not isinstance(targets, list):
            continue
        paths[pattern] = [
            os.path.normpath(os.path.join(paths_base, t))
            for t in targets
            if isinstance(t, str)
        ]
    return CompilerOptions(
        config_path=path,
        base_url=options.get("baseUrl"),
        paths=paths,
    )
