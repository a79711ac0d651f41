from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the raw argparse
namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

from propschema import __version__
from propschema.domain.config import OUTPUT_FORMATS

DEFAULT_POLL_INTERVAL = 1.0

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the propschema CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="propschema",
        description="Extract component prop schemas from TypeScript declarations.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # --- Sources ---
    p.add_argument(
        "-s", "--source-dir",
        dest="source_dir",
        default=None,
        help="Root directory of the component sources.",
    )
    p.add_argument(
        "--tsconfig",
        dest="tsconfig_path",
        default=None,
        help="Path of the TypeScript configuration (default: tsconfig.json).",
    )
    p.add_argument(
        "--ext",
        dest="extension",
        default=None,
        help="UI source extension (default: .tsx).",
    )
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help="JSON file with configuration values.",
    )

    # --- Output ---
    p.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Write the schema map to this file after every pass.",
    )
    p.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output file format: plain JSON or an ES module constant.",
    )
    p.add_argument(
        "--constant",
        dest="constant_name",
        default=None,
        help="Name of the injected constant (default: COMPONENT_PROPS).",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the schema map as JSON to stdout.",
    )

    # --- Watch Mode ---
    p.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and re-process components when they change.",
    )
    p.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help="Polling interval in seconds for --watch.",
    )

    # --- Diagnostics ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose logging.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write a DEBUG-level log to this rotating file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Unset options map to None so they never shadow file or default values.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "source_dir": args.source_dir,
        "tsconfig_path": args.tsconfig_path,
        "extension": args.extension,
        "output_path": args.output_path,
        "output_format": args.output_format,
        "constant_name": args.constant_name,
    }
    if args.debug:
        overrides["debug"] = True
    return overrides
