from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, optional config file, CLI overrides), the full extraction pass,
optional watch mode with incremental passes, and result rendering.
"""

import json
import os
import sys
import time
from typing import Any, Callable, Dict, List, Optional

from propschema.core.pipeline.components.writer import write_schema
from propschema.core.pipeline.engine import ExtractionEngine
from propschema.core.pipeline.validator import validate_config
from propschema.core.services.change_tracker import ChangeTracker
from propschema.domain.config import load_config, merge_config
from propschema.domain.errors import ConfigurationError, PropSchemaError
from propschema.infra.logging import LoggingConfig, configure_logging, get_logger
from propschema.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_PATH = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid path,
             130 interrupted).
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Configuration: defaults, config file, CLI overrides
    try:
        base_conf = load_config(args.config_file)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_PATH if args.config_file and not os.path.isfile(args.config_file) else EXIT_FAILURE

    raw_conf = merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight input verification
    source_dir = clean_conf.get("source_dir", "")
    if not source_dir or not os.path.isdir(source_dir):
        msg = f"Source directory does not exist: '{source_dir}'"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_BAD_PATH

    # 5. Extraction phase
    try:
        engine = ExtractionEngine(clean_conf)
        processed = engine.run_full_pass()
        output_file = _write_output(engine)

        if args.watch:
            logger.info(f"Watching {engine.source_dir} for changes (Ctrl+C to stop)")
            run_watch_loop(
                engine,
                ChangeTracker(engine.source_dir, engine.extension),
                interval=max(0.05, float(args.interval)),
                on_update=_write_output,
            )
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return EXIT_INTERRUPTED
    except (PropSchemaError, OSError) as e:
        logger.critical(f"Extraction failed: {e}", exc_info=args.debug)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

    # 6. Output rendering phase
    if args.json_output:
        print(engine.to_json(indent=2))
    else:
        _print_human_summary(engine, processed, output_file)

    return EXIT_OK

# -----------------------------------------------------------------------------
# WATCH MODE
# -----------------------------------------------------------------------------

def run_watch_loop(
        engine: ExtractionEngine,
        tracker: ChangeTracker,
        *,
        interval: float,
        on_update: Callable[[ExtractionEngine], Any],
        max_cycles: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Poll the source tree and run incremental passes on every change set.

    Args:
        engine: Engine whose full pass already ran.
        tracker: Change tracker over the same source tree.
        interval: Seconds between polls.
        on_update: Called after each pass that produced entries.
        max_cycles: Stop after this many polls (runs forever when None).
        sleep: Sleep function between polls.

    Returns:
        int: Total number of entries produced by incremental passes.
    """
    tracker.prime()
    total = 0
    cycles = 0

    while max_cycles is None or cycles < max_cycles:
        sleep(interval)
        cycles += 1

        changes = tracker.poll()
        if not changes:
            continue

        processed = engine.run_incremental_pass(changes.modified + changes.removed)
        total += processed
        if processed:
            on_update(engine)
            logger.info(f"Updated {processed} component(s)")

    return total

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------

def _write_output(engine: ExtractionEngine) -> Optional[str]:
    output_path = engine.config.get("output_path")
    if not output_path:
        return None
    return write_schema(output_path, engine, engine.config["output_format"])


def _print_human_summary(engine: ExtractionEngine, processed: int, output_file: Optional[str]) -> None:
    """
    Print the result of the full pass to standard output.

    Args:
        engine: Engine after the pass.
        processed: Number of components that produced an entry.
        output_file: Path of the written output, if any.
    """
    print(f"Extracted prop schemas for {processed} component(s) from {engine.source_dir}")
    summary: Dict[str, int] = {
        path: len(entry.props) for path, entry in sorted(engine.schema_map.items())
    }
    for path, count in summary.items():
        print(f"  - {path}: {count} prop(s)")
    if output_file:
        print(f"Schema written to: {output_file}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
