from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: argument parsing, logging bootstrap,
configuration resolution (defaults, optional JSON file, CLI overrides),
shader discovery, the build run and rendering of the summary.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from glsl2spv.core.pipeline.engine import render_summary, run_build
from glsl2spv.core.pipeline.stages.validator import build_context, validate_config
from glsl2spv.core.services.scanner import discover_shaders
from glsl2spv.domain.build_models import BuildReport, DiscoveryError
from glsl2spv.domain.config import get_default_config, load_config
from glsl2spv.infra.logging import LoggingConfig, configure_logging, get_logger
from glsl2spv.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Compiler failures are reported in the summary and do not change the exit
    status. A usage error prints the help text and also exits with 0.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: 0 after a completed run, 1 on a fatal discovery error, 130 on
        interruption.
    """
    if argv is None:
        argv = sys.argv[1:]

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    try:
        args = cli_args.parse_args(argv, parser)
    except cli_args.CliUsageError as e:
        print(f"Failed to parse arguments: {e}", file=sys.stderr)
        parser.print_help(sys.stdout)
        return 0

    # 2. Logging bootstrap
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 3. Resolve configuration: defaults < config file < command line
    base_conf = get_default_config()
    if args.config_file:
        base_conf.update(load_config(args.config_file))

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    context = build_context(clean_conf)
    logger.debug(f"Resolved context: {context}")

    # 4. Discovery and build
    try:
        shaders = discover_shaders(context)
        report = run_build(
            shaders,
            context,
            out=_discard if args.json_output else print,
        )
    except DiscoveryError as e:
        logger.critical(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user.")
        print("Interrupted.", file=sys.stderr)
        return 130

    # 5. Output rendering phase
    if args.json_output:
        print(json.dumps(_report_payload(report), ensure_ascii=False, indent=2))
    else:
        for line in render_summary(report):
            print(line)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge non-None override values for known keys into base.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    keys_to_merge = [
        "base_path", "recursive_search", "exclusive_include", "ignore_cache",
        "exclude_paths", "include_paths", "compiler", "dry_run",
    ]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _report_payload(report: BuildReport) -> Dict[str, Any]:
    payload = asdict(report)
    payload["compiled_count"] = report.compiled_count
    payload["failed_count"] = report.failed_count
    payload["invocation_failures"] = report.invocation_failures
    payload["summary"] = render_summary(report)
    return payload


def _discard(_line: str) -> None:
    pass

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
