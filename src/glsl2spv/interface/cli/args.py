from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the compiler driver with its classic
short flags (-r, -f, -b, -e, -i, -ei, -help, -version).
Path groups such as '-e -r shaders/vendor build' are expanded into explicit
per-path options before argparse sees them, so a '-r' in front of a path
marks that path recursive instead of toggling global recursion.
"""

import argparse
import sys
from typing import Any, Dict, List, Optional, Sequence

from glsl2spv.domain.constants import APP_NAME, APP_VERSION

VERSION_TEXT = f"{APP_NAME}: Version {APP_VERSION}"

# Flags that open a group of search paths, mapped to their long option stem
_PATH_GROUP_FLAGS: Dict[str, str] = {"-e": "exclude", "-i": "include"}
_RECURSIVE_MARKER = "-r"


class CliUsageError(Exception):
    """Raised instead of exiting when the command line cannot be parsed."""


class ShaderArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors by raising CliUsageError."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise CliUsageError(message)


# -----------------------------------------------------------------------------
# CUSTOM ACTIONS
# -----------------------------------------------------------------------------

class _HelpAction(argparse.Action):
    """Print the help text and let execution continue."""

    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, nargs=0, default=False, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        parser.print_help(sys.stdout)
        setattr(namespace, self.dest, True)


class _VersionAction(argparse.Action):
    """Print the version banner and let execution continue."""

    def __init__(self, option_strings: Sequence[str], dest: str, **kwargs: Any) -> None:
        super().__init__(option_strings, dest, nargs=0, default=False, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        print(VERSION_TEXT)
        setattr(namespace, self.dest, True)


class _FirstWinsAction(argparse.Action):
    """Store the value of the first occurrence and ignore later ones."""

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        if getattr(namespace, self.dest, None) is None:
            setattr(namespace, self.dest, values)


# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> ShaderArgumentParser:
    """
    Construct the argument parser for the glsl2spv CLI.

    Returns:
        ShaderArgumentParser: Configured parser instance.
    """
    p = ShaderArgumentParser(
        prog="glsl2spv",
        description=(
            "Find GLSL shader sources (files containing a '#version' line) and "
            "compile the ones whose SPIR-V artifact is missing or outdated."
        ),
        epilog=(
            "Path groups: '-e -r a b' excludes 'a' recursively and 'b' directly. "
            "Put the global '-r' before any '-e' or '-i' group."
        ),
        add_help=False,
        allow_abbrev=False,
    )

    # --- Discovery ---
    p.add_argument(
        "-r",
        dest="recursive_search",
        action="store_true",
        help="Search subdirectories of the base directory.",
    )
    p.add_argument(
        "-b",
        dest="base_path",
        action=_FirstWinsAction,
        default=None,
        metavar="PATH",
        help="Base directory to search (default: current directory). First occurrence wins.",
    )
    p.add_argument(
        "-e", "--exclude",
        dest="exclude",
        action="extend",
        nargs="+",
        default=[],
        metavar="PATH",
        help="Exclude paths from discovery.",
    )
    p.add_argument(
        "--exclude-recursive",
        dest="exclude_recursive",
        action="append",
        default=[],
        metavar="PATH",
        help="Exclude a path, flagged recursive (same as '-e -r PATH').",
    )
    p.add_argument(
        "-i", "--include",
        dest="include",
        action="extend",
        nargs="+",
        default=[],
        metavar="PATH",
        help="Additional directories to search.",
    )
    p.add_argument(
        "--include-recursive",
        dest="include_recursive",
        action="append",
        default=[],
        metavar="PATH",
        help="Additional directory searched recursively (same as '-i -r PATH').",
    )
    p.add_argument(
        "-ei",
        dest="exclusive_include",
        action="store_true",
        help="Exclusive include: only search the include paths.",
    )

    # --- Build ---
    p.add_argument(
        "-f",
        dest="ignore_cache",
        action="store_true",
        help="Force compilation, ignoring artifact timestamps.",
    )
    p.add_argument(
        "--compiler",
        dest="compiler",
        default=None,
        help="Compiler executable (default: glslc).",
    )
    p.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="List the shaders that would be compiled without compiling them.",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        metavar="FILE",
        help="JSON file with configuration values. Command-line flags take precedence.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the resolved configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the build report as JSON.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        metavar="FILE",
        help="Also write logs to a rotating log file.",
    )

    # --- Informational (execution continues) ---
    p.add_argument(
        "-help", "-h", "--help",
        dest="help_shown",
        action=_HelpAction,
        help="Show this help text.",
    )
    p.add_argument(
        "-version", "-v", "--version",
        dest="version_shown",
        action=_VersionAction,
        help="Show the version.",
    )

    return p


def parse_args(argv: Sequence[str], parser: Optional[ShaderArgumentParser] = None) -> argparse.Namespace:
    """
    Parse a raw argument vector, expanding path groups first.

    Raises:
        CliUsageError: If a flag is missing its value or is unknown.
    """
    parser = parser or build_parser()
    return parser.parse_args(expand_path_groups(argv))

# -----------------------------------------------------------------------------
# PATH GROUP EXPANSION
# -----------------------------------------------------------------------------

def expand_path_groups(argv: Sequence[str]) -> List[str]:
    """
    Rewrite '-e'/'-i' path groups into explicit per-path long options.

    '-e -r a b' becomes '--exclude-recursive a --exclude b'. A group ends at
    the first token that looks like an option and is not a '-r' marker
    followed by a path. A group without any path is left untouched so the
    parser reports the missing value.
    """
    out: List[str] = []
    i = 0
    while i < len(argv):
        token = argv[i]
        stem = _PATH_GROUP_FLAGS.get(token)
        if stem is None:
            out.append(token)
            i += 1
            continue

        i += 1
        group: List[str] = []
        while i < len(argv):
            current = argv[i]
            if current == _RECURSIVE_MARKER and i + 1 < len(argv) and not _looks_like_option(argv[i + 1]):
                group += [f"--{stem}-recursive", argv[i + 1]]
                i += 2
            elif _looks_like_option(current):
                break
            else:
                group += [f"--{stem}", current]
                i += 1

        out.extend(group if group else [token])

    return out

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Boolean flags only appear when set, so values from a configuration file
    are not reset by absent flags.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["base_path"] = args.base_path
    overrides["compiler"] = args.compiler

    if args.recursive_search:
        overrides["recursive_search"] = True
    if args.exclusive_include:
        overrides["exclusive_include"] = True
    if args.ignore_cache:
        overrides["ignore_cache"] = True
    if args.dry_run:
        overrides["dry_run"] = True

    excludes = _search_paths(args.exclude, args.exclude_recursive)
    if excludes:
        overrides["exclude_paths"] = excludes
    includes = _search_paths(args.include, args.include_recursive)
    if includes:
        overrides["include_paths"] = includes

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _looks_like_option(token: str) -> bool:
    return token.startswith("-") and len(token) > 1


def _search_paths(plain: List[str], recursive: List[str]) -> List[Dict[str, Any]]:
    """Combine plain and recursive path lists into search path mappings."""
    entries = [{"path": p, "recursive": False} for p in plain]
    entries += [{"path": p, "recursive": True} for p in recursive]
    return entries
