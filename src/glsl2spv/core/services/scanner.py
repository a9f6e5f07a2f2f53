from __future__ import annotations

"""
Shader Discovery Service.

Walks the configured search roots and classifies every regular file by
content: a file is GLSL source when one of its lines, once trimmed, starts
with the version directive. Excluded paths are never reported and never
descended into.
"""

import logging
import os
from typing import Iterable, List, Set

from glsl2spv.domain.build_models import CompileContext, DiscoveryError, SearchPath
from glsl2spv.domain.constants import DEFAULT_VERSION_MARKER
from glsl2spv.infra.fs import is_within

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def discover_shaders(context: CompileContext) -> List[str]:
    """
    Collect the absolute paths of all shader sources selected by the context.

    The base directory is scanned with the global recursion flag unless
    exclusive include mode is active. Each include path is then scanned with
    its own recursion flag. A path reachable from several roots is reported
    once, at its first occurrence.

    Args:
        context: Frozen run configuration.

    Returns:
        List[str]: Absolute shader paths in discovery order.

    Raises:
        DiscoveryError: If any directory along the way cannot be listed.
    """
    excluded = [sp.path for sp in context.exclude_paths]
    roots: List[SearchPath] = []

    if not context.exclusive_include:
        roots.append(SearchPath(context.base_path, context.recursive_search))
    roots.extend(context.include_paths)

    found: List[str] = []
    seen: Set[str] = set()

    for root in roots:
        logger.debug(f"Scanning {root.path} (recursive={root.recursive})")
        for path in scan_directory(root.path, root.recursive, excluded, context.version_marker):
            if path not in seen:
                seen.add(path)
                found.append(path)

    logger.info(f"Discovered {len(found)} shader source(s) in {len(roots)} search root(s).")
    return found


def scan_directory(
        root: str,
        recursive: bool,
        excluded: Iterable[str],
        marker: str = DEFAULT_VERSION_MARKER,
) -> List[str]:
    """
    Scan a single root directory for shader sources.

    Uses an explicit stack instead of recursion. Subdirectories are only
    pushed when recursive is True; excluded entries are skipped before
    classification or descent, so nothing below an excluded directory is
    ever visited.

    Args:
        root: Absolute directory to scan.
        recursive: Whether to descend into subdirectories.
        excluded: Absolute paths that must not be reported or entered.
        marker: Directive identifying shader sources.

    Returns:
        List[str]: Absolute paths of shader files, in sorted traversal order.

    Raises:
        DiscoveryError: If a directory cannot be listed.
    """
    excluded = list(excluded)
    if _is_excluded(root, excluded):
        logger.debug(f"Search root {root} lies inside an excluded path. Skipped.")
        return []

    shaders: List[str] = []
    stack: List[str] = [root]

    while stack:
        current = stack.pop()
        try:
            entries = sorted(os.scandir(current), key=lambda e: e.name)
        except OSError as e:
            raise DiscoveryError(current, str(e)) from e

        subdirs: List[str] = []
        for entry in entries:
            entry_path = os.path.join(current, entry.name)
            if entry_path in excluded:
                logger.debug(f"Excluded: {entry_path}")
                continue

            if entry.is_dir(follow_symlinks=False):
                if recursive:
                    subdirs.append(entry_path)
            elif entry.is_file() and is_shader_file(entry_path, marker):
                shaders.append(entry_path)

        # Reversed so the stack pops subdirectories in alphabetical order
        stack.extend(reversed(subdirs))

    return shaders


def is_shader_file(path: str, marker: str = DEFAULT_VERSION_MARKER) -> bool:
    """
    Decide whether a file is shader source by inspecting its lines.

    Reading stops at the first matching line. Undecodable bytes are replaced
    so binary artifacts are simply classified as non-shaders. Only a line feed
    ends a line; a lone carriage return stays part of the line.

    Args:
        path: File to inspect.
        marker: Prefix that a trimmed line must start with.

    Returns:
        bool: True if a matching line exists, False otherwise or on read error.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            for line in f:
                if line.strip().startswith(marker):
                    return True
    except OSError as e:
        logger.warning(f"Error opening file {path}: {e}")
    return False


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_excluded(path: str, excluded: List[str]) -> bool:
    """Check whether path is an excluded path or sits underneath one."""
    return any(is_within(path, ex) for ex in excluded)
