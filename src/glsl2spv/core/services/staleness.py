from __future__ import annotations

"""
Artifact Staleness Check.

Decides whether a shader must be recompiled by comparing the modification
times of the source and its compiled artifact, truncated to whole seconds.
"""

import logging

from glsl2spv.domain.constants import DEFAULT_OUTPUT_SUFFIX
from glsl2spv.infra.fs import file_exists, get_mtime_seconds

logger = logging.getLogger(__name__)


def output_path_for(source_path: str, suffix: str = DEFAULT_OUTPUT_SUFFIX) -> str:
    """
    Derive the artifact path for a shader source.

    The source extension is kept: 'shader.vert' becomes 'shader.vert.spv'.
    """
    return source_path + suffix


def needs_compilation(source_path: str, output_path: str, ignore_cache: bool = False) -> bool:
    """
    Check whether a shader has to be (re)compiled.

    Args:
        source_path: Shader source file.
        output_path: Expected compiled artifact.
        ignore_cache: Force compilation regardless of timestamps.

    Returns:
        bool: False only when the artifact exists and the source is strictly
        older than it. Equal timestamps and unreadable timestamps compile.
    """
    if ignore_cache:
        return True

    if not file_exists(output_path):
        return True

    compiled_date = get_mtime_seconds(output_path)
    source_date = get_mtime_seconds(source_path)

    if compiled_date is None or source_date is None:
        logger.debug(f"Could not read timestamps for {source_path}; recompiling.")
        return True

    return not source_date < compiled_date
