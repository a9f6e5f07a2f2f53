from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and loading of optional JSON
configuration files. Values from this layer are merged with CLI overrides
and validated before being frozen into a CompileContext.
"""

import json
import logging
import os
from typing import Any, Dict

from glsl2spv.domain.constants import (
    DEFAULT_COMPILER,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_VERSION_MARKER,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Discovery
        "base_path": os.getcwd(),
        "recursive_search": False,
        "exclusive_include": False,
        "exclude_paths": [],
        "include_paths": [],
        "version_marker": DEFAULT_VERSION_MARKER,

        # Build
        "ignore_cache": False,
        "compiler": DEFAULT_COMPILER,
        "output_suffix": DEFAULT_OUTPUT_SUFFIX,
        "dry_run": False,
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: str) -> Dict[str, Any]:
    """
    Load configuration values from a JSON file.

    Missing or malformed files are logged and yield an empty mapping so the
    defaults stay in effect.

    Args:
        path: Location of the JSON document.

    Returns:
        Dict[str, Any]: Raw values read from disk (not yet validated).
    """
    if not os.path.exists(path):
        logger.warning(f"Configuration file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load configuration from '{path}': {e}")
        return {}

    if not isinstance(data, dict):
        logger.error(f"Configuration file '{path}' must contain a JSON object.")
        return {}

    logger.debug(f"Loaded {len(data)} configuration keys from {path}")
    return data
