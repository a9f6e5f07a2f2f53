from __future__ import annotations

"""
Configuration Validation Service.

Ensures that the merged configuration dictionary (defaults, config file and
CLI overrides) conforms to the expected schema, then freezes it into the
CompileContext shared by discovery and the build driver.
"""

import logging
from typing import Any, Dict, List, Tuple

from glsl2spv.domain.build_models import CompileContext, SearchPath
from glsl2spv.domain.config import get_default_config
from glsl2spv.infra.fs import normalize_path

logger = logging.getLogger(__name__)


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

    Fills missing keys with defaults and coerces loosely typed values. Search
    path entries are normalized to {"path": str, "recursive": bool} mappings.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown configuration key '{key}' ignored.")

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    string_fields = ["base_path", "compiler", "output_suffix", "version_marker"]
    bool_fields = ["recursive_search", "exclusive_include", "ignore_cache", "dry_run"]
    path_list_fields = ["exclude_paths", "include_paths"]

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    for field in path_list_fields:
        merged[field] = _as_search_paths(merged.get(field), field, warnings, strict)

    if not merged["output_suffix"].startswith("."):
        warnings.append(f"Output suffix '{merged['output_suffix']}' normalized with leading dot.")
        merged["output_suffix"] = "." + merged["output_suffix"]

    if merged["exclusive_include"] and not merged["include_paths"]:
        warnings.append("Exclusive include is set but no include paths were given; nothing will be scanned.")

    return merged, warnings


def build_context(cfg: Dict[str, Any]) -> CompileContext:
    """
    Freeze a validated configuration into a CompileContext.

    All paths are made absolute, so exclusion checks compare like with like.
    """
    base_path = normalize_path(cfg.get("base_path"), ".")

    def _freeze(entries: List[Dict[str, Any]]) -> Tuple[SearchPath, ...]:
        return tuple(
            SearchPath(normalize_path(e["path"], base_path), bool(e["recursive"]))
            for e in entries
        )

    return CompileContext(
        base_path=base_path,
        recursive_search=cfg["recursive_search"],
        exclusive_include=cfg["exclusive_include"],
        ignore_cache=cfg["ignore_cache"],
        exclude_paths=_freeze(cfg["exclude_paths"]),
        include_paths=_freeze(cfg["include_paths"]),
        compiler=cfg["compiler"],
        output_suffix=cfg["output_suffix"],
        version_marker=cfg["version_marker"],
        dry_run=cfg["dry_run"],
    )


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
    """Coerce various input types into native booleans."""
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


def _as_search_paths(value: Any, field: str, warnings: List[str], strict: bool) -> List[Dict[str, Any]]:
    """
    Normalize search path entries.

    Accepts plain strings (non-recursive), SearchPath instances and mappings
    with a 'path' key and an optional 'recursive' key.
    """
    if value is None:
        return []

    if not isinstance(value, (list, tuple)):
        msg = f"Invalid field '{field}': expected a list, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using empty list.")
        return []

    out: List[Dict[str, Any]] = []
    for i, item in enumerate(value):
        if isinstance(item, SearchPath):
            out.append({"path": item.path, "recursive": item.recursive})
        elif isinstance(item, str) and item.strip():
            out.append({"path": item.strip(), "recursive": False})
        elif isinstance(item, dict) and isinstance(item.get("path"), str) and item["path"].strip():
            recursive = _as_bool(item.get("recursive"), False, f"{field}[{i}].recursive", warnings, strict)
            out.append({"path": item["path"].strip(), "recursive": recursive})
        else:
            msg = f"Invalid item in '{field}[{i}]': expected a path string or {{'path', 'recursive'}} mapping."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Item discarded.")
    return out
