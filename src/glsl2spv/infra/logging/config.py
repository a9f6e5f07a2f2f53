from __future__ import annotations

"""
Build Log Settings.

The console carries the build progress of a run (which shader is being
compiled, compiler diagnostics, discovery warnings) in a compiler-style
'glsl2spv: level: message' shape. The optional log file keeps a
timestamped history across runs and names the module that emitted each
record, which helps when a CI job has to be diagnosed after the fact.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Accepted level names; anything else falls back to INFO
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one glsl2spv run.

    Attributes:
        level: Minimum severity shown. '--debug' lowers it to DEBUG so the
            exact compiler command lines become visible.
        console: Write build progress to stderr.
        log_file: Build log path ('--log-file'), or None for console only.
        max_bytes: Build log size that triggers a rollover.
        backup_count: Rolled-over build logs kept next to the current one.
        console_fmt: Compiler-style terminal line.
        file_fmt: Build log line with timestamp and emitting module.
        datefmt: Timestamp format of the build log.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 512 * 1024
    backup_count: int = 5

    console_fmt: str = "glsl2spv: %(levelname)s: %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def for_cli(cls, debug: bool = False, log_file: Optional[str] = None) -> "LoggingConfig":
        """Settings derived from the '--debug' and '--log-file' flags."""
        return cls(level="DEBUG" if debug else "INFO", console=True, log_file=log_file or None)
