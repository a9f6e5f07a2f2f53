from __future__ import annotations

"""
Build Domain Data Models.

Defines the immutable search configuration consumed by discovery and the
build driver, the error hierarchy raised by both, and the report object that
the interface layer renders at the end of a run.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from glsl2spv.domain.constants import (
    DEFAULT_COMPILER,
    DEFAULT_OUTPUT_SUFFIX,
    DEFAULT_VERSION_MARKER,
)

# -----------------------------------------------------------------------------
# CONFIGURATION MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchPath:
    """
    A directory to include in or exclude from discovery.

    Attributes:
        path: Absolute, normalized directory path.
        recursive: Per-path recursion flag, independent of the global one.
    """
    path: str
    recursive: bool = False


@dataclass(frozen=True)
class CompileContext:
    """
    Immutable run configuration shared by discovery and the build driver.

    Attributes:
        base_path: Root directory scanned unless exclusive_include is set.
        recursive_search: Descend into subdirectories of base_path.
        exclusive_include: Skip base_path and only scan include_paths.
        ignore_cache: Recompile regardless of artifact timestamps.
        exclude_paths: Paths never reported nor descended into.
        include_paths: Extra roots scanned with their own recursion flag.
        compiler: Executable invoked for each stale shader.
        output_suffix: Appended to the source path to name the artifact.
        version_marker: Line prefix identifying a shader source.
        dry_run: Report stale shaders without invoking the compiler.
    """
    base_path: str = field(default_factory=os.getcwd)
    recursive_search: bool = False
    exclusive_include: bool = False
    ignore_cache: bool = False
    exclude_paths: Tuple[SearchPath, ...] = ()
    include_paths: Tuple[SearchPath, ...] = ()
    compiler: str = DEFAULT_COMPILER
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    version_marker: str = DEFAULT_VERSION_MARKER
    dry_run: bool = False

# -----------------------------------------------------------------------------
# ERROR HIERARCHY
# -----------------------------------------------------------------------------

class Glsl2SpvError(Exception):
    """Base class for every error raised by the application."""


class DiscoveryError(Glsl2SpvError):
    """A directory could not be listed during discovery."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error reading directory {path}: {reason}")
        self.path = path
        self.reason = reason


class CompileError(Glsl2SpvError):
    """Base class for per-shader compilation failures."""

    def __init__(self, source_path: str, message: str) -> None:
        super().__init__(message)
        self.source_path = source_path


class InvocationError(CompileError):
    """The compiler process could not be launched at all."""


class CompilerReportedFailure(CompileError):
    """The compiler ran and exited with a nonzero status."""

    def __init__(self, source_path: str, returncode: int, stderr: str) -> None:
        super().__init__(source_path, stderr.strip() or f"exit status {returncode}")
        self.returncode = returncode
        self.stderr = stderr

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

class FailureKind(str, Enum):
    INVOCATION = "invocation"
    COMPILER = "compiler"


@dataclass(frozen=True)
class CompileFailure:
    """
    Failure record for a single shader.

    Attributes:
        source_path: Shader that failed.
        output_path: Artifact that was not produced.
        kind: Whether the compiler could not start or reported an error.
        message: Diagnostic text (captured stderr or OS error).
    """
    source_path: str
    output_path: str
    kind: FailureKind
    message: str


@dataclass
class BuildReport:
    """
    Aggregated outcome of a build run.

    Attributes:
        total: Number of candidate shaders handed to the driver.
        compiled: Shaders compiled successfully (or that would be, in dry-run).
        up_to_date: Shaders skipped by the staleness check.
        failures: Shaders that failed, with the failure kind.
        dry_run: Whether the compiler was actually invoked.
    """
    total: int = 0
    compiled: List[str] = field(default_factory=list)
    up_to_date: List[str] = field(default_factory=list)
    failures: List[CompileFailure] = field(default_factory=list)
    dry_run: bool = False

    @property
    def compiled_count(self) -> int:
        return len(self.compiled)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def invocation_failures(self) -> int:
        return sum(1 for f in self.failures if f.kind is FailureKind.INVOCATION)
