from __future__ import annotations

"""
External Compiler Invocation.

Runs the shader compiler as a blocking subprocess. The artifact is written
to a temporary file next to the destination and moved into place only when
the compiler exits cleanly, so an interrupted or failed run never leaves a
partial artifact that would later pass the staleness check.
"""

import logging
import os
import subprocess
import tempfile
from typing import List

from glsl2spv.domain.build_models import CompilerReportedFailure, InvocationError
from glsl2spv.domain.constants import DEFAULT_COMPILER
from glsl2spv.infra.fs import get_umask, remove_quietly

logger = logging.getLogger(__name__)


def build_command(compiler: str, source_path: str, output_path: str) -> List[str]:
    """Assemble the compiler argument vector."""
    return [compiler, source_path, "-o", output_path]


def compile_shader(
        source_path: str,
        output_path: str,
        compiler: str = DEFAULT_COMPILER,
) -> subprocess.CompletedProcess:
    """
    Compile one shader into its artifact.

    Args:
        source_path: Shader source file.
        output_path: Final artifact location.
        compiler: Compiler executable name or path.

    Returns:
        subprocess.CompletedProcess: The finished process (exit status 0).

    Raises:
        InvocationError: If the temporary artifact or the process cannot be
            created (missing binary, permission denied).
        CompilerReportedFailure: If the compiler exits with a nonzero status.
    """
    out_dir = os.path.dirname(os.path.abspath(output_path))
    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{os.path.basename(output_path)}.", suffix=".tmp", dir=out_dir
        )
    except OSError as e:
        raise InvocationError(source_path, f"Cannot create temporary artifact in {out_dir}: {e}") from e
    os.close(fd)

    cmd = build_command(compiler, source_path, tmp_path)
    logger.debug(f"Running: {' '.join(cmd)}")

    moved = False
    try:
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, errors="replace")
        except OSError as e:
            raise InvocationError(source_path, f"Could not invoke '{compiler}': {e}") from e

        if proc.returncode != 0:
            raise CompilerReportedFailure(source_path, proc.returncode, proc.stderr or "")

        try:
            # mkstemp creates owner-only files; match what open() would produce
            os.chmod(tmp_path, 0o666 & ~get_umask())
            os.replace(tmp_path, output_path)
        except OSError as e:
            raise InvocationError(source_path, f"Cannot move artifact to {output_path}: {e}") from e
        moved = True
    finally:
        # Also runs on KeyboardInterrupt, so no temporary artifact survives
        if not moved:
            remove_quietly(tmp_path)

    return proc
