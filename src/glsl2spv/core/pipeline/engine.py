from __future__ import annotations

"""
Build Driver.

Processes discovered shaders one at a time:
1. Derives the artifact path.
2. Skips artifacts newer than their source (unless forced).
3. Invokes the compiler and records the outcome.
A failing shader never stops the run. The collected BuildReport is rendered
into the end-of-run summary by render_summary().
"""

import logging
from typing import Callable, List, Sequence

from glsl2spv.core.services.compiler import compile_shader
from glsl2spv.core.services.staleness import needs_compilation, output_path_for
from glsl2spv.domain.build_models import (
    BuildReport,
    CompileContext,
    CompileFailure,
    CompilerReportedFailure,
    FailureKind,
    InvocationError,
)
from glsl2spv.domain.constants import RESULT_SEPARATOR

logger = logging.getLogger(__name__)


def run_build(
        shader_paths: Sequence[str],
        context: CompileContext,
        out: Callable[[str], None] = print,
) -> BuildReport:
    """
    Compile every stale shader in the candidate list.

    Args:
        shader_paths: Candidate shader sources, as returned by discovery.
        context: Frozen run configuration (force flag, compiler, suffix).
        out: Sink for per-shader confirmation lines.

    Returns:
        BuildReport: Counters and per-shader outcomes.
    """
    report = BuildReport(total=len(shader_paths), dry_run=context.dry_run)

    for shader_path in shader_paths:
        output_path = output_path_for(shader_path, context.output_suffix)

        if not needs_compilation(shader_path, output_path, context.ignore_cache):
            logger.debug(f"Up to date: {shader_path}")
            report.up_to_date.append(shader_path)
            continue

        if context.dry_run:
            out(f"Would compile: {shader_path}")
            report.compiled.append(shader_path)
            continue

        try:
            compile_shader(shader_path, output_path, context.compiler)
        except CompilerReportedFailure as e:
            logger.error(f"Failed to compile shader: {shader_path}\n{e.stderr.rstrip()}")
            report.failures.append(
                CompileFailure(shader_path, output_path, FailureKind.COMPILER, str(e))
            )
            continue
        except InvocationError as e:
            logger.error(f"Could not compile shader {shader_path}: {e}")
            report.failures.append(
                CompileFailure(shader_path, output_path, FailureKind.INVOCATION, str(e))
            )
            continue

        out(f"Compiled shader: {shader_path}")
        out(RESULT_SEPARATOR)
        report.compiled.append(shader_path)

    logger.debug(
        f"Build finished: {report.compiled_count} compiled, "
        f"{report.failed_count} failed, {len(report.up_to_date)} up to date."
    )
    return report


def render_summary(report: BuildReport) -> List[str]:
    """
    Produce the end-of-run summary lines.

    The success and failure lines may both appear. The up-to-date line is
    used only when nothing was compiled and nothing failed.
    """
    lines: List[str] = []
    verb = "Would compile" if report.dry_run else "Successfully compiled"

    if report.compiled_count > 0:
        lines.append(f"{verb} {report.compiled_count} shaders")

    if report.failed_count > 0:
        lines.append(f"Failed to compile {report.failed_count} shaders")
        if report.invocation_failures:
            lines.append(f"  ({report.invocation_failures} could not invoke the compiler)")

    if not lines:
        lines.append(
            f"All shaders are up to date. A total of {report.total} shaders were found."
        )

    return lines
