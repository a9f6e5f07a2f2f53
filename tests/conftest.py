from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for shader trees and run contexts.
3. Logging teardown so queue listeners never leak between tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from glsl2spv.domain.build_models import CompileContext  # noqa: E402
from glsl2spv.infra.logging import shutdown_logging  # noqa: E402

SHADER_SOURCE = "#version 450\n\nvoid main() {\n}\n"
PLAIN_SOURCE = "// helper include, no directive\nfloat luminance(vec3 c);\n"


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_logging() -> Any:
    """Detach application log handlers after each test."""
    yield
    shutdown_logging()


@pytest.fixture
def shader_tree(tmp_path: Path) -> Path:
    """
    Create a small project with shaders at several depths.

    Structure:
    /project
      basic.vert          (shader)
      notes.txt           (plain)
      /lighting
        pbr.frag          (shader)
        common.glsl       (plain include)
        /shadows
          pcf.frag        (shader)
      /vendor
        imgui.vert        (shader)
    """
    root = tmp_path / "project"
    (root / "lighting" / "shadows").mkdir(parents=True)
    (root / "vendor").mkdir()

    (root / "basic.vert").write_text(SHADER_SOURCE, encoding="utf-8")
    (root / "notes.txt").write_text("todo: bloom pass\n", encoding="utf-8")
    (root / "lighting" / "pbr.frag").write_text(SHADER_SOURCE, encoding="utf-8")
    (root / "lighting" / "common.glsl").write_text(PLAIN_SOURCE, encoding="utf-8")
    (root / "lighting" / "shadows" / "pcf.frag").write_text(SHADER_SOURCE, encoding="utf-8")
    (root / "vendor" / "imgui.vert").write_text(SHADER_SOURCE, encoding="utf-8")

    return root


@pytest.fixture
def make_context() -> Callable[..., CompileContext]:
    """Build a CompileContext with test-friendly overrides."""
    def _factory(**overrides: Any) -> CompileContext:
        return CompileContext(**overrides)
    return _factory
