from __future__ import annotations

"""
Domain Constants.

Centralized identifiers shared by the discovery and build layers: the
application version banner, the default compiler executable, the artifact
suffix and the directive that marks a file as GLSL source.
"""

APP_NAME = "GLSL To SPIR-V Mass Compiler"
APP_VERSION = "1.1.0"

DEFAULT_COMPILER = "glslc"
DEFAULT_OUTPUT_SUFFIX = ".spv"
DEFAULT_VERSION_MARKER = "#version"

# Printed after each successful compilation
RESULT_SEPARATOR = "-" * 12
