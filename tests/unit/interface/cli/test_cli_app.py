from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs main() in-process with the compiler call mocked, checking exit codes,
configuration precedence and rendered output.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from glsl2spv.domain.build_models import CompilerReportedFailure
from glsl2spv.interface.cli.app import main

COMPILE_TARGET = "glsl2spv.core.pipeline.engine.compile_shader"


def test_main_compiles_discovered_shaders(shader_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(COMPILE_TARGET) as mock_compile:
        code = main(["-r", "-b", str(shader_tree)])

    out = capsys.readouterr().out
    assert code == 0
    assert mock_compile.call_count == 4
    assert "Successfully compiled 4 shaders" in out


def test_main_exit_code_is_zero_on_compiler_failure(shader_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(COMPILE_TARGET, side_effect=CompilerReportedFailure("x", 1, "error")):
        code = main(["-b", str(shader_tree)])

    assert code == 0
    assert "Failed to compile 1 shaders" in capsys.readouterr().out


def test_main_exclusive_include(shader_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    vendor = str(shader_tree / "vendor")

    with patch(COMPILE_TARGET) as mock_compile:
        main(["-r", "-b", str(shader_tree), "-ei", "-i", vendor])

    compiled = [c.args[0] for c in mock_compile.call_args_list]
    assert compiled == [os.path.join(vendor, "imgui.vert")]


def test_main_usage_error_shows_help_and_exits_zero(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["-b"])

    captured = capsys.readouterr()
    assert code == 0
    assert "Failed to parse arguments" in captured.err
    assert "usage: glsl2spv" in captured.out


def test_main_discovery_failure_exits_one(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["-b", str(tmp_path / "missing")])

    assert code == 1
    assert "Error reading directory" in capsys.readouterr().err


def test_main_dump_config_applies_precedence(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "glsl2spv.json"
    config_file.write_text(
        json.dumps({"compiler": "glslangValidator", "recursive_search": True, "ignore_cache": False}),
        encoding="utf-8",
    )

    code = main(["--config", str(config_file), "--compiler", "glslc-2", "-f", "--dump-config"])

    dumped = json.loads(capsys.readouterr().out)
    assert code == 0
    assert dumped["compiler"] == "glslc-2"
    assert dumped["recursive_search"] is True
    assert dumped["ignore_cache"] is True


def test_main_json_output(shader_tree: Path, capsys: pytest.CaptureFixture[str]) -> None:
    with patch(COMPILE_TARGET):
        main(["-b", str(shader_tree), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["total"] == 1
    assert payload["compiled_count"] == 1
    assert payload["summary"] == ["Successfully compiled 1 shaders"]
