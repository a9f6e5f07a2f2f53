from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a subprocess against a real directory tree
and a stand-in compiler script that mimics glslc's argument contract
('<src> -o <out>'), exit status and stderr diagnostics.
"""

import os
import stat
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "glsl2spv" / "main.py"

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake compiler relies on a shebang script")

T0 = 1_700_000_000

FAKE_COMPILER = """#!{python}
import sys

src, out = sys.argv[1], sys.argv[3]
with open(src, encoding="utf-8") as f:
    text = f.read()
if "SYNTAX_ERROR" in text:
    sys.stderr.write(src + ":2: error: '' : syntax error\\n")
    sys.exit(1)
with open(out, "wb") as f:
    f.write(b"\\x03\\x02\\x23\\x07")
"""


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding interpreter and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def fake_compiler(tmp_path: Path) -> Path:
    script = tmp_path / "bin" / "fake-glslc"
    script.parent.mkdir()
    script.write_text(FAKE_COMPILER.format(python=sys.executable), encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    Structure:
    /shaders
      sky.vert
      broken.frag     (fails to compile)
      readme.md
      /post
        bloom.comp
    """
    root = tmp_path / "shaders"
    (root / "post").mkdir(parents=True)
    (root / "sky.vert").write_text("#version 450\nvoid main() {}\n", encoding="utf-8")
    (root / "broken.frag").write_text("#version 450\nSYNTAX_ERROR\n", encoding="utf-8")
    (root / "readme.md").write_text("Shaders for the demo.\n", encoding="utf-8")
    (root / "post" / "bloom.comp").write_text("  #version 460\nvoid main() {}\n", encoding="utf-8")

    for f in root.rglob("*"):
        if f.is_file():
            os.utime(f, (T0, T0))
    return root


def test_e2e_compiles_and_reports_failures(project: Path, fake_compiler: Path) -> None:
    result = run_cli(["-r", "-b", str(project), "--compiler", str(fake_compiler)])

    assert result.returncode == 0
    assert "Successfully compiled 2 shaders" in result.stdout
    assert "Failed to compile 1 shaders" in result.stdout
    assert "syntax error" in result.stderr

    assert (project / "sky.vert.spv").exists()
    assert (project / "post" / "bloom.comp.spv").exists()
    assert not (project / "broken.frag.spv").exists()
    assert not (project / "readme.md.spv").exists()


def test_e2e_second_run_is_up_to_date(project: Path, fake_compiler: Path) -> None:
    (project / "broken.frag").unlink()
    args = ["-r", "-b", str(project), "--compiler", str(fake_compiler)]

    first = run_cli(args)
    second = run_cli(args)

    assert "Successfully compiled 2 shaders" in first.stdout
    assert "All shaders are up to date. A total of 2 shaders were found." in second.stdout


def test_e2e_force_recompiles(project: Path, fake_compiler: Path) -> None:
    (project / "broken.frag").unlink()
    args = ["-r", "-b", str(project), "--compiler", str(fake_compiler)]
    run_cli(args)

    result = run_cli(args + ["-f"])

    assert "Successfully compiled 2 shaders" in result.stdout


def test_e2e_exclusion_blocks_paths(project: Path, fake_compiler: Path) -> None:
    result = run_cli([
        "-r", "-b", str(project), "--compiler", str(fake_compiler),
        "-e", str(project / "post"), str(project / "broken.frag"),
    ])

    assert "Successfully compiled 1 shaders" in result.stdout
    assert not (project / "post" / "bloom.comp.spv").exists()


def test_e2e_missing_compiler_is_reported_as_failure(project: Path) -> None:
    result = run_cli(["-b", str(project), "--compiler", str(project / "no-such-glslc")])

    assert result.returncode == 0
    assert "Failed to compile 2 shaders" in result.stdout
    assert "(2 could not invoke the compiler)" in result.stdout


def test_e2e_defaults_to_working_directory(project: Path, fake_compiler: Path) -> None:
    result = run_cli(["--compiler", str(fake_compiler), "--dry-run"], cwd=project)

    assert result.returncode == 0
    assert "Would compile 2 shaders" in result.stdout
    assert not (project / "sky.vert.spv").exists()


def test_e2e_parse_error_exits_zero_with_help() -> None:
    result = run_cli(["-i"])

    assert result.returncode == 0
    assert "Failed to parse arguments" in result.stderr
    assert "usage: glsl2spv" in result.stdout


def test_e2e_missing_base_directory_is_fatal(tmp_path: Path) -> None:
    result = run_cli(["-b", str(tmp_path / "absent")])

    assert result.returncode == 1
    assert "Error reading directory" in result.stderr
