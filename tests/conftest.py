import logging
import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from docconv.config import ConverterCfg
from docconv.engine import convert_text

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def cfg() -> ConverterCfg:
    """Default conventions with a fixed "\\n" separator for emitted lines."""
    return ConverterCfg(newline="\n")


@pytest.fixture(autouse=True)
def _reset_docconv_logger():
    # cli.main() installs a stderr handler bound to the stream of the current test
    yield
    log = logging.getLogger("docconv")
    for h in list(log.handlers):
        log.removeHandler(h)
    log.setLevel(logging.NOTSET)
    log.propagate = True


def src(text: str) -> str:
    """Dedent a fixture and drop the leading newline of a triple-quoted string."""
    return textwrap.dedent(text).lstrip("\n")


def convert(text: str, cfg: ConverterCfg | None = None) -> str:
    out, _ = convert_text(text, cfg or ConverterCfg(newline="\n"))
    return out


def write(p: Path, text: str) -> Path:
    """Write a file, creating parent directories."""
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def run_cli(root: Path, *args: str) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(REPO_ROOT), env.get("PYTHONPATH", "")) if p)
    return subprocess.run(
        [sys.executable, "-m", "docconv.cli", *args],
        cwd=root, env=env, capture_output=True, text=True, encoding="utf-8"
    )


__all__ = ["src", "convert", "write", "run_cli"]
