"""Shared fixtures: working directories, fake TeX tools, and a clean logger/environment."""

import os
import shlex
import sys
from pathlib import Path

import pytest
from loguru import logger

from texmake.config import load_config

MINIMAL_TEX = r"""
\documentclass{article}
\begin{document}
Hello World
\end{document}
"""

# Stand-in for latex, pdflatex, dvips, ps2pdf and pdf2ps.
# Every call is appended to CALLS so tests can count invocations.
# A source containing \fail makes the typesetting step exit with status 1.
FAKE_TOOL = '''\
import sys
from pathlib import Path

CALLS = Path({calls!r})

mode, *args = sys.argv[1:]
with CALLS.open("a") as f:
    f.write(" ".join([mode] + args) + "\\n")

if mode in ("latex", "pdflatex"):
    source = Path(args[-1])
    base = source.stem
    Path(base + ".aux").write_text("\\\\relax\\n")
    if "\\\\fail" in source.read_text():
        Path(base + ".log").write_text("! Undefined control sequence.\\n")
        sys.exit(1)
    Path(base + ".log").write_text("LaTeX Warning: Reference `fig' on page 1 undefined.\\n")
    Path(base + (".dvi" if mode == "latex" else ".pdf")).write_text("output of " + source.name)
elif mode == "dvips":
    Path(args[args.index("-o") + 1]).write_text("%!PS from " + args[-1])
elif mode in ("ps2pdf", "pdf2ps"):
    Path(args[1]).write_text(mode + " from " + args[0])
'''


class FakeTools:
    """Fake TeX toolchain installed in a temporary directory."""

    def __init__(self, root: Path):
        self.calls_file = root / "calls.txt"
        self.script = root / "faketool.py"
        self.script.write_text(FAKE_TOOL.format(calls=str(self.calls_file)))

    def command(self, mode: str) -> str:
        return f"{shlex.quote(sys.executable)} {shlex.quote(str(self.script))} {mode}"

    @property
    def overrides(self) -> list:
        return [
            f"{name.upper()}={self.command(name)}"
            for name in ("latex", "pdflatex", "dvips", "ps2pdf", "pdf2ps")
        ]

    def calls(self) -> list:
        if not self.calls_file.exists():
            return []
        return self.calls_file.read_text().splitlines()

    def calls_of(self, mode: str) -> list:
        return [call for call in self.calls() if call.split()[0] == mode]


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Drop TEXMAKE_* variables and loguru handlers left over by other tests."""
    for key in list(os.environ):
        if key.startswith("TEXMAKE_"):
            monkeypatch.delenv(key)
    logger.remove()
    yield
    logger.remove()
    # load_dotenv() writes into os.environ directly
    for key in list(os.environ):
        if key.startswith("TEXMAKE_"):
            del os.environ[key]


@pytest.fixture
def workdir(tmp_path):
    """Empty directory for LaTeX sources."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture
def fake_tools(tmp_path):
    tools_dir = tmp_path / "tools"
    tools_dir.mkdir()
    return FakeTools(tools_dir)


@pytest.fixture
def write_tex(workdir):
    """Create <name>.tex in the working directory."""

    def _write(name: str, content: str = MINIMAL_TEX) -> Path:
        path = workdir / f"{name}.tex"
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def make_config(workdir, fake_tools):
    """Configuration pointing at the fake tools, with optional extra overrides."""

    def _make(*overrides: str):
        return load_config(workdir, overrides=fake_tools.overrides + list(overrides))

    return _make


@pytest.fixture
def shift_mtime():
    """Move a file's modification time by the given number of seconds."""

    def _shift(path: Path, seconds: float) -> None:
        stat = path.stat()
        os.utime(path, (stat.st_atime, stat.st_mtime + seconds))

    return _shift
