"""Integration tests for the texmake command line."""

import os
import shutil

import pytest
from typer.testing import CliRunner

from texmake.cli import app

runner = CliRunner()


@pytest.fixture
def invoke(workdir, fake_tools):
    """Run texmake in the working directory with the fake toolchain."""

    def _invoke(*args):
        argv = ["-C", str(workdir)]
        for override in fake_tools.overrides:
            argv += ["-D", override]
        return runner.invoke(app, argv + list(args))

    return _invoke


@pytest.mark.integration
def test_default_build(workdir, write_tex, invoke):
    write_tex("paper")

    result = invoke("--pdflatex")

    assert result.exit_code == 0, result.output
    assert (workdir / "paper.pdf").exists()
    assert not (workdir / "paper.ps").exists()


@pytest.mark.integration
def test_default_build_postscript(workdir, write_tex, invoke):
    write_tex("paper")

    result = invoke()

    assert result.exit_code == 0, result.output
    assert (workdir / "paper.ps").exists()


@pytest.mark.integration
def test_no_source_exit_code(workdir, invoke):
    result = invoke("pdf")

    assert result.exit_code == 2
    assert list(workdir.iterdir()) == []


@pytest.mark.integration
def test_ambiguous_source_exit_code(workdir, write_tex, invoke):
    write_tex("a")
    write_tex("b")

    result = invoke("ps")

    assert result.exit_code == 2
    assert not (workdir / "a.ps").exists()


@pytest.mark.integration
def test_secondary_request_picks_built_source(workdir, write_tex, invoke):
    write_tex("a")
    write_tex("b")
    (workdir / "a.pdf").write_text("pdf")

    result = invoke("--pdflatex", "ps")

    assert result.exit_code == 0, result.output
    assert (workdir / "a.ps").exists()
    assert not (workdir / "b.ps").exists()


@pytest.mark.integration
def test_src_option(workdir, write_tex, invoke):
    write_tex("a")
    write_tex("b")

    result = invoke("--src", "b.tex", "--pdflatex")

    assert result.exit_code == 0, result.output
    assert (workdir / "b.pdf").exists()
    assert not (workdir / "a.pdf").exists()


@pytest.mark.integration
def test_build_named_targets(workdir, write_tex, invoke):
    write_tex("a")
    write_tex("b")

    result = invoke("build", "a.tex", "b.pdf")

    assert result.exit_code == 0, result.output
    assert (workdir / "a.ps").exists()
    assert (workdir / "b.ps").exists()
    assert (workdir / "b.pdf").exists()
    assert not (workdir / "a.pdf").exists()


@pytest.mark.integration
def test_build_unknown_target(invoke):
    result = invoke("build", "paper.docx")

    assert result.exit_code == 2


@pytest.mark.integration
def test_tool_failure_exit_code(workdir, write_tex, invoke):
    write_tex("broken", "\\fail")

    result = invoke("--pdflatex", "pdf")

    assert result.exit_code == 1
    assert not (workdir / "broken.pdf").exists()


@pytest.mark.integration
def test_invalid_boolean_setting(workdir, write_tex, invoke):
    write_tex("paper")

    result = invoke("-D", "USE_PDFLATEX=yes")

    assert result.exit_code == 2
    assert not (workdir / "paper.ps").exists()


@pytest.mark.integration
def test_clean_commands(workdir, write_tex, invoke):
    write_tex("paper")
    (workdir / "orphan.pdf").write_text("pdf")
    assert invoke("--pdflatex").exit_code == 0

    result = invoke("--pdflatex", "clean")
    assert result.exit_code == 0, result.output
    assert not (workdir / "paper.aux").exists()
    assert (workdir / "paper.pdf").exists()

    result = invoke("--pdflatex", "clean-pdf")
    assert result.exit_code == 0, result.output
    assert not (workdir / "paper.pdf").exists()
    assert (workdir / "orphan.pdf").exists()

    result = invoke("wipe-all")
    assert result.exit_code == 0, result.output
    assert sorted(path.name for path in workdir.iterdir()) == ["paper.tex"]


@pytest.mark.integration
@pytest.mark.parametrize("command", ["cleanup", "clean-all"])
def test_cleanup_aliases(workdir, write_tex, invoke, command):
    write_tex("paper")
    for name in ("paper.ps", "paper.pdf", "paper.aux"):
        (workdir / name).write_text(name)

    result = invoke(command)

    assert result.exit_code == 0, result.output
    assert sorted(path.name for path in workdir.iterdir()) == ["paper.tex"]


@pytest.mark.integration
def test_rm_override_keeps_files(workdir, write_tex, invoke):
    write_tex("paper")
    (workdir / "paper.pdf").write_text("pdf")

    result = invoke("-D", "RM=:", "wipe-all")

    assert result.exit_code == 0, result.output
    assert (workdir / "paper.pdf").exists()


@pytest.mark.integration
def test_help_command(invoke):
    result = invoke("help")

    assert result.exit_code == 0
    assert "texmake clean" in result.output


@pytest.mark.integration
@pytest.mark.parametrize(
    "override, command",
    [('RM=rm "oops', "clean"), ("LATEX=latex 'oops", "ps")],
)
def test_unbalanced_quotes_in_command_setting(workdir, write_tex, invoke, override, command):
    write_tex("paper")
    (workdir / "paper.aux").write_text("aux")

    result = invoke("-D", override, command)

    assert result.exit_code == 2
    assert sorted(path.name for path in workdir.iterdir()) == ["paper.aux", "paper.tex"]


@pytest.mark.integration
@pytest.mark.parametrize("target", ["chapters/paper.tex", "paper.PDF"])
def test_build_rejects_target_it_cannot_make(workdir, write_tex, invoke, target):
    write_tex("paper")

    result = invoke("build", target)

    assert result.exit_code == 2
    assert sorted(path.name for path in workdir.iterdir()) == ["paper.tex"]


@pytest.mark.integration
@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_restore_prints_file_name_not_utf8(workdir, write_tex, invoke):
    write_tex("paper")
    raw_path = os.path.join(os.fsencode(workdir), b"caf\xe9.tex")
    with open(raw_path, "wb") as f:
        f.write(b"\\input{paper}\n")
    assert invoke("save").exit_code == 0

    os.unlink(raw_path)
    result = invoke("restore")

    assert result.exit_code == 0, result.output
    assert b"caf\xe9.tex" in result.stdout_bytes
    assert os.path.exists(raw_path)
