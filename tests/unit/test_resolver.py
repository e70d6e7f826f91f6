"""Unit tests for source resolution."""

import pytest

from texmake.config import OutputFormat, load_config
from texmake.contexts.resolution import explicit_sources, find_source, resolve_sources
from texmake.exceptions import AmbiguousSourceError, SourceNotFoundError


@pytest.mark.unit
def test_no_source(workdir):
    with pytest.raises(SourceNotFoundError) as exc_info:
        find_source(workdir, OutputFormat.PS)

    assert exc_info.value.exit_code == 2
    assert list(workdir.iterdir()) == []


@pytest.mark.unit
def test_single_source(workdir, write_tex):
    write_tex("paper")

    assert find_source(workdir, OutputFormat.PS) == "paper"
    assert find_source(workdir, OutputFormat.PS, secondary=True) == "paper"


@pytest.mark.unit
def test_directory_named_tex_is_ignored(workdir, write_tex):
    (workdir / "figures.tex").mkdir()
    write_tex("paper")

    assert find_source(workdir, OutputFormat.PDF) == "paper"


@pytest.mark.unit
def test_several_sources_primary_is_ambiguous(workdir, write_tex):
    write_tex("a")
    write_tex("b")
    (workdir / "a.pdf").write_text("pdf")

    with pytest.raises(AmbiguousSourceError) as exc_info:
        find_source(workdir, OutputFormat.PDF)

    assert exc_info.value.exit_code == 2
    assert [path.name for path in exc_info.value.candidates] == ["a.tex", "b.tex"]


@pytest.mark.unit
def test_secondary_disambiguates_by_primary_output(workdir, write_tex):
    """Test that a.tex is chosen when a.pdf is the only primary output with a source."""
    write_tex("a")
    write_tex("b")
    (workdir / "a.pdf").write_text("pdf")
    (workdir / "orphan.pdf").write_text("pdf")  # no orphan.tex, not counted

    assert find_source(workdir, OutputFormat.PDF, secondary=True) == "a"


@pytest.mark.unit
def test_secondary_without_primary_outputs_is_ambiguous(workdir, write_tex):
    write_tex("a")
    write_tex("b")

    with pytest.raises(AmbiguousSourceError):
        find_source(workdir, OutputFormat.PS, secondary=True)


@pytest.mark.unit
def test_secondary_with_two_primary_outputs_is_ambiguous(workdir, write_tex):
    write_tex("a")
    write_tex("b")
    (workdir / "a.ps").write_text("ps")
    (workdir / "b.ps").write_text("ps")

    with pytest.raises(AmbiguousSourceError):
        find_source(workdir, OutputFormat.PS, secondary=True)


@pytest.mark.unit
def test_explicit_sources():
    assert explicit_sources("") == []
    assert explicit_sources("paper.tex") == ["paper"]
    assert explicit_sources("  paper.tex slides.pdf notes  paper ") == ["paper", "slides", "notes"]
    assert explicit_sources(".tex") == [".tex"]


@pytest.mark.unit
def test_explicit_source_wins_over_scan(workdir, write_tex):
    write_tex("a")
    write_tex("b")
    config = load_config(workdir, overrides=["SRC=b.tex"])

    assert resolve_sources(config) == ["b"]


@pytest.mark.unit
def test_resolve_sources_scans_directory(workdir, write_tex):
    write_tex("thesis")
    config = load_config(workdir)

    assert resolve_sources(config) == ["thesis"]
