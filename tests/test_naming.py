"""Tests for output file names and page titles."""

from pathlib import Path

import pytest

from listdocs import naming


class TestSplitSection:
    """Section suffixes of manual page names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("sympa.conf.5", ("sympa.conf", "5")),
            ("Sympa::List.3Sympa", ("Sympa::List", "3Sympa")),
            ("sympa_msg.8", ("sympa_msg", "8")),
            ("sympa.conf.5.md", ("sympa.conf", "5")),
            ("guide.pod", ("guide", None)),
            ("Sympa.pm", ("Sympa", None)),
            ("README", ("README", None)),
            ("python3.10", ("python3.10", None)),
        ],
    )
    def test_split(self, name, expected):
        assert naming.split_section(name) == expected


class TestOutputName:
    """Markdown file names follow the documentation site convention."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("sympa.conf.5", "sympa.conf.5.md"),
            ("Sympa::List.3Sympa", "Sympa--List.3.md"),
            ("/usr/share/man/man8/sympa.8", "sympa.8.md"),
            ("guide.pod", "guide.md"),
            ("guide.md", "guide.md"),
            ("README", "README.md"),
            ("python3.10", "python3.10.md"),
        ],
    )
    def test_output_name(self, name, expected):
        assert naming.output_name(name) == expected

    @pytest.mark.parametrize(
        "name, section",
        [
            ("list_config.5", "5"),
            ("Sympa::Spindle::ProcessRequest.3Sympa", "3"),
            ("a:b:c.1p", "1"),
            ("sympa.8x", "8"),
            ("wwsympa.fcgi.8", "8"),
        ],
    )
    def test_section_suffix_and_no_colons(self, name, section):
        result = naming.output_name(name)
        assert result.endswith(f".{section}.md")
        assert ":" not in result

    def test_accepts_paths(self):
        assert naming.output_name(Path("doc") / "sympa.conf.5") == "sympa.conf.5.md"


class TestPageTitle:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("sympa.conf.5", "sympa.conf(5)"),
            ("Sympa::List.3Sympa", "Sympa::List(3)"),
            ("out/sympa.conf.5.md", "sympa.conf(5)"),
            ("guide.pod", "guide"),
            ("python3.10", "python3.10"),
        ],
    )
    def test_title(self, name, expected):
        assert naming.page_title(name) == expected


class TestDestination:
    """Output paths and the destination directory override."""

    def test_colons_replaced(self):
        assert naming.destination("out/Sympa::List.3.md") == Path(
            "out/Sympa--List.3.md"
        )

    def test_destdir_collects_outputs(self, tmp_path: Path):
        result = naming.destination("build/man/sympa.conf.5.md", tmp_path)
        assert result == tmp_path / "sympa.conf.5.md"

    def test_get_destdir(self):
        assert naming.get_destdir({naming.DESTDIR_ENV: "/srv/docs"}) == Path(
            "/srv/docs"
        )
        assert naming.get_destdir({naming.DESTDIR_ENV: ""}) is None
        assert naming.get_destdir({}) is None

    def test_get_destdir_reads_environment(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv(naming.DESTDIR_ENV, str(tmp_path))
        assert naming.get_destdir() == tmp_path
        monkeypatch.delenv(naming.DESTDIR_ENV)
        assert naming.get_destdir() is None
