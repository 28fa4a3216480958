"""Tests for anchors and cross reference rewriting."""

import pytest

from listdocs import links
from listdocs.links import LinkResolver


class TestAnchor:
    @pytest.mark.parametrize(
        "heading, expected",
        [
            ("NAME", "#name"),
            ("See Also", "#see-also"),
            ("Options: --verbose & more!", "#options---verbose--more"),
            ("  spaced out  ", "#spaced-out"),
            ("list_config(5)", "#list_config5"),
        ],
    )
    def test_anchor(self, heading, expected):
        assert links.anchor(heading) == expected

    @pytest.mark.parametrize(
        "heading",
        ["NAME", "Configuration Parameters", "What's new in 6.2?", "a  b", "#x-y"],
    )
    def test_idempotent(self, heading):
        once = links.anchor(heading)
        assert links.anchor(once) == once


class TestParseLink:
    @pytest.mark.parametrize(
        "content, expected",
        [
            ("crontab(5)", (None, "crontab(5)", None, None)),
            ("Sympa::List", (None, "Sympa::List", None, None)),
            (
                'sympa.conf(5)/"Parameters"',
                (None, "sympa.conf(5)", "Parameters", None),
            ),
            ('/"SEE ALSO"', (None, None, "SEE ALSO", None)),
            ("/OPTIONS", (None, None, "OPTIONS", None)),
            ('"DESCRIPTION"', (None, None, "DESCRIPTION", None)),
            ("Some Section", (None, None, "Some Section", None)),
            (
                "the site|https://www.sympa.org/",
                ("the site", None, None, "https://www.sympa.org/"),
            ),
            (
                "https://example.org/a|b",
                (None, None, None, "https://example.org/a|b"),
            ),
            ("mailto:listmaster@example.org", (None, None, None, "mailto:listmaster@example.org")),
        ],
    )
    def test_parse(self, content, expected):
        assert links.parse_link(content) == expected


class TestLinkResolver:
    """Cross references are rewritten to site file names."""

    @pytest.fixture
    def resolver(self):
        return LinkResolver({"Sympa::List": "Sympa--List.3.md"})

    @pytest.mark.parametrize(
        "name, section, expected",
        [
            ("crontab(5)", None, "http://man.he.net/man5/crontab"),
            (
                "sympa.conf(5)",
                "Parameters",
                "http://man.he.net/man5/sympa.conf#parameters",
            ),
            ("Sympa::List", None, "https://metacpan.org/pod/Sympa::List"),
            ("DBI", "SEE ALSO", "https://metacpan.org/pod/DBI#see-also"),
        ],
    )
    def test_source_url(self, resolver, name, section, expected):
        assert resolver.source_url(name, section) == expected

    @pytest.mark.parametrize(
        "url, expected",
        [
            ("http://man.he.net/man5/crontab", "crontab.5.md"),
            ("http://man.he.net/man3Sympa/Sympa::List", "Sympa--List.3.md"),
            (
                "http://man.he.net/man5/sympa.conf#parameters",
                "sympa.conf.5.md#parameters",
            ),
            ("https://metacpan.org/pod/Sympa::List", "Sympa--List.3.md"),
            ("https://metacpan.org/pod/Sympa::List#new", "Sympa--List.3.md#new"),
            ("https://metacpan.org/pod/DBI", "https://metacpan.org/pod/DBI"),
            ("#SEE-ALSO", "#see-also"),
            ("https://www.sympa.org/", "https://www.sympa.org/"),
            ("mailto:listmaster@example.org", "mailto:listmaster@example.org"),
        ],
    )
    def test_rewrite(self, resolver, url, expected):
        assert resolver.rewrite(url) == expected

    def test_rewrite_source_url(self, resolver):
        url = resolver.source_url("sympa.conf(5)", "SEE ALSO")
        assert resolver.rewrite(url) == "sympa.conf.5.md#see-also"

    def test_custom_prefix(self):
        resolver = LinkResolver(
            {"perlpod": "perlpod.md"}, perldoc_url_prefix="https://perldoc.perl.org/"
        )
        assert resolver.source_url("perlpod") == "https://perldoc.perl.org/perlpod"
        assert resolver.rewrite("https://perldoc.perl.org/perlpod") == "perlpod.md"

    def test_from_names(self):
        resolver = LinkResolver.from_names(
            ["doc/sympa.conf.5", "Sympa::List.3Sympa", "guide.pod"]
        )
        assert resolver.pages == {
            "sympa.conf": "sympa.conf.5.md",
            "Sympa::List": "Sympa--List.3.md",
            "guide": "guide.md",
        }
