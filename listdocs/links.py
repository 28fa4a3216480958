# Copyright 2025 The listdocs Authors.
# All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.
"""Rewrite POD cross references into documentation site URLs."""

import logging
import re
from pathlib import Path
from typing import Iterable

from listdocs import naming

LOG = logging.getLogger(__name__)

PERLDOC_URL_PREFIX = "https://metacpan.org/pod/"
MAN_URL_PREFIX = "http://man.he.net/man"

# crontab(5), sympa.conf(5), Sympa::List(3Sympa)
MAN_PAGE_RE = re.compile(r"^([\w.:+-]+)\((\d\w*)\)$")
URL_RE = re.compile(r"^[a-zA-Z][\w+.-]*:[^:\s]\S*$")


def anchor(heading: str) -> str:
    """Build a same-document link fragment for a section heading.

    Follows the fragment convention of the GitHub Markdown renderer:
    lowercase, drop punctuation, spaces become hyphens.

    Args:
        heading: Plain text of the section heading

    Returns:
        Fragment starting with ``#``
    """
    fragment = heading.strip().lstrip("#").lower()
    fragment = re.sub(r"[^\w\d \-]", "", fragment)
    return "#" + fragment.replace(" ", "-")


def strip_quotes(text: str) -> str:
    """Remove the double quotes POD allows around section names."""
    text = text.strip()
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1]
    return text


class LinkResolver:
    """Rewrite cross references to URLs on the documentation site.

    Links are handed to the POD converter as absolute manual page or
    perldoc URLs (``source_url``) and rewritten in the converted page
    (``rewrite``). Pages converted in the same run are linked by their
    output file name, manual page references are mapped to the site naming
    convention and anything else stays on perldoc.
    """

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        perldoc_url_prefix: str = PERLDOC_URL_PREFIX,
        man_url_prefix: str = MAN_URL_PREFIX,
    ):
        self.pages = dict(pages or {})
        self.perldoc_url_prefix = perldoc_url_prefix
        self.man_url_prefix = man_url_prefix

    @classmethod
    def from_names(cls, names: Iterable[str], **kwargs) -> "LinkResolver":
        """Build a resolver knowing every page converted in this run."""
        pages = {}
        for name in names:
            page, section = naming.split_section(Path(name).name)
            pages[page] = naming.page_file_name(page, section)
        return cls(pages, **kwargs)

    def source_url(self, name: str, section: str | None = None) -> str:
        """Return the absolute URL given to the converter for ``L<name/section>``."""
        fragment = anchor(section) if section else ""
        if match := MAN_PAGE_RE.match(name):
            return f"{self.man_url_prefix}{match.group(2)}/{match.group(1)}{fragment}"

        return self.perldoc_url_prefix + name + fragment

    def rewrite(self, url: str) -> str:
        """Map a link target of the converted page to its site URL.

        Args:
            url: ``href`` found in the converter output

        Returns:
            The site URL, or ``url`` unchanged for external links
        """
        if url.startswith("#"):
            return anchor(url)

        new_url = url
        if url.startswith(self.man_url_prefix):
            path, _, fragment = url[len(self.man_url_prefix) :].partition("#")
            section, _, page = path.partition("/")
            if section[:1].isdigit() and page:
                new_url = with_fragment(naming.page_file_name(page, section), fragment)
        elif url.startswith(self.perldoc_url_prefix):
            name, _, fragment = url[len(self.perldoc_url_prefix) :].partition("#")
            if name in self.pages:
                new_url = with_fragment(self.pages[name], fragment)

        if new_url != url:
            LOG.debug(f"Rewrote link {url} => {new_url}")
        return new_url


def with_fragment(url: str, fragment: str) -> str:
    return f"{url}#{fragment}" if fragment else url


def is_url(target: str) -> bool:
    """Tell whether an ``L<>`` target is a plain URL."""
    return bool(URL_RE.match(target)) and not MAN_PAGE_RE.match(target)


def parse_link(content: str) -> tuple[str | None, str | None, str | None, str | None]:
    """Split the raw text of an ``L<>`` code.

    Args:
        content: Text between the angle brackets, e.g. ``text|name/"sec"``

    Returns:
        Tuple of (text, name, section, url). Only the url is set for
        URL links; name and section may each be None otherwise.
    """
    text = None
    target = content
    # The text part may not contain "/" (perlpodspec), but the URL may
    # contain "|" so split on the first one only.
    if "|" in content:
        candidate, rest = content.split("|", 1)
        if "/" not in candidate:
            text, target = candidate, rest

    target = target.strip()
    if is_url(target):
        return text, None, None, target

    if target.startswith('"') and target.endswith('"') and len(target) >= 2:
        return text, None, strip_quotes(target), None

    if "/" in target:
        name, section = target.split("/", 1)
        return text, name.strip() or None, strip_quotes(section) or None, None

    if " " in target and not MAN_PAGE_RE.match(target):
        # Old style section link: L<Section Name>
        return text, None, target, None

    return text, target or None, None, None
