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
"""Run POD through pod2html and markdownify.

The conversion itself is done by external tools:

1. ``preprocess_pod_links`` turns every ``L<>`` pointing to another page
   into an explicit URL link so that pod2html keeps its target.
2. ``pod2html`` renders the POD to HTML.
3. The HTML body is cleaned with BeautifulSoup, its links rewritten to the
   documentation site naming and converted with ``markdownify``.
"""

import logging
import re
import subprocess
import tempfile

from bs4 import BeautifulSoup
from markdownify import markdownify as md

from listdocs import links

LOG = logging.getLogger(__name__)

POD2HTML = "pod2html"

# L<<< text >>>, L<< text >> and L<text> with one level of nested codes
LINK_RE = re.compile(
    r"L<<<\s+(?P<triple>.+?)\s+>>>"
    r"|L<<\s+(?P<double>.+?)\s+>>"
    r"|L<(?P<single>(?:[A-Z]<[^<>]*>|[^<>])*)>",
    re.DOTALL,
)

# Paragraph separators, blank lines may contain whitespace
PARAGRAPH_SPLIT_RE = re.compile(r"(\n[ \t]*\n)")

# Lone surrogates can come out of numeric character references like
# E<0xD800> and can not be written as UTF-8
SURROGATE_RE = re.compile("[\ud800-\udfff]")

EXTRA_NEWLINES_RE = re.compile(r"\n{3,}")


class ConverterError(Exception):
    """Raised when pod2html is missing or fails."""


def _fix_link(match: re.Match, resolver: links.LinkResolver) -> str:
    content = next(group for group in match.groups() if group is not None)
    text, name, section, url = links.parse_link(content)
    if url or not name:
        return match.group(0)

    if text is None:
        text = f'"{section}" in {name}' if section else name

    return f"L<< {text}|{resolver.source_url(name, section)} >>"


def preprocess_pod_links(pod: str, resolver: links.LinkResolver) -> str:
    """Replace links to other pages with explicit URL links.

    pod2html only links pages it finds in its own search path, anything else
    loses its target. Same document links (``L</section>``) and URLs are
    left alone, as are verbatim paragraphs.

    Args:
        pod: POD source
        resolver: Builds the URLs handed to pod2html

    Returns:
        POD source with rewritten ``L<>`` codes
    """
    parts = PARAGRAPH_SPLIT_RE.split(pod)
    for index in range(0, len(parts), 2):
        paragraph = parts[index]
        if not paragraph or paragraph[0] in " \t":
            continue
        parts[index] = LINK_RE.sub(lambda m: _fix_link(m, resolver), paragraph)
    return "".join(parts)


def pod_to_html(data: bytes, title: str) -> str:
    """Render POD with pod2html.

    Args:
        data: Raw POD input, its ``=encoding`` is honored by pod2html
        title: Title of the HTML document

    Returns:
        The HTML document

    Raises:
        ConverterError: If pod2html can not be run or fails
    """
    cmd = [POD2HTML, "--noindex", "--quiet", f"--title={title}"]
    # pod2html leaves its cache files in the working directory
    with tempfile.TemporaryDirectory() as cache_dir:
        try:
            result = subprocess.run(
                cmd, input=data, cwd=cache_dir, check=True, capture_output=True
            )
        except FileNotFoundError as e:
            raise ConverterError(f"{POD2HTML} not found, is Perl installed?") from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip()
            LOG.error(f"{POD2HTML} failed: {stderr}")
            raise ConverterError(
                f"{POD2HTML} exited with status {e.returncode}: {stderr}"
            ) from e

    if result.stderr:
        LOG.warning(result.stderr.decode("utf-8", errors="replace").strip())
    return result.stdout.decode("utf-8", errors="replace")


def html_to_markdown(html: str, resolver: links.LinkResolver) -> str:
    """Convert the body of a pod2html document to Markdown.

    Links are rewritten with ``resolver`` before conversion.
    """
    soup = BeautifulSoup(html, "html.parser")
    body = soup.body or soup

    for a in body.find_all("a", href=True):
        a["href"] = resolver.rewrite(a["href"])

    text = md(str(body), heading_style="ATX", bullets="-")

    text, count = SURROGATE_RE.subn("\ufffd", text)
    if count:
        LOG.warning(f"Replaced {count} invalid character(s) with U+FFFD")

    text = EXTRA_NEWLINES_RE.sub("\n\n", text).strip()
    return text + "\n" if text else ""


def pod_to_markdown(
    data: bytes, title: str, resolver: links.LinkResolver | None = None
) -> str:
    """Convert raw POD input to a Markdown body."""
    resolver = resolver or links.LinkResolver()
    # Undecodable bytes survive the round trip, pod2html decodes the input
    pod = data.decode("utf-8", errors="surrogateescape")
    pod = preprocess_pod_links(pod, resolver)
    html = pod_to_html(pod.encode("utf-8", errors="surrogateescape"), title)
    return html_to_markdown(html, resolver)
