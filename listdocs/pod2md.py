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
"""Convert POD formatted documentation to Markdown pages.

The command line mirrors the flags of pod2man so that build rules written
for manual pages can produce Markdown for the documentation site instead.
Only ``--help``, ``--verbose`` and ``--release`` change the output.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Generator, Tuple

from listdocs import links, naming
from listdocs.converter import POD2HTML, ConverterError, pod_to_markdown

LOG = logging.getLogger(__name__)

STDIO = "-"

# pod2man flags accepted for compatibility, their values are ignored
IGNORED_OPTIONS = (
    "center",
    "date",
    "fixed",
    "fixedbold",
    "fixeditalic",
    "fixedbolditalic",
    "lax",
    "name",
    "official",
    "quotes",
    "section",
    "stderr",
    "utf8",
)


class ConversionError(Exception):
    """Raised when an input or output file can not be opened."""

    def __init__(self, path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Can't open {path}: {error.strerror or error}")


def get_argument_parser() -> argparse.ArgumentParser:
    """Get ArgumentParser."""
    parser = argparse.ArgumentParser(
        prog="pod2md",
        description="Convert POD formatted documentation to Markdown.",
    )
    parser.add_argument("-c", "--center", metavar="STRING")
    parser.add_argument("-d", "--date", metavar="STRING")
    parser.add_argument("--fixed", metavar="FONT")
    parser.add_argument("--fixedbold", metavar="FONT")
    parser.add_argument("--fixeditalic", metavar="FONT")
    parser.add_argument("--fixedbolditalic", metavar="FONT")
    parser.add_argument("-l", "--lax", action="store_true")
    parser.add_argument("-n", "--name", metavar="NAME")
    parser.add_argument("-o", "--official", action="store_true")
    parser.add_argument("-q", "--quotes", metavar="QUOTES")
    parser.add_argument(
        "-r",
        "--release",
        metavar="VERSION",
        help="Release recorded in the front matter of every page",
    )
    parser.add_argument("-s", "--section", metavar="SECTION")
    parser.add_argument("--stderr", action="store_true")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report every converted file",
    )
    parser.add_argument("-u", "--utf8", action="store_true")
    parser.add_argument(
        "files",
        nargs="*",
        metavar="INPUT [OUTPUT]",
        help="Pairs of input and output files, '-' for stdin/stdout",
    )
    return parser


def quote(value: str) -> str:
    """Quote a front matter value as a single quoted YAML scalar."""
    return "'" + value.replace("'", "''") + "'"


def front_matter(title: str, release: str | None = None) -> str:
    """Build the metadata block preceding the Markdown body."""
    lines = ["---", f"title: {quote(title)}"]
    if release:
        lines.append(f"release: {quote(release)}")
    lines.append("---")
    return "\n".join(lines) + "\n"


def file_pairs(
    files: list[str],
) -> Generator[Tuple[str, str], None, None]:
    """Consume positional arguments two at a time.

    A missing input reads from stdin, a missing output writes to stdout.
    """
    if not files:
        yield STDIO, STDIO
        return

    for index in range(0, len(files), 2):
        pair = files[index : index + 2]
        yield pair[0], pair[1] if len(pair) > 1 else STDIO


class PodConverter:
    """Convert POD files to Markdown pages for the documentation site.

    Args:
        release: Release string recorded in the front matter
        resolver: Rewrites cross references between pages
        destdir: Directory receiving every output file, if any
    """

    def __init__(
        self,
        release: str | None = None,
        resolver: links.LinkResolver | None = None,
        destdir: Path | None = None,
    ):
        self.release = release
        self.resolver = resolver or links.LinkResolver()
        self.destdir = destdir

    def output_path(self, input_name: str, output_name: str) -> str | Path:
        """Work out where the Markdown for ``input_name`` is written.

        An explicit output such as ``sympa.conf.5`` is renamed following the
        site convention (``sympa.conf.5.md``). A directory receives the name
        derived from the input.
        """
        if output_name == STDIO:
            return STDIO

        output = Path(output_name)
        if output.is_dir():
            output = output / naming.output_name(input_name)
        else:
            output = output.with_name(naming.output_name(output.name))
        return naming.destination(output, self.destdir)

    @staticmethod
    def page_name(input_name: str, output_name: str) -> str | None:
        """Pick the file name the page title and section are taken from.

        The output name wins as it usually carries the manual section
        (``sympa.conf.5``), the input name is used otherwise. None when
        reading stdin and writing stdout.
        """
        if output_name != STDIO and not Path(output_name).is_dir():
            return output_name
        if input_name != STDIO:
            return input_name
        return None

    def title(self, input_name: str, output_name: str) -> str:
        name = self.page_name(input_name, output_name)
        return naming.page_title(name) if name else "STDIN"

    def convert_text(self, data: bytes, title: str, source: str = "<string>") -> str:
        """Convert raw POD input to a Markdown page."""
        LOG.debug(f"Running {POD2HTML} on {source}")
        body = pod_to_markdown(data, title, self.resolver)
        return front_matter(title, self.release) + "\n" + body

    def convert(self, input_name: str, output_name: str = STDIO) -> str | Path:
        """Convert one input file and write the resulting page.

        Args:
            input_name: Path of the POD file, ``-`` for stdin
            output_name: Path of the Markdown file, ``-`` for stdout

        Returns:
            The path written, ``-`` for stdout

        Raises:
            ConversionError: If the input or output file can not be opened
            ConverterError: If pod2html fails
        """
        if input_name == STDIO:
            data = sys.stdin.buffer.read()
        else:
            try:
                with open(input_name, "rb") as f:
                    data = f.read()
            except OSError as e:
                raise ConversionError(input_name, e) from e

        output = self.output_path(input_name, output_name)
        LOG.info(f"Converting {input_name} -> {output}")
        title = self.title(input_name, output_name)
        page = self.convert_text(data, title, source=input_name)

        if output == STDIO:
            sys.stdout.write(page)
            sys.stdout.flush()
            return output

        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(page)
        except OSError as e:
            raise ConversionError(output, e) from e

        return output


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``pod2md`` command."""
    parser = get_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    for option in IGNORED_OPTIONS:
        if getattr(args, option):
            LOG.debug(f"Ignoring --{option}")

    pairs = list(file_pairs(args.files))
    page_names = (PodConverter.page_name(*pair) for pair in pairs)
    resolver = links.LinkResolver.from_names(name for name in page_names if name)
    converter = PodConverter(
        release=args.release,
        resolver=resolver,
        destdir=naming.get_destdir(),
    )

    for input_name, output_name in pairs:
        try:
            converter.convert(input_name, output_name)
        except (ConversionError, ConverterError) as e:
            raise SystemExit(f"pod2md: {e}") from e

    return 0


if __name__ == "__main__":
    sys.exit(main())
