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
"""Derive output file names and page titles from POD input names."""

import logging
import os
import re
from pathlib import Path

LOG = logging.getLogger(__name__)

# Output file extension for converted documents
OUTPUT_FILE_EXTENSION = ".md"

# Environment variable redirecting every output file into one directory
DESTDIR_ENV = "POD2MD_DESTDIR"

# Section suffix of a manual page name: ".5", ".3Sympa", ".1p", not ".10"
SECTION_RE = re.compile(r"\.(\d)([A-Za-z]\w*)?$")

# Extensions of POD carrying sources that never name a section
SOURCE_EXTENSIONS = (".pod", ".pm", ".pl")


def split_section(name: str) -> tuple[str, str | None]:
    """Split a base name into its page name and section string.

    Args:
        name: Base name of an input file, e.g. ``Sympa::List.3Sympa``

    Returns:
        Tuple of (page_name, section). The section is None when the name
        carries no section suffix.
    """
    if name.endswith(OUTPUT_FILE_EXTENSION) and len(name) > len(OUTPUT_FILE_EXTENSION):
        name = name[: -len(OUTPUT_FILE_EXTENSION)]

    if match := SECTION_RE.search(name):
        return name[: match.start()], match.group(1) + (match.group(2) or "")

    for extension in SOURCE_EXTENSIONS:
        if name.endswith(extension) and len(name) > len(extension):
            return name[: -len(extension)], None

    return name, None


def safe_file_name(name: str) -> str:
    """Replace characters some site renderers reject in file names."""
    return name.replace(":", "-")


def output_name(input_name: str | os.PathLike) -> str:
    """Build the Markdown file name for an input file.

    ``sympa.conf.5`` becomes ``sympa.conf.5.md`` and ``Sympa::List.3Sympa``
    becomes ``Sympa--List.3.md``.
    """
    page, section = split_section(Path(input_name).name)
    if section is None:
        return safe_file_name(page + OUTPUT_FILE_EXTENSION)

    return safe_file_name(f"{page}.{section[0]}{OUTPUT_FILE_EXTENSION}")


def page_file_name(page: str, section: str | None = None) -> str:
    """Build the file name a page is published under on the documentation site."""
    if section:
        return safe_file_name(f"{page}.{section[0]}{OUTPUT_FILE_EXTENSION}")

    return safe_file_name(page + OUTPUT_FILE_EXTENSION)


def page_title(input_name: str | os.PathLike) -> str:
    """Build a human readable title such as ``sympa.conf(5)``."""
    page, section = split_section(Path(input_name).name)
    if section is None:
        return page

    return f"{page}({section[0]})"


def get_destdir(environ=None) -> Path | None:
    """Return the output directory configured in the environment, if any."""
    environ = os.environ if environ is None else environ
    if value := environ.get(DESTDIR_ENV):
        return Path(value).expanduser()

    return None


def destination(path: str | os.PathLike, destdir: Path | None = None) -> Path:
    """Resolve the final location of an output file.

    Args:
        path: Output path requested on the command line
        destdir: Directory collecting all output files, if configured

    Returns:
        The output path with colons removed from its base name, relocated
        into ``destdir`` when one is given.
    """
    path = Path(path)
    name = safe_file_name(path.name)
    if destdir is not None:
        LOG.debug(f"Redirecting {path} into {destdir}")
        return destdir / name

    return path.with_name(name)
