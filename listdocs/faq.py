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
"""Render the localized FAQ page of the web interface."""

import argparse
import gettext
import logging
import sys
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

LOG = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
FAQ_TEMPLATE = "help_faq.html"

# gettext domain of the web interface catalogs
DOMAIN = "listdocs"

DEFAULT_CONTEXT = {
    "base_url": "",
    "listmaster": "listmaster@localhost",
}


def load_translations(
    locale_dir: Path | None, language: str | None
) -> gettext.NullTranslations:
    """Load the compiled catalog for ``language``.

    Missing catalogs fall back to the untranslated text.
    """
    if not locale_dir or not language:
        return gettext.NullTranslations()

    translations = gettext.translation(
        DOMAIN, localedir=str(locale_dir), languages=[language], fallback=True
    )
    if type(translations) is gettext.NullTranslations:
        LOG.warning(f"No {language} catalog in {locale_dir}, using untranslated text")
    return translations


def get_environment(translations=None) -> Environment:
    """Get a Jinja2 environment with localization lookups installed."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(["html"]),
        extensions=["jinja2.ext.i18n"],
    )
    # Collapse the whitespace of wrapped {% trans %} blocks into clean msgids
    env.policies["ext.i18n.trimmed"] = True
    env.install_gettext_translations(
        translations if translations is not None else gettext.NullTranslations(),
        newstyle=True,
    )
    return env


def render_help_faq(translations=None, **context) -> str:
    """Render the FAQ page.

    Args:
        translations: gettext translations used for every ``{% trans %}``
            block, untranslated text when None
        context: Template variables, ``base_url`` of the web interface and
            ``listmaster`` address

    Returns:
        The rendered HTML fragment
    """
    env = get_environment(translations)
    template = env.get_template(FAQ_TEMPLATE)
    return template.render(**{**DEFAULT_CONTEXT, **context})


def extract_messages() -> list[str]:
    """List the message ids translators have to provide for the FAQ page."""
    env = get_environment()
    source = (TEMPLATE_DIR / FAQ_TEMPLATE).read_text(encoding="utf-8")
    messages = []
    for _, _, message in env.extract_translations(source):
        if isinstance(message, str) and message not in messages:
            messages.append(message)
    return messages


def get_argument_parser() -> argparse.ArgumentParser:
    """Get ArgumentParser."""
    parser = argparse.ArgumentParser(
        prog="render-help-faq",
        description="Render the localized FAQ page of the web interface.",
    )
    parser.add_argument(
        "-l",
        "--language",
        required=False,
        type=str,
        help="Language of the page, e.g. 'fr' (untranslated when omitted)",
    )
    parser.add_argument(
        "-d",
        "--locale-dir",
        required=False,
        type=Path,
        help="Directory holding <lang>/LC_MESSAGES/listdocs.mo catalogs",
    )
    parser.add_argument(
        "-b",
        "--base-url",
        required=False,
        default=DEFAULT_CONTEXT["base_url"],
        type=str,
    )
    parser.add_argument(
        "-m",
        "--listmaster",
        required=False,
        default=DEFAULT_CONTEXT["listmaster"],
        type=str,
    )
    parser.add_argument(
        "-o",
        "--output",
        required=False,
        type=Path,
        help="Write the page to this file instead of stdout",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``render-help-faq`` command."""
    args = get_argument_parser().parse_args(argv)
    logging.basicConfig(level=logging.WARNING)

    translations = load_translations(args.locale_dir, args.language)
    page = render_help_faq(
        translations, base_url=args.base_url, listmaster=args.listmaster
    )

    if args.output is None:
        sys.stdout.write(page)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(page, encoding="utf-8")
    LOG.info(f"FAQ page written to {args.output}")
    return 0
