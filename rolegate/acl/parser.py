"""Reading acl.ini into raw ``{section: {actions: roles}}`` data."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from rolegate.errors import ConfigError

logger = logging.getLogger(__name__)

RawSections = dict[str, dict[str, str]]

# Sections named DEFAULT are ordinary resources here, not configparser defaults.
_NO_DEFAULT_SECTION = "\x00rolegate-default"


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        delimiters=("=",),
        comment_prefixes=(";", "#"),
        inline_comment_prefixes=(";",),
        interpolation=None,
        strict=False,
        allow_no_value=True,
        default_section=_NO_DEFAULT_SECTION,
    )
    parser.optionxform = str  # action names are case sensitive
    return parser


def _unquote(value: str | None) -> str:
    if value is None:
        return ""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def parse(text: str, source: str | None = None) -> RawSections:
    """Parse INI text into ``{resource_key: {action_list: role_list}}``.

    Lists are returned untouched; splitting and trimming is the compiler's
    job. Raises ConfigError when the text cannot be parsed or holds no
    sections.
    """
    parser = _new_parser()
    try:
        parser.read_string(text, source=source or "<string>")
    except configparser.Error as e:
        raise ConfigError(f"Invalid ACL file ({source or '<string>'}): {e}", source=source) from e

    sections: RawSections = {}
    for section in parser.sections():
        sections[section] = {
            option: _unquote(value)
            for option, value in parser.items(section, raw=True)
        }

    if not sections:
        raise ConfigError(f"Invalid ACL file ({source or '<string>'}): no sections", source=source)

    logger.debug("parsed %d ACL sections from %s", len(sections), source or "<string>")
    return sections


def parse_file(path: str | Path) -> RawSections:
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Missing ACL file ({path})", source=str(path))
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid ACL file ({path}): {e}", source=str(path)) from e
    return parse(text, source=str(path))
