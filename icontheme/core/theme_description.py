"""index.theme parsing."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from icontheme.core.models import DirectoryType, IconDirectoryDescriptor, ThemeDescription
from icontheme.errors import ErrorCode, InvalidThemeError

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "index.theme"
ICON_THEME_SECTION = "Icon Theme"

KEY_DIRECTORIES = "Directories"
KEY_INHERITS = "Inherits"
KEY_SIZE = "Size"
KEY_SCALE = "Scale"
KEY_TYPE = "Type"
KEY_MIN_SIZE = "MinSize"
KEY_MAX_SIZE = "MaxSize"
KEY_THRESHOLD = "Threshold"


class ThemeIndexValue(str):
    """A raw index.theme value with typed accessors."""

    __slots__ = ()

    def as_integer(self) -> int | None:
        try:
            return int(self.strip())
        except ValueError:
            return None

    def as_string_list(self, separator: str = ",") -> list[str]:
        return [item.strip() for item in self.split(separator) if item.strip()]


Sections = dict[str, dict[str, ThemeIndexValue]]


def parse_sections(text: str) -> Sections:
    """Split INI text into ordered sections of typed values.

    Lines are read flat: indentation never continues a value, and lines
    without ``=`` are dropped. Raises ``configparser.Error`` when there is
    content before the first section header.
    """
    cfg = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        default_section="\0",
        allow_no_value=True,
        empty_lines_in_values=False,
    )
    cfg.optionxform = str
    cfg.read_string("\n".join(line.strip() for line in text.splitlines()))
    return {
        name: {
            key: ThemeIndexValue(value)
            for key, value in cfg.items(name, raw=True)
            if value is not None
        }
        for name in cfg.sections()
    }


def parse_theme_description(theme_dir: str | Path) -> ThemeDescription:
    """Parse ``<theme_dir>/index.theme`` into a ThemeDescription.

    Directory sections without a usable ``Size`` are skipped; anything that
    makes the theme as a whole unusable raises InvalidThemeError.
    """
    theme_dir = Path(theme_dir)
    index_path = theme_dir / INDEX_FILE_NAME
    if not index_path.is_file():
        raise InvalidThemeError(ErrorCode.THEME_INDEX_MISSING, path=index_path)

    try:
        text = index_path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError as exc:
        raise InvalidThemeError(
            ErrorCode.THEME_INDEX_UNREADABLE, path=index_path, details={"original": str(exc)}
        ) from exc

    try:
        sections = parse_sections(text)
    except configparser.Error as exc:
        raise InvalidThemeError(
            ErrorCode.THEME_INDEX_INVALID, path=index_path, details={"original": str(exc)}
        ) from exc

    entries = sections.get(ICON_THEME_SECTION)
    if entries is None:
        raise InvalidThemeError(ErrorCode.THEME_SECTION_MISSING, path=index_path)
    if KEY_DIRECTORIES not in entries:
        raise InvalidThemeError(ErrorCode.THEME_DIRECTORIES_MISSING, path=index_path)

    directories: dict[str, IconDirectoryDescriptor] = {}
    for dir_name in entries[KEY_DIRECTORIES].as_string_list(","):
        if dir_name in directories:
            continue
        section = sections.get(dir_name)
        if section is None:
            continue
        descriptor = _parse_directory(dir_name, section)
        if descriptor is None:
            logger.debug("skipping directory %r in %s: missing or invalid Size", dir_name, index_path)
            continue
        directories[dir_name] = descriptor

    parents: list[str] = []
    if KEY_INHERITS in entries:
        parents = entries[KEY_INHERITS].as_string_list(",")

    return ThemeDescription(
        name=theme_dir.name,
        parent_names=tuple(parents),
        directories=directories,
    )


def _parse_directory(name: str, section: dict[str, ThemeIndexValue]) -> IconDirectoryDescriptor | None:
    size = _optional_int(section, KEY_SIZE)
    if size is None:
        return None

    kwargs: dict[str, int] = {}
    for key, field_name in (
        (KEY_SCALE, "scale"),
        (KEY_MIN_SIZE, "min_size"),
        (KEY_MAX_SIZE, "max_size"),
        (KEY_THRESHOLD, "threshold"),
    ):
        value = _optional_int(section, key)
        if value is not None:
            kwargs[field_name] = value

    raw_type = section.get(KEY_TYPE)
    return IconDirectoryDescriptor(
        name=name,
        size=size,
        type=DirectoryType.parse(raw_type.strip() if raw_type is not None else None),
        **kwargs,
    )


def _optional_int(section: dict[str, ThemeIndexValue], key: str) -> int | None:
    value = section.get(key)
    if value is None:
        return None
    return value.as_integer()
