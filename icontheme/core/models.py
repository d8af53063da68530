"""Icon theme data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence

BASE_THEME = "hicolor"
DEFAULT_EXTENSIONS: tuple[str, ...] = ("png", "svg", "xpm")


class DirectoryType(Enum):
    """How a theme subdirectory's icons map to requested sizes."""

    FIXED = "Fixed"
    SCALED = "Scaled"
    THRESHOLD = "Threshold"

    @classmethod
    def parse(cls, raw: str | None) -> DirectoryType:
        """Return the matching type, defaulting to ``THRESHOLD``."""
        for member in cls:
            if member.value == raw:
                return member
        return cls.THRESHOLD


@dataclass(frozen=True, slots=True)
class IconQuery:
    """A request for an icon; usable as a cache key."""

    name: str
    size: int
    scale: int = 1
    extensions: Sequence[str] = DEFAULT_EXTENSIONS

    def __post_init__(self) -> None:
        object.__setattr__(self, "extensions", tuple(self.extensions))


@dataclass(frozen=True, slots=True)
class IconDirectoryDescriptor:
    """Metadata for one icon subdirectory declared in index.theme."""

    name: str
    size: int
    type: DirectoryType = DirectoryType.THRESHOLD
    scale: int = 1
    min_size: int | None = None
    max_size: int | None = None
    threshold: int = 2

    def __post_init__(self) -> None:
        if self.min_size is None:
            object.__setattr__(self, "min_size", self.size)
        if self.max_size is None:
            object.__setattr__(self, "max_size", self.size)


@dataclass(frozen=True, slots=True)
class ThemeDescription:
    """Parsed index.theme of a single theme."""

    name: str
    parent_names: tuple[str, ...]
    directories: Mapping[str, IconDirectoryDescriptor] = field(default_factory=dict)

    def __post_init__(self) -> None:
        parents = tuple(self.parent_names)
        if self.name != BASE_THEME and BASE_THEME not in parents:
            # hicolor must always be reachable
            parents += (BASE_THEME,)
        object.__setattr__(self, "parent_names", parents)


IconLocation = tuple[str, IconDirectoryDescriptor]


@dataclass(eq=False, slots=True)
class Theme:
    """A theme node in the inheritance graph together with its file index."""

    name: str
    description: ThemeDescription
    parents: list[Theme] = field(default_factory=list)
    # icon file name -> [(absolute icon dir, descriptor)] in discovery order
    icons: dict[str, list[IconLocation]] = field(default_factory=dict)

    @property
    def directories(self) -> Mapping[str, IconDirectoryDescriptor]:
        return self.description.directories

    @classmethod
    def empty(cls, name: str) -> Theme:
        """A theme with no directories and no parents."""
        return cls(name=name, description=ThemeDescription(name=name, parent_names=(), directories={}))

    def __repr__(self) -> str:
        parents = ", ".join(parent.name for parent in self.parents)
        return f"Theme(name={self.name!r}, parents=[{parents}], icons={len(self.icons)})"
