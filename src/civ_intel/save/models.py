"""Dataclasses produced by the save-file decoder."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class MarkerType(IntEnum):
    BOOL = 1
    INT = 2
    STRING = 5


@dataclass(frozen=True)
class MarkerValue:
    type: MarkerType
    data: bool | int | str


@dataclass(frozen=True)
class CivInfo:
    leader: str
    civilization: str  # display name, e.g. "Georgia"
    token: str  # enum token without prefix, e.g. "GEORGIA"
    type: str = "full_civ"  # full_civ | city_state | free_cities
    is_human: bool = False


@dataclass(frozen=True)
class ModInfo:
    id: str
    title: str


@dataclass(frozen=True)
class HeaderCivs:
    """Roster recovered from the uncompressed header."""
    player: CivInfo | None
    ai_civs: list[CivInfo] = field(default_factory=list)
    city_states: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ContentSummary:
    """Entities recovered from the inflated game-data segment."""
    technologies: list[str] = field(default_factory=list)
    civics: list[str] = field(default_factory=list)
    wonders: list[str] = field(default_factory=list)
    great_people: list[str] = field(default_factory=list)
    city_states: list[str] = field(default_factory=list)
    player_cities: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SaveFileInfo:
    name: str
    path: str
    modified: str  # ISO-8601, UTC
    size: int
    leader: str | None = None  # from the filename prefix
    turn: int | None = None  # from the filename


@dataclass(frozen=True)
class GameState:
    """Everything recovered from one save.

    Fields the decoder could not find are None rather than a placeholder.
    """
    leader: str | None
    civilization: str | None
    turn: int | None
    era: str | None = None
    difficulty: str | None = None
    map_type: str | None = None
    map_size: str | None = None
    game_speed: str | None = None
    game_version: str | None = None
    player: CivInfo | None = None
    other_civs: tuple[CivInfo, ...] = ()
    city_states: tuple[str, ...] = ()
    mods: tuple[ModInfo, ...] = ()
    content: ContentSummary | None = None  # None when inflation failed
