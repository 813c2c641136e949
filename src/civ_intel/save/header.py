"""Regex heuristics over the uncompressed save header.

The header is treated as text: the first 150000 bytes decoded as UTF-8.
All helpers are pure functions of ``(text)`` or ``(text, pos)``.
"""

from __future__ import annotations

import re

from civ_intel.save.models import CivInfo, HeaderCivs, ModInfo
from civ_intel.save.tables import format_enum_value, leader_for_civ

HEADER_SIZE = 150_000

FULL_CIV_MARKER = "CIVILIZATION_LEVEL_FULL_CIV"
CITY_STATE_MARKER = "CIVILIZATION_LEVEL_CITY_STATE"
LOOKBACK = 500
HUMAN_LOOKAHEAD = 100
MAX_CITY_STATES = 15

_CIV_TOKEN_RE = re.compile(r"CIVILIZATION_([A-Z_]+?)(?=[^A-Z_]|$)")
_MAP_TYPE_RE = re.compile(r'"LOC_MAP_([A-Z_]+)":\[')
_ERA_RE = re.compile(r'"LOC_ERA_([A-Z]+)_NAME"')
_DIFFICULTY_RE = re.compile(r"DIFFICULTY_([A-Z]+)(?![A-Z_])")
_VERSION_RE = re.compile(r"(\d+\.\d+\.\d+)\s*\((\d+)\)")
_MOD_RE = re.compile(
    r"([0-9A-F]{8}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{4}-[0-9A-F]{12})"
    r'\s*\{"LOC_([A-Z_]+)_MOD_TITLE"',
    re.IGNORECASE,
)


def header_text(buffer: bytes) -> str:
    return buffer[:HEADER_SIZE].decode("utf-8", errors="replace")


def marker_positions(text: str, marker: str) -> list[int]:
    positions = []
    pos = text.find(marker)
    while pos >= 0:
        positions.append(pos)
        pos = text.find(marker, pos + len(marker))
    return positions


def nearest_civ_token(text: str, pos: int) -> str | None:
    """Closest ``CIVILIZATION_X`` in the window before ``pos``, minus ``_NAME``.

    ``CIVILIZATION_LEVEL_*`` tokens are skipped.
    """
    section = text[max(0, pos - LOOKBACK) : pos]
    for match in reversed(_CIV_TOKEN_RE.findall(section)):
        if match.startswith("LEVEL"):
            continue
        return re.sub(r"_NAME$", "", match)
    return None


def is_human_marker(text: str, pos: int) -> bool:
    return "Player" in text[pos : pos + HUMAN_LOOKAHEAD]


def extract_civs(text: str) -> HeaderCivs:
    civs: list[CivInfo] = []
    seen: set[str] = set()
    for pos in marker_positions(text, FULL_CIV_MARKER):
        token = nearest_civ_token(text, pos)
        if token is None or token in seen:
            continue
        seen.add(token)
        civs.append(
            CivInfo(
                leader=leader_for_civ(token),
                civilization=format_enum_value(token),
                token=token,
                type="full_civ",
                is_human=is_human_marker(text, pos),
            )
        )

    city_states: list[str] = []
    seen_cs: set[str] = set()
    for pos in marker_positions(text, CITY_STATE_MARKER):
        token = nearest_civ_token(text, pos)
        if token is None or token in seen_cs:
            continue
        seen_cs.add(token)
        city_states.append(format_enum_value(token))

    return HeaderCivs(
        player=civs[0] if civs else None,
        ai_civs=civs[1:],
        city_states=city_states[:MAX_CITY_STATES],
    )


def _first_group(pattern: re.Pattern[str], text: str) -> str | None:
    m = pattern.search(text)
    return m.group(1) if m else None


def extract_map_type(text: str) -> str | None:
    raw = _first_group(_MAP_TYPE_RE, text)
    return format_enum_value(raw) if raw else None


def extract_era(text: str) -> str | None:
    raw = _first_group(_ERA_RE, text)
    return format_enum_value(raw) if raw else None


def extract_difficulty(text: str) -> str | None:
    raw = _first_group(_DIFFICULTY_RE, text)
    return format_enum_value(raw) if raw else None


def extract_version(text: str) -> str | None:
    m = _VERSION_RE.search(text)
    return f"{m.group(1)} ({m.group(2)})" if m else None


def extract_mods(text: str) -> list[ModInfo]:
    mods: dict[str, ModInfo] = {}
    for mod_id, name in _MOD_RE.findall(text):
        if mod_id not in mods:
            mods[mod_id] = ModInfo(id=mod_id, title=format_enum_value(name))
    return list(mods.values())
