"""Entity extraction from the inflated game-data segment.

The segment is scanned as text for enum tokens. Hits are deduplicated in
first-seen order and truncated to fixed caps.
"""

from __future__ import annotations

import re

from civ_intel.save.models import ContentSummary
from civ_intel.save.tables import (
    CITY_TO_CIV,
    PLAYER_CITY_TOKENS,
    WONDER_SUFFIXES,
    WONDERS,
    format_enum_value,
    is_save_city_state,
)

MAX_TECHS = 20
MAX_CIVICS = 20
MAX_WONDERS = 15
MAX_GREAT_PEOPLE = 15
MAX_CITY_STATES = 12

_TECH_RE = re.compile(r"TECH_[A-Z_]+")
_CIVIC_RE = re.compile(r"CIVIC_[A-Z_]+")
_BUILDING_RE = re.compile(r"BUILDING_[A-Z_]+")
_GREAT_PERSON_RE = re.compile(r"GREAT_PERSON_INDIVIDUAL_[A-Z_]+_NAME")
_CIVILIZATION_RE = re.compile(r"CIVILIZATION_[A-Z_]+")


def _unique(items) -> list[str]:
    return list(dict.fromkeys(items))


def is_wonder(building: str) -> bool:
    name = building.replace("BUILDING_", "", 1)
    return name.startswith(WONDERS)


def clean_wonder_name(building: str) -> str:
    name = building.replace("BUILDING_", "", 1)
    for suffix in WONDER_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return format_enum_value(name)


def format_great_person_name(raw: str) -> str:
    """``GREAT_PERSON_INDIVIDUAL_ADA_LOVELACE_NAME`` -> ``Ada Lovelace``."""
    name = raw.replace("GREAT_PERSON_INDIVIDUAL_", "", 1).replace("_NAME", "", 1)
    return " ".join(w[:1] + w[1:].lower() for w in name.split("_"))


def analyze_decompressed(data: bytes) -> ContentSummary:
    text = data.decode("utf-8", errors="replace")

    techs = _unique(
        t for t in _TECH_RE.findall(text) if "BOOST" not in t and "GRANT" not in t
    )
    civics = _unique(_CIVIC_RE.findall(text))
    wonders = _unique(
        clean_wonder_name(b)
        for b in _unique(_BUILDING_RE.findall(text))
        if is_wonder(b)
    )
    great_people = _unique(
        format_great_person_name(gp) for gp in _GREAT_PERSON_RE.findall(text)
    )
    city_states = _unique(
        format_enum_value(token)
        for token in (
            c.replace("CIVILIZATION_", "", 1)
            for c in _unique(_CIVILIZATION_RE.findall(text))
        )
        if is_save_city_state(token)
    )
    player_cities = [format_enum_value(c) for c in PLAYER_CITY_TOKENS if c in text]

    return ContentSummary(
        technologies=[
            format_enum_value(t.replace("TECH_", "", 1)) for t in techs[:MAX_TECHS]
        ],
        civics=[
            format_enum_value(c.replace("CIVIC_", "", 1)) for c in civics[:MAX_CIVICS]
        ],
        wonders=wonders[:MAX_WONDERS],
        great_people=great_people[:MAX_GREAT_PEOPLE],
        city_states=city_states[:MAX_CITY_STATES],
        player_cities=player_cities,
    )


def identify_civ_from_cities(cities: list[str]) -> str | None:
    """Civ token owning the first recognised city name, if any."""
    for city in cities:
        civ = CITY_TO_CIV.get(city)
        if civ:
            return civ
    return None
