"""Static lookup tables: civ/leader names, wonders, city-states, city pools.

Everything here is immutable (``MappingProxyType``, ``frozenset``, tuples)
so the parsers can share the tables freely.
"""

from __future__ import annotations

from types import MappingProxyType


def format_enum_value(value: str) -> str:
    """``"HANGING_GARDENS"`` -> ``"Hanging Gardens"``."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in value.split("_"))


# ---------------------------------------------------------------------------
# Header roster: civ token -> leader shown in the save summary
# ---------------------------------------------------------------------------

HEADER_LEADERS = MappingProxyType({
    "VIETNAM": "Bà Triệu",
    "GEORGIA": "Tamar",
    "PERSIA": "Cyrus",
    "CANADA": "Wilfrid Laurier",
    "NETHERLANDS": "Wilhelmina",
    "OTTOMAN": "Suleiman",
    "ROME": "Trajan",
    "EGYPT": "Cleopatra",
    "MACEDON": "Alexander",
    "SUMERIA": "Gilgamesh",
    "INDIA": "Gandhi",
    "CHINA": "Qin Shi Huang",
    "RUSSIA": "Peter the Great",
    "ENGLAND": "Victoria",
    "AZTEC": "Montezuma",
    "GERMANY": "Barbarossa",
    "GREECE": "Pericles",
    "JAPAN": "Hojo",
    "KONGO": "Mvemba a Nzinga",
    "BRAZIL": "Pedro II",
    "NORWAY": "Harald Hardrada",
    "SCYTHIA": "Tomyris",
    "SPAIN": "Philip II",
    "POLAND": "Jadwiga",
    "ARABIA": "Saladin",
    "INDONESIA": "Gitarja",
    "KHMER": "Jayavarman VII",
    "AUSTRALIA": "John Curtin",
    "ZULU": "Shaka",
    "MONGOLIA": "Genghis Khan",
    "SCOTLAND": "Robert the Bruce",
    "GAUL": "Ambiorix",
    "NUBIA": "Amanitore",
})


def leader_for_civ(token: str) -> str:
    return HEADER_LEADERS.get(token) or format_enum_value(token)


# Leader tokens as they appear at the start of save filenames
_LEADER_SPECIAL_CASES = MappingProxyType({
    "LADY_TRIEU": "Bà Triệu",
    "LADY_SIX_SKY": "Lady Six Sky",
    "PETER_GREAT": "Peter the Great",
    "T_ROOSEVELT": "Teddy Roosevelt",
    "CATHERINE_DE_MEDICI": "Catherine de Medici",
    "ROBERT_THE_BRUCE": "Robert the Bruce",
    "JOHN_CURTIN": "John Curtin",
    "QIN": "Qin Shi Huang",
    "KUBLAI_KHAN_CHINA": "Kublai Khan",
    "GENGHIS_KHAN": "Genghis Khan",
    "SIMON_BOLIVAR": "Simón Bolívar",
    "MANSA_MUSA": "Mansa Musa",
    "WU_ZETIAN": "Wu Zetian",
    "SULEIMAN_ALT": "Suleiman",
    "LAURIER": "Wilfrid Laurier",
})


def format_leader_name(token: str) -> str:
    return _LEADER_SPECIAL_CASES.get(token) or format_enum_value(token)


# ---------------------------------------------------------------------------
# Telemetry roster: civ token -> (civilization, leader)
# ---------------------------------------------------------------------------

_MAJOR_CIVS = {
    "AMERICA": ("America", "Theodore Roosevelt"),
    "ARABIA": ("Arabia", "Saladin"),
    "AUSTRALIA": ("Australia", "John Curtin"),
    "AZTEC": ("Aztec", "Montezuma"),
    "BABYLON_STK": ("Babylon", "Hammurabi"),
    "BRAZIL": ("Brazil", "Pedro II"),
    "BYZANTIUM": ("Byzantium", "Basil II"),
    "CANADA": ("Canada", "Wilfrid Laurier"),
    "CHINA": ("China", "Qin Shi Huang"),
    "CREE": ("Cree", "Poundmaker"),
    "EGYPT": ("Egypt", "Cleopatra"),
    "ENGLAND": ("England", "Victoria"),
    "ETHIOPIA": ("Ethiopia", "Menelik II"),
    "FRANCE": ("France", "Catherine de Medici"),
    "GAUL": ("Gaul", "Ambiorix"),
    "GEORGIA": ("Georgia", "Tamar"),
    "GERMANY": ("Germany", "Frederick Barbarossa"),
    "GRAN_COLOMBIA": ("Gran Colombia", "Simón Bolívar"),
    "GREECE": ("Greece", "Pericles"),
    "HUNGARY": ("Hungary", "Matthias Corvinus"),
    "INCA": ("Inca", "Pachacuti"),
    "INDIA": ("India", "Gandhi"),
    "INDONESIA": ("Indonesia", "Gitarja"),
    "JAPAN": ("Japan", "Hojo Tokimune"),
    "KHMER": ("Khmer", "Jayavarman VII"),
    "KONGO": ("Kongo", "Mvemba a Nzinga"),
    "KOREA": ("Korea", "Seondeok"),
    "MACEDON": ("Macedon", "Alexander"),
    "MALI": ("Mali", "Mansa Musa"),
    "MAORI": ("Maori", "Kupe"),
    "MAPUCHE": ("Mapuche", "Lautaro"),
    "MAYA": ("Maya", "Lady Six Sky"),
    "MONGOLIA": ("Mongolia", "Genghis Khan"),
    "NETHERLANDS": ("Netherlands", "Wilhelmina"),
    "NORWAY": ("Norway", "Harald Hardrada"),
    "NUBIA": ("Nubia", "Amanitore"),
    "OTTOMAN": ("Ottoman Empire", "Suleiman"),
    "PERSIA": ("Persia", "Cyrus"),
    "PHOENICIA": ("Phoenicia", "Dido"),
    "POLAND": ("Poland", "Jadwiga"),
    "PORTUGAL": ("Portugal", "João III"),
    "ROME": ("Rome", "Trajan"),
    "RUSSIA": ("Russia", "Peter"),
    "SCOTLAND": ("Scotland", "Robert the Bruce"),
    "SCYTHIA": ("Scythia", "Tomyris"),
    "SPAIN": ("Spain", "Philip II"),
    "SUMERIA": ("Sumeria", "Gilgamesh"),
    "SWEDEN": ("Sweden", "Kristina"),
    "VIETNAM": ("Vietnam", "Bà Triệu"),
    "ZULU": ("Zulu", "Shaka"),
    "FREE_CITIES": ("Free Cities", "Free Cities"),
}

# City-states are their own "leader"; only irregular spellings are listed
_CITY_STATE_NAMES = {
    "MOHENJO_DARO": "Mohenjo-Daro",
}

_NAMED_CITY_STATES = (
    "TARUGA", "AKKAD", "NGAZARGAMU", "BRUSSELS", "BABYLON", "LA_VENTA", "HUNZA",
    "HATTUSA", "KABUL", "SINGAPORE", "GRANADA", "CAHOKIA", "ZANZIBAR", "MITLA",
    "JOHANNESBURG", "MUSCAT", "GENEVA", "VALLETTA", "BUENOS_AIRES",
    "ANTANANARIVO", "KUMASI", "VILNIUS", "BOLOGNA", "FEZ", "JERUSALEM", "KANDY",
    "YEREVAN", "VATICAN_CITY", "AUCKLAND", "NAZCA", "SAMARKAND", "ANTIOCH",
    "BANDAR_BRUNEI", "HONG_KONG", "AMSTERDAM", "STOCKHOLM", "MOHENJO_DARO",
    "NAN_MADOL", "PRESLAV", "RAPA_NUI", "TORONTO", "ARMAGH", "CHINGUETTI",
    "LAHORE",
)


def _build_display_names() -> dict[str, tuple[str, str]]:
    names = dict(_MAJOR_CIVS)
    for token in _NAMED_CITY_STATES:
        name = _CITY_STATE_NAMES.get(token) or format_enum_value(token)
        names[token] = (name, name)
    return names


CIV_DISPLAY_NAMES = MappingProxyType(_build_display_names())


def civ_display_info(token: str) -> tuple[str, str]:
    """Return ``(civilization, leader)`` for a telemetry civ token."""
    info = CIV_DISPLAY_NAMES.get(token)
    if info is not None:
        return info
    formatted = format_enum_value(token)
    return formatted, formatted


# Exact-match city-state roster used by the telemetry files
HISTORY_CITY_STATES = frozenset({
    "TARUGA", "AKKAD", "NGAZARGAMU", "BRUSSELS", "BABYLON", "LA_VENTA", "HUNZA",
    "HATTUSA", "KABUL", "SINGAPORE", "GRANADA", "CAHOKIA", "ZANZIBAR", "MITLA",
    "JOHANNESBURG", "MUSCAT", "GENEVA", "VALLETTA", "BUENOS_AIRES",
    "ANTANANARIVO", "KUMASI", "VILNIUS", "BOLOGNA", "FEZ", "JERUSALEM", "KANDY",
    "YEREVAN", "VATICAN_CITY", "AUCKLAND", "NAZCA", "SAMARKAND", "ANTIOCH",
    "BANDAR_BRUNEI",
})


def is_history_city_state(token: str) -> bool:
    return token in HISTORY_CITY_STATES or token == "FREE_CITIES"


# ---------------------------------------------------------------------------
# Save content heuristics
# ---------------------------------------------------------------------------

# Substring-matched against CIVILIZATION_ tokens in the inflated segment
SAVE_CITY_STATES = (
    "HATTUSA", "KABUL", "SINGAPORE", "NGAZARGAMU", "HUNZA", "LA_VENTA", "AKKAD",
    "TARUGA", "BRUSSELS", "GENEVA", "BABYLON", "MUSCAT", "VALLETTA",
    "BUENOS_AIRES", "ANTANANARIVO", "ZANZIBAR", "KUMASI", "VILNIUS", "BOLOGNA",
    "FEZ", "JERUSALEM", "KANDY", "YEREVAN", "VATICAN_CITY", "AUCKLAND",
    "GRANADA", "CAHOKIA", "MITLA", "JOHANNESBURG", "NAZCA", "AYUTTHAYA",
    "CAGUANA", "CHINGUETTI", "HONG_KONG", "MOHENJO_DARO", "NAN_MADOL", "PRESLAV",
    "RAPA_NUI", "TORONTO", "WOLIN", "ARMAGH", "LAHORE", "SAMARKAND", "MOGADISHU",
    "NALANDA",
)


def is_save_city_state(token: str) -> bool:
    return any(cs in token for cs in SAVE_CITY_STATES)


WONDERS = (
    "PYRAMIDS", "STONEHENGE", "HANGING_GARDENS", "ORACLE", "COLOSSEUM", "PETRA",
    "TERRACOTTA_ARMY", "MACHU_PICCHU", "GREAT_LIBRARY", "GREAT_LIGHTHOUSE",
    "COLOSSUS", "ALHAMBRA", "CHICHEN_ITZA", "ANGKOR_WAT", "MONT_ST_MICHEL",
    "FORBIDDEN_CITY", "TAJ_MAHAL", "POTALA_PALACE", "ST_BASILS_CATHEDRAL",
    "BIG_BEN", "HERMITAGE", "BOLSHOI_THEATRE", "OXFORD_UNIVERSITY",
    "RUHR_VALLEY", "STATUE_OF_LIBERTY", "EIFFEL_TOWER", "BROADWAY",
    "CRISTO_REDENTOR", "SYDNEY_OPERA_HOUSE", "PANAMA_CANAL", "VENETIAN_ARSENAL",
    "GREAT_ZIMBABWE", "APADANA", "HUEY_TEOCALLI", "JEBEL_BARKAL",
    "KILWA_KISIWANI", "KOTOKU_IN", "MEENAKSHI_TEMPLE", "STATUE_OF_ZEUS",
    "TEMPLE_OF_ARTEMIS", "AMUNDSEN_SCOTT", "BIOSPHERE", "CASA_DE_CONTRATACION",
    "GOLDEN_GATE_BRIDGE", "GREAT_BATH", "HAGIA_SOPHIA", "MAUSOLEUM_HALICARNASSUS",
)

# Localization variants hanging off a wonder's BUILDING_ token; first hit wins
WONDER_SUFFIXES = (
    "_NAME", "_GOLD", "_PRODUCTION", "_CULTURE", "_FAITH", "_SCIENCE",
    "_DESCRIPTION", "_RANDOMCIVICBOOST", "_RANDOMTECHBOOST", "_QUOTE",
)

# Only Vietnamese cities are recognised in the inflated segment
PLAYER_CITY_TOKENS = (
    "THANG_LONG", "HUE", "HANOI", "SAIGON", "DA_NANG", "HAI_PHONG", "NHA_TRANG",
    "CAN_THO", "BIEN_HOA", "VINH",
)

_CITY_POOLS = {
    "VIETNAM": ("Hue", "Da Nang", "Hanoi", "Saigon", "Nha Trang", "Can Tho",
                "Hai Phong", "Vinh", "Thang Long", "Bien Hoa"),
    "GEORGIA": ("Tbilisi", "Kutaisi", "Batumi"),
    "PERSIA": ("Persepolis", "Pasargadae", "Susa"),
    "CANADA": ("Ottawa", "Toronto", "Montreal"),
    "NETHERLANDS": ("Amsterdam", "Rotterdam", "The Hague"),
    "OTTOMAN": ("Istanbul", "Ankara", "Edirne"),
    "ROME": ("Rome", "Antium", "Cumae"),
    "EGYPT": ("Alexandria", "Thebes", "Memphis"),
}

CITY_TO_CIV = MappingProxyType({
    city: civ for civ, cities in _CITY_POOLS.items() for city in cities
})
