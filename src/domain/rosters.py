"""Protocol rosters, display abbreviations and ratio weight tables."""

from __future__ import annotations

from collections.abc import Mapping

PROTOCOLS_MAIN1: tuple[str, ...] = (
    "DARKNESS",
    "FIRE",
    "PSYCHIC",
    "DEATH",
    "GRAVITY",
    "WATER",
    "LIFE",
    "PLAGUE",
    "LIGHT",
    "SPEED",
    "SPIRIT",
    "METAL",
)

PROTOCOLS_AUX1: tuple[str, ...] = (
    "HATE",
    "LOVE",
    "APATHY",
)

# Each set extends the previous one.
PROTOCOL_SETS: dict[str, tuple[str, ...]] = {
    "V1": PROTOCOLS_MAIN1,
    "V1_AUX": PROTOCOLS_MAIN1 + PROTOCOLS_AUX1,
}

ABBR: dict[str, str] = {
    "DARKNESS": "DAR",
    "FIRE": "FIR",
    "HATE": "HAT",
    "PSYCHIC": "PSY",
    "DEATH": "DEA",
    "GRAVITY": "GRA",
    "WATER": "WAT",
    "LIFE": "LIF",
    "LOVE": "LOV",
    "PLAGUE": "PLA",
    "LIGHT": "LIG",
    "SPEED": "SPE",
    "SPIRIT": "SPI",
    "APATHY": "APA",
    "METAL": "MET",
}

RATIO_SETS: dict[str, Mapping[str, int]] = {
    "V1": {
        "DARKNESS": 5,
        "FIRE": 5,
        "HATE": 5,
        "PSYCHIC": 5,
        "DEATH": 3,
        "GRAVITY": 3,
        "WATER": 3,
        "LIFE": 2,
        "LOVE": 2,
        "PLAGUE": 2,
        "LIGHT": 1,
        "SPEED": 1,
        "SPIRIT": 1,
        "APATHY": 0,
        "METAL": 0,
    },
}


def abbreviation(protocol: str) -> str:
    """Short display label, falling back to the first three characters."""
    return ABBR.get(protocol, protocol[:3])


def get_protocol_set(key: str) -> tuple[str, ...]:
    try:
        return PROTOCOL_SETS[key]
    except KeyError as exc:
        available = ", ".join(sorted(PROTOCOL_SETS))
        raise KeyError(f"Unknown roster set '{key}'. Available: {available}") from exc


def get_ratio_set(key: str) -> Mapping[str, int]:
    try:
        return RATIO_SETS[key]
    except KeyError as exc:
        available = ", ".join(sorted(RATIO_SETS))
        raise KeyError(f"Unknown ratio set '{key}'. Available: {available}") from exc


__all__ = [
    "ABBR",
    "PROTOCOL_SETS",
    "RATIO_SETS",
    "abbreviation",
    "get_protocol_set",
    "get_ratio_set",
]
