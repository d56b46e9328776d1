"""Field positions, position types and the fair-play policy constants."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple


@dataclass(frozen=True)
class PositionGroup:
    name: str
    codes: FrozenSet[str]
    fielding: bool


POSITION_CODES: Tuple[str, ...] = ("P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH", "BN")

BENCH = "BN"
DESIGNATED_HITTER = "DH"

_POSITION_GROUPS: Dict[str, PositionGroup] = {
    "pitcher": PositionGroup(name="pitcher", codes=frozenset({"P"}), fielding=True),
    "catcher": PositionGroup(name="catcher", codes=frozenset({"C"}), fielding=True),
    "infield": PositionGroup(name="infield", codes=frozenset({"1B", "2B", "3B", "SS"}), fielding=True),
    "outfield": PositionGroup(name="outfield", codes=frozenset({"LF", "CF", "RF"}), fielding=True),
    "dh": PositionGroup(name="dh", codes=frozenset({"DH"}), fielding=False),
    "bench": PositionGroup(name="bench", codes=frozenset({"BN"}), fielding=False),
}

POSITION_TYPES: Tuple[str, ...] = tuple(_POSITION_GROUPS)

# Codes that carry a fielding assignment; DH and BN do not.
FIELD_POSITIONS: Tuple[str, ...] = tuple(
    code
    for code in POSITION_CODES
    if any(code in group.codes for group in _POSITION_GROUPS.values() if group.fielding)
)

_TYPE_BY_CODE: Mapping[str, str] = {
    code: group.name for group in _POSITION_GROUPS.values() for code in group.codes
}

# Trailing windows, keyed by their wire name; None means the whole season.
WINDOW_SIZES: Tuple[Tuple[str, int | None], ...] = (
    ("season", None),
    ("last5Games", 5),
    ("last3Games", 3),
    ("lastGame", 1),
)

NEEDS_THRESHOLD_PERCENT = 20.0
NEEDS_MIN_INNINGS = 3


def is_position_code(value: object) -> bool:
    return isinstance(value, str) and value in _TYPE_BY_CODE


def get_position_type(code: str) -> str:
    """Return the position type for a code, raising KeyError if unknown."""

    if code not in _TYPE_BY_CODE:
        raise KeyError(f"Unknown position code {code!r}")
    return _TYPE_BY_CODE[code]


def get_position_group(name: str) -> PositionGroup:
    """Fetch a position group by type name, raising KeyError if missing."""

    key = name.lower()
    if key not in _POSITION_GROUPS:
        raise KeyError(f"No position group named {name!r}")
    return _POSITION_GROUPS[key]


def iter_position_groups() -> Iterable[PositionGroup]:
    """Return an iterator of all position groups in canonical order."""

    return _POSITION_GROUPS.values()
