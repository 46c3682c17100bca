"""Centralized position normalization utility.

All position handling in the engine should go through this module so that
reports, needs and scout specialties compare equal. The canonical format is
the uppercase abbreviation: QB, RB, WR, TE, LT, LG, C, RG, RT, DE, DT, OLB,
ILB, CB, FS, SS, K, P.
"""

from typing import Optional

# Canonical positions - the standard format used throughout the engine
CANONICAL_POSITIONS = frozenset({
    "QB", "RB", "WR", "TE",
    "LT", "LG", "C", "RG", "RT",
    "DE", "DT", "OLB", "ILB",
    "CB", "FS", "SS",
    "K", "P",
})

OFFENSIVE_POSITIONS = frozenset({"QB", "RB", "WR", "TE", "LT", "LG", "C", "RG", "RT"})
DEFENSIVE_POSITIONS = frozenset({"DE", "DT", "OLB", "ILB", "CB", "FS", "SS"})

# Mapping from alternate spellings to canonical positions (keys are lowercase)
POSITION_ALIASES: dict[str, str] = {
    # Backfield
    "quarterback": "QB",
    "hb": "RB",
    "halfback": "RB",
    "running back": "RB",
    "tailback": "RB",
    "fb": "RB",
    "fullback": "RB",

    # Receivers
    "wideout": "WR",
    "wide receiver": "WR",
    "tight end": "TE",

    # Offensive line
    "left tackle": "LT",
    "left guard": "LG",
    "center": "C",
    "right guard": "RG",
    "right tackle": "RT",

    # Defensive front
    "edge": "DE",
    "defensive end": "DE",
    "nt": "DT",
    "nose tackle": "DT",
    "defensive tackle": "DT",
    "mlb": "ILB",
    "mike": "ILB",
    "inside linebacker": "ILB",
    "outside linebacker": "OLB",

    # Secondary
    "corner": "CB",
    "cornerback": "CB",
    "free safety": "FS",
    "strong safety": "SS",

    # Special teams
    "pk": "K",
    "kicker": "K",
    "punter": "P",
}

# Position groups for group-level board views
POSITION_GROUPS: dict[str, tuple[str, ...]] = {
    "QB": ("QB",),
    "RB": ("RB",),
    "WR": ("WR",),
    "TE": ("TE",),
    "OL": ("LT", "LG", "C", "RG", "RT"),
    "DL": ("DE", "DT"),
    "LB": ("OLB", "ILB"),
    "DB": ("CB", "FS", "SS"),
    "ST": ("K", "P"),
}

# Position ordering for consistent display/sorting
POSITION_ORDER = [
    "QB", "RB", "WR", "TE", "LT", "LG", "C", "RG", "RT",
    "DE", "DT", "OLB", "ILB", "CB", "FS", "SS", "K", "P",
]


def normalize_position(position: Optional[str]) -> Optional[str]:
    """Normalize a position string to canonical uppercase format.

    Args:
        position: Position string in any known format (e.g., "edge", "HB", "qb")

    Returns:
        Canonical position or None if invalid/None

    Examples:
        >>> normalize_position("edge")
        'DE'
        >>> normalize_position("hb")
        'RB'
        >>> normalize_position(None)
        None
    """
    if position is None:
        return None

    cleaned = position.strip()
    if cleaned.upper() in CANONICAL_POSITIONS:
        return cleaned.upper()

    return POSITION_ALIASES.get(cleaned.lower())


def normalize_position_strict(position: str) -> str:
    """Normalize a position string, raising ValueError if unknown.

    Raises:
        ValueError: If position is not recognized
    """
    normalized = normalize_position(position)
    if normalized is None:
        raise ValueError(f"Unknown position: {position}")
    return normalized


def is_valid_position(position: Optional[str]) -> bool:
    """Check if a position string can be normalized."""
    return normalize_position(position) is not None


def position_group(position: Optional[str]) -> Optional[str]:
    """Return the group (OL, DL, LB, DB, ...) a position belongs to."""
    normalized = normalize_position(position)
    if normalized is None:
        return None
    for group, members in POSITION_GROUPS.items():
        if normalized in members:
            return group
    return None


def side_of_ball(position: Optional[str]) -> Optional[str]:
    """Return "offense", "defense", or None for special teams and unknowns."""
    normalized = normalize_position(position)
    if normalized in OFFENSIVE_POSITIONS:
        return "offense"
    if normalized in DEFENSIVE_POSITIONS:
        return "defense"
    return None


def sort_by_position(items: list, key=lambda item: item.position) -> list:
    """Sort items by position in standard order, unknown positions last.

    Args:
        items: Objects carrying a position
        key: Accessor for the position (default: ``item.position``)
    """
    def position_sort_key(item) -> int:
        position = normalize_position(key(item))
        return POSITION_ORDER.index(position) if position else 99

    return sorted(items, key=position_sort_key)
