"""Utility modules for draft_scout."""

from draft_scout.utils.frozen import freeze_field, freeze_mapping
from draft_scout.utils.numeric import clamp, mean, resolve_rng, round_half_up
from draft_scout.utils.position_normalizer import (
    CANONICAL_POSITIONS,
    DEFENSIVE_POSITIONS,
    OFFENSIVE_POSITIONS,
    POSITION_ALIASES,
    POSITION_GROUPS,
    POSITION_ORDER,
    is_valid_position,
    normalize_position,
    normalize_position_strict,
    position_group,
    side_of_ball,
    sort_by_position,
)

__all__ = [
    "CANONICAL_POSITIONS",
    "DEFENSIVE_POSITIONS",
    "OFFENSIVE_POSITIONS",
    "POSITION_ALIASES",
    "POSITION_GROUPS",
    "POSITION_ORDER",
    "clamp",
    "freeze_field",
    "freeze_mapping",
    "is_valid_position",
    "mean",
    "normalize_position",
    "normalize_position_strict",
    "position_group",
    "resolve_rng",
    "round_half_up",
    "side_of_ball",
    "sort_by_position",
]
