"""
Rating engine module.

Implements club tennis ELO calculations with:
- Experience and rating dependent K-factor
- Gameplay modifiers (new opponent, repetition, upset, weekly diversity)
- Match format weighting and margin-of-victory modifiers
- Hard rating bounds [100, 3000]

Every function is pure: no I/O, no shared state. Callers load player
snapshots and history, call in, and persist what comes back.
"""

from matchfinder.elo.calculator import (
    calculate_elo_change,
    calculate_expected_score,
    calculate_k_factor,
    calculate_match_elo,
    calculate_new_rating,
    calculate_simple_elo_change,
    get_k_factor,
    get_k_factor_label,
    simulate_match,
)
from matchfinder.elo.constants import DEFAULT_RATING, MAX_RATING, MIN_RATING
from matchfinder.elo.formats import (
    FORMAT_COEFFICIENTS,
    compose_match_modifier,
    get_format_coefficient,
    get_margin_modifier,
)
from matchfinder.elo.modifiers import calculate_modifiers, format_modifiers
from matchfinder.elo.presentation import calculate_elo_trend, format_elo_delta, get_elo_rank_title
from matchfinder.elo.types import (
    EloChangeResult,
    InvalidInputError,
    MatchEloResult,
    MatchForCalculation,
    MatchFormat,
    ModifierDetail,
    ModifierKind,
    ModifiersResult,
    PlayerForCalculation,
)

__all__ = [
    "calculate_elo_change",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_match_elo",
    "calculate_new_rating",
    "calculate_simple_elo_change",
    "get_k_factor",
    "get_k_factor_label",
    "simulate_match",
    "DEFAULT_RATING",
    "MAX_RATING",
    "MIN_RATING",
    "FORMAT_COEFFICIENTS",
    "compose_match_modifier",
    "get_format_coefficient",
    "get_margin_modifier",
    "calculate_modifiers",
    "format_modifiers",
    "calculate_elo_trend",
    "format_elo_delta",
    "get_elo_rank_title",
    "EloChangeResult",
    "InvalidInputError",
    "MatchEloResult",
    "MatchForCalculation",
    "MatchFormat",
    "ModifierDetail",
    "ModifierKind",
    "ModifiersResult",
    "PlayerForCalculation",
]
