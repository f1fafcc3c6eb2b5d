"""
Rating calculator for club tennis matches.

Implements the standard ELO formula with:
- An experience/rating dependent K-factor
- Gameplay modifiers (new opponent, repetition, upset, weekly diversity)
- Hard rating bounds

The ELO formula:
  Expected score: E_A = 1 / (1 + 10^((R_B - R_A) / 400))
  New rating: R'_A = R_A + K * modifier * (actual - expected)

Where:
  R_A, R_B = Current ratings of players A and B
  K = How much ratings change (volatility factor)
  modifier = Product of the gameplay modifiers for player A

Order of rounding matters: the modifier total is rounded to 2 decimals,
the delta is kept at full precision, and only the final rating is rounded
and then clamped to [MIN_RATING, MAX_RATING].

Format weighting and margin of victory are not part of calculate_match_elo().
calculate_elo_change() is the format-aware path that composes every factor
and returns a breakdown for display.
"""

import logging
import math
import numbers
from datetime import datetime
from typing import Iterable, Optional

from matchfinder.elo.constants import (
    ESTABLISHED_MATCH_COUNT,
    HIGH_RATING_THRESHOLD,
    INTERMEDIATE_PLAYER_MATCHES,
    K_FACTOR_LABELS,
    K_FACTORS,
    LOSER_RATIO,
    MAX_RATING,
    MIN_RATING,
    MODIFIER_DEFAULTS,
    NEW_PLAYER_MATCHES,
    RATING_DIVISOR,
)
from matchfinder.elo.formats import (
    coerce_match_format,
    get_format_coefficient,
    get_format_label,
    get_margin_label,
    get_margin_modifier,
)
from matchfinder.elo.modifiers import calculate_modifiers
from matchfinder.elo.rounding import round_half_up, round_to_int
from matchfinder.elo.types import (
    EloBreakdown,
    EloCalculationParams,
    EloCalculationResult,
    EloChangeResult,
    InvalidInputError,
    MatchEloResult,
    MatchForCalculation,
    MatchFormat,
    MatchSimulation,
    PlayerForCalculation,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Validation
# ============================================================================

def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _validate_rating(rating: float, field_name: str) -> None:
    if not _is_number(rating) or not math.isfinite(rating) or rating < 0:
        raise InvalidInputError(f"{field_name} must be a finite non-negative number, got {rating!r}")


def _validate_player(player: PlayerForCalculation, role: str) -> None:
    _validate_rating(player.current_rating, f"{role} current_rating")
    if (
        not isinstance(player.matches_played, int)
        or isinstance(player.matches_played, bool)
        or player.matches_played < 0
    ):
        raise InvalidInputError(
            f"{role} matches_played must be a non-negative integer, got {player.matches_played!r}"
        )


def _validate_match_count(count: int, field_name: str) -> None:
    if not isinstance(count, int) or isinstance(count, bool) or count < 0:
        raise InvalidInputError(f"{field_name} must be a non-negative integer, got {count!r}")


# ============================================================================
# K-factor and expected score
# ============================================================================

def calculate_k_factor(player: PlayerForCalculation) -> int:
    """
    K-factor for a player, first matching bucket wins.

    1. Rating >= 1800: 16, even for a player with few matches
    2. Fewer than 10 matches: 40
    3. Fewer than 30 matches: 32
    4. Otherwise: 24
    """
    if player.current_rating >= HIGH_RATING_THRESHOLD:
        return K_FACTORS["high"]
    if player.matches_played < NEW_PLAYER_MATCHES:
        return K_FACTORS["new"]
    if player.matches_played < INTERMEDIATE_PLAYER_MATCHES:
        return K_FACTORS["intermediate"]
    return K_FACTORS["established"]


def _experience_bucket(match_count: int) -> str:
    if match_count < NEW_PLAYER_MATCHES:
        return "new"
    if match_count < INTERMEDIATE_PLAYER_MATCHES:
        return "intermediate"
    return "established"


def get_k_factor(match_count: int) -> int:
    """Experience-only K-factor used by the format-aware calculator."""
    return K_FACTORS[_experience_bucket(match_count)]


def get_k_factor_label(match_count: int) -> str:
    return K_FACTOR_LABELS[_experience_bucket(match_count)]


def calculate_expected_score(player_rating: float, opponent_rating: float) -> float:
    """
    Probability that the player beats the opponent.

    Example:
        calculate_expected_score(1400, 1200)  # ~0.76
    """
    try:
        return 1.0 / (1.0 + 10.0 ** ((opponent_rating - player_rating) / RATING_DIVISOR))
    except OverflowError:
        # Gap far beyond the rating bounds: hopeless underdog
        return 0.0


# ============================================================================
# Rating update
# ============================================================================

def calculate_new_rating(
    current_rating: int,
    k_factor: int,
    expected_score: float,
    actual_score: int,
    modifier: float = 1.0,
) -> int:
    """
    Apply one match result to a rating.

    Args:
        current_rating: Rating before the match
        k_factor: K for this player
        expected_score: Pre-match win probability for this player
        actual_score: 1 for a win, 0 for a loss
        modifier: Composite multiplier (gameplay modifiers, and format/margin
                  when the caller composes them in)

    Returns:
        New integer rating, always within [MIN_RATING, MAX_RATING]

    Raises:
        InvalidInputError: If the rating is negative or not finite, the modifier
                           is not positive, the expected score is outside
                           [0, 1] or actual_score is not 0 or 1

    Examples:
        calculate_new_rating(1200, 32, 0.5, 1)          # 1216
        calculate_new_rating(2950, 40, 0.1, 1, 1.5)     # 3000 (clamped)
    """
    _validate_rating(current_rating, "current_rating")
    if not _is_number(modifier) or modifier <= 0:
        raise InvalidInputError(f"modifier must be positive, got {modifier!r}")
    if not 0 <= expected_score <= 1:
        raise InvalidInputError(f"expected_score must be within [0, 1], got {expected_score!r}")
    if actual_score not in (0, 1):
        raise InvalidInputError(f"actual_score must be 0 or 1, got {actual_score!r}")

    delta = k_factor * modifier * (actual_score - expected_score)
    unbounded = round_to_int(current_rating + delta)
    new_rating = max(MIN_RATING, min(MAX_RATING, unbounded))

    if new_rating != unbounded:
        logger.debug(
            "Rating clamped: %s + %.2f -> %s (bounds %s-%s)",
            current_rating, delta, new_rating, MIN_RATING, MAX_RATING,
        )

    return new_rating


def calculate_match_elo(
    winner: PlayerForCalculation,
    loser: PlayerForCalculation,
    winner_history: Iterable[MatchForCalculation] = (),
    loser_history: Iterable[MatchForCalculation] = (),
    now: Optional[datetime] = None,
) -> MatchEloResult:
    """
    Calculate both players' new ratings after a match.

    Each player gets their own K-factor and their own gameplay modifiers.
    Format weighting and margin of victory are NOT applied here; compose
    them at the call site (see matchfinder.elo.formats.compose_match_modifier)
    or use calculate_elo_change().

    Args:
        winner: Snapshot of the winner before the match
        loser: Snapshot of the loser before the match
        winner_history: Winner's recent matches, this one excluded
        loser_history: Loser's recent matches, this one excluded
        now: Reference time for windowed modifiers (defaults to current UTC)

    Returns:
        MatchEloResult with a full EloChangeResult per player

    Raises:
        InvalidInputError: For negative ratings/match counts or a player
                           facing themselves

    Example:
        # Two 1200 players with 20 matches each, first meeting
        result = calculate_match_elo(
            PlayerForCalculation("a", 1200, 20),
            PlayerForCalculation("b", 1200, 20),
            [], [],
        )
        result.winner.delta  # +18
        result.loser.delta   # -18
    """
    _validate_player(winner, "winner")
    _validate_player(loser, "loser")
    if winner.id == loser.id:
        raise InvalidInputError(f"winner and loser must differ, both are {winner.id!r}")

    winner_k = calculate_k_factor(winner)
    loser_k = calculate_k_factor(loser)

    winner_expected = calculate_expected_score(winner.current_rating, loser.current_rating)
    loser_expected = 1.0 - winner_expected

    winner_mods = calculate_modifiers(
        winner.current_rating,
        loser.id,
        loser.current_rating,
        winner_history,
        is_winner=True,
        now=now,
    )
    loser_mods = calculate_modifiers(
        loser.current_rating,
        winner.id,
        winner.current_rating,
        loser_history,
        is_winner=False,
        now=now,
    )

    winner_after = calculate_new_rating(
        winner.current_rating, winner_k, winner_expected, 1, winner_mods.total_modifier
    )
    loser_after = calculate_new_rating(
        loser.current_rating, loser_k, loser_expected, 0, loser_mods.total_modifier
    )

    logger.debug(
        "Match %s beat %s: %s -> %s (K=%s, x%s), %s -> %s (K=%s, x%s)",
        winner.id, loser.id,
        winner.current_rating, winner_after, winner_k, winner_mods.total_modifier,
        loser.current_rating, loser_after, loser_k, loser_mods.total_modifier,
    )

    return MatchEloResult(
        winner=EloChangeResult(
            rating_before=winner.current_rating,
            rating_after=winner_after,
            k_factor=winner_k,
            expected_score=winner_expected,
            actual_score=1,
            modifiers=winner_mods,
        ),
        loser=EloChangeResult(
            rating_before=loser.current_rating,
            rating_after=loser_after,
            k_factor=loser_k,
            expected_score=loser_expected,
            actual_score=0,
            modifiers=loser_mods,
        ),
    )


def simulate_match(
    player1: PlayerForCalculation,
    player2: PlayerForCalculation,
    player1_history: Iterable[MatchForCalculation] = (),
    player2_history: Iterable[MatchForCalculation] = (),
    now: Optional[datetime] = None,
) -> MatchSimulation:
    """
    Preview a match before it is played.

    Runs calculate_match_elo() once per possible winner. Nothing is stored;
    this is what the "what's at stake" card on the challenge page shows.
    """
    player1_history = list(player1_history)
    player2_history = list(player2_history)

    if_player1_wins = calculate_match_elo(player1, player2, player1_history, player2_history, now=now)
    if_player2_wins = calculate_match_elo(player2, player1, player2_history, player1_history, now=now)

    return MatchSimulation(
        if_player1_wins=if_player1_wins,
        if_player2_wins=if_player2_wins,
        player1_win_probability=if_player1_wins.winner.expected_score,
    )


# ============================================================================
# Format-aware calculator
# ============================================================================

def calculate_elo_change(params: EloCalculationParams) -> EloCalculationResult:
    """
    Rating change with format weighting, margin and context modifiers.

    Formula:
        final = K * format_coef * margin * new_opp * upset * repetition
                * diversity * (1 - expected)

    K is the average of both players' experience K. The winner always gains
    at least 1 point and the loser gives up 80% of the winner's gain.

    Args:
        params: Ratings, match counts, format, optional games and the
                pre-computed context flags

    Returns:
        EloCalculationResult with both deltas and the full breakdown

    Raises:
        InvalidInputError: For negative or non-finite ratings, negative match
                           counts or an unknown format
    """
    _validate_rating(params.winner_rating, "winner_rating")
    _validate_rating(params.loser_rating, "loser_rating")
    _validate_match_count(params.winner_match_count, "winner_match_count")
    _validate_match_count(params.loser_match_count, "loser_match_count")
    _validate_match_count(params.recent_matches_vs_same_opponent, "recent_matches_vs_same_opponent")
    _validate_match_count(params.weekly_unique_opponents, "weekly_unique_opponents")
    match_format = coerce_match_format(params.match_format)

    # 1. K averaged for fairness, labelled by the less experienced player
    k_factor = round_to_int(
        (get_k_factor(params.winner_match_count) + get_k_factor(params.loser_match_count)) / 2
    )
    k_factor_label = get_k_factor_label(min(params.winner_match_count, params.loser_match_count))

    # 2. Winner's pre-match probability
    expected = calculate_expected_score(params.winner_rating, params.loser_rating)

    # 3. Format weight
    format_coefficient = get_format_coefficient(match_format)

    # 4. Margin of victory
    if params.winner_games is not None and params.loser_games is not None:
        margin_modifier = get_margin_modifier(params.winner_games, params.loser_games, match_format)
    else:
        margin_modifier = 1.0

    # 5-8. Context modifiers
    new_opponent_bonus = MODIFIER_DEFAULTS["new_opponent_bonus"] if params.is_new_opponent else 1.0

    is_upset = params.loser_rating - params.winner_rating >= MODIFIER_DEFAULTS["upset_rating_threshold"]
    upset_bonus = MODIFIER_DEFAULTS["upset_bonus"] if is_upset else 1.0

    repetition_malus = max(
        MODIFIER_DEFAULTS["repetition_min_modifier"],
        1 - params.recent_matches_vs_same_opponent * MODIFIER_DEFAULTS["repetition_penalty_per_match"],
    )

    has_diversity = params.weekly_unique_opponents >= MODIFIER_DEFAULTS["weekly_diversity_min_opponents"]
    diversity_bonus = MODIFIER_DEFAULTS["weekly_diversity_bonus"] if has_diversity else 1.0

    raw_change = k_factor * (1 - expected)
    final_change = max(1, round_to_int(
        raw_change
        * format_coefficient
        * margin_modifier
        * new_opponent_bonus
        * upset_bonus
        * repetition_malus
        * diversity_bonus
    ))
    loser_delta = -round_to_int(final_change * LOSER_RATIO)

    logger.debug(
        "Format-aware change (%s): K=%s expected=%.3f raw=%.2f final=+%s/%s",
        match_format.value, k_factor, expected, raw_change, final_change, loser_delta,
    )

    return EloCalculationResult(
        winner_delta=final_change,
        loser_delta=loser_delta,
        breakdown=EloBreakdown(
            k_factor=k_factor,
            k_factor_label=k_factor_label,
            expected_score=round_half_up(expected, 2),
            win_probability=round_to_int(expected * 100),
            format_coefficient=format_coefficient,
            format_label=get_format_label(match_format),
            margin_modifier=round_half_up(margin_modifier, 2),
            margin_label=get_margin_label(margin_modifier),
            new_opponent_bonus=new_opponent_bonus,
            upset_bonus=upset_bonus,
            repetition_malus=round_half_up(repetition_malus, 2),
            diversity_bonus=diversity_bonus,
            raw_change=round_to_int(raw_change),
            final_change=final_change,
        ),
    )


def calculate_simple_elo_change(
    winner_rating: int,
    loser_rating: int,
    match_format: MatchFormat | str = MatchFormat.TWO_SETS,
) -> tuple[int, int]:
    """
    Quick (winner_delta, loser_delta) with no context.

    Both players are treated as established.
    """
    result = calculate_elo_change(
        EloCalculationParams(
            winner_rating=winner_rating,
            loser_rating=loser_rating,
            winner_match_count=ESTABLISHED_MATCH_COUNT,
            loser_match_count=ESTABLISHED_MATCH_COUNT,
            match_format=coerce_match_format(match_format),
        )
    )
    return result.winner_delta, result.loser_delta
