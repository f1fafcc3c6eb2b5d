"""
Gameplay modifiers on top of the K-factor.

The point of the club ladder is to get people playing *different* opponents,
so the rating swing is scaled by four independent rules:

1. New opponent (+15%): first ever meeting between the two players
2. Repetition (-5% per recent meeting, floor -30%): only when rule 1 did
   not apply, counting meetings in the last 30 days
3. Upset (+20%): the winner beat someone rated 100+ points higher
4. Weekly diversity (+10%): 3+ distinct opponents in the last 7 days

Rule 1 looks at the whole history it is given, while rule 2 only counts the
30-day window. A pair whose only previous meeting was months ago therefore
gets neither the bonus nor the penalty.

The total is the product of the applied values, rounded to 2 decimals.
"""

from datetime import datetime, timedelta, timezone
from typing import Hashable, Iterable, Optional

from matchfinder.elo.constants import MODIFIER_DEFAULTS
from matchfinder.elo.rounding import round_half_up
from matchfinder.elo.types import (
    MatchForCalculation,
    ModifierDetail,
    ModifierKind,
    ModifiersResult,
)

_MODIFIER_COLORS = {
    ModifierKind.NEW_OPPONENT: "text-blue-600",
    ModifierKind.REPETITION: "text-orange-600",
    ModifierKind.UPSET: "text-purple-600",
    ModifierKind.WEEKLY_DIVERSITY: "text-green-600",
}

_MODIFIER_ICONS = {
    ModifierKind.NEW_OPPONENT: "🎯",
    ModifierKind.REPETITION: "🔄",
    ModifierKind.UPSET: "🏆",
    ModifierKind.WEEKLY_DIVERSITY: "🌟",
}


def to_utc_naive(moment: datetime) -> datetime:
    """Compare everything as naive UTC; naive inputs are assumed to be UTC."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def _cutoff(now: datetime, days: int) -> datetime:
    return to_utc_naive(now) - timedelta(days=days)


def _played_since(match: MatchForCalculation, cutoff: datetime) -> bool:
    return to_utc_naive(match.played_at) >= cutoff


def _new_opponent_bonus(
    opponent_id: Hashable,
    history: list[MatchForCalculation],
) -> Optional[ModifierDetail]:
    if any(match.opponent_id == opponent_id for match in history):
        return None

    return ModifierDetail(
        kind=ModifierKind.NEW_OPPONENT,
        value=MODIFIER_DEFAULTS["new_opponent_bonus"],
        description="New opponent bonus (+15%)",
    )


def _repetition_penalty(
    opponent_id: Hashable,
    history: list[MatchForCalculation],
    now: datetime,
) -> Optional[ModifierDetail]:
    cutoff = _cutoff(now, MODIFIER_DEFAULTS["repetition_window_days"])
    recent = sum(
        1 for match in history
        if match.opponent_id == opponent_id and _played_since(match, cutoff)
    )
    if recent == 0:
        return None

    value = max(
        MODIFIER_DEFAULTS["repetition_min_modifier"],
        1 - recent * MODIFIER_DEFAULTS["repetition_penalty_per_match"],
    )
    if value >= 1:
        return None

    percent = int(round_half_up((1 - value) * 100))
    plural = "es" if recent > 1 else ""
    return ModifierDetail(
        kind=ModifierKind.REPETITION,
        value=value,
        description=f"Repeat opponent penalty (-{percent}%, {recent} recent match{plural})",
    )


def _upset_bonus(
    player_rating: int,
    opponent_rating: int,
    is_winner: bool,
) -> Optional[ModifierDetail]:
    if not is_winner:
        return None

    gap = opponent_rating - player_rating
    if gap < MODIFIER_DEFAULTS["upset_rating_threshold"]:
        return None

    return ModifierDetail(
        kind=ModifierKind.UPSET,
        value=MODIFIER_DEFAULTS["upset_bonus"],
        description=f"Upset bonus (+20%, win against +{gap} rating)",
    )


def _weekly_diversity_bonus(
    history: list[MatchForCalculation],
    now: datetime,
) -> Optional[ModifierDetail]:
    cutoff = _cutoff(now, MODIFIER_DEFAULTS["weekly_window_days"])
    opponents = {match.opponent_id for match in history if _played_since(match, cutoff)}

    if len(opponents) < MODIFIER_DEFAULTS["weekly_diversity_min_opponents"]:
        return None

    return ModifierDetail(
        kind=ModifierKind.WEEKLY_DIVERSITY,
        value=MODIFIER_DEFAULTS["weekly_diversity_bonus"],
        description=f"Weekly diversity bonus (+10%, {len(opponents)} opponents this week)",
    )


def calculate_modifiers(
    player_rating: int,
    opponent_id: Hashable,
    opponent_rating: int,
    history: Iterable[MatchForCalculation],
    is_winner: bool,
    now: Optional[datetime] = None,
) -> ModifiersResult:
    """
    Compute every gameplay modifier for one player in one match.

    Args:
        player_rating: This player's rating before the match
        opponent_id: Id of the opponent in this match
        opponent_rating: Opponent's rating before the match
        history: This player's recent matches (this match excluded)
        is_winner: Whether this player won; the upset bonus needs it
        now: Reference time for the 7/30-day windows. Defaults to current UTC.

    Returns:
        ModifiersResult, total 1.0 with no details when nothing applies

    Example:
        # 1200 beats a brand new 1400 opponent: new opponent x upset
        result = calculate_modifiers(1200, "opp", 1400, [], True)
        result.total_modifier  # 1.38
    """
    history = list(history)
    if now is None:
        now = datetime.now(timezone.utc)

    details: list[ModifierDetail] = []

    new_opponent = _new_opponent_bonus(opponent_id, history)
    if new_opponent:
        details.append(new_opponent)
    else:
        repetition = _repetition_penalty(opponent_id, history, now)
        if repetition:
            details.append(repetition)

    upset = _upset_bonus(player_rating, opponent_rating, is_winner)
    if upset:
        details.append(upset)

    diversity = _weekly_diversity_bonus(history, now)
    if diversity:
        details.append(diversity)

    total = 1.0
    for detail in details:
        total *= detail.value

    return ModifiersResult(
        total_modifier=round_half_up(total, 2),
        details=tuple(details),
    )


def format_modifiers(modifiers: ModifiersResult) -> str:
    """One-line summary of the applied modifiers for the match breakdown."""
    if not modifiers.details:
        return "No modifiers applied"
    return ", ".join(d.description for d in modifiers.details)


def get_modifier_color(kind: ModifierKind | str) -> str:
    try:
        return _MODIFIER_COLORS[ModifierKind(kind)]
    except ValueError:
        return "text-gray-600"


def get_modifier_icon(kind: ModifierKind | str) -> str:
    try:
        return _MODIFIER_ICONS[ModifierKind(kind)]
    except ValueError:
        return "📊"
