"""
Value types passed into and out of the rating engine.

Everything here is immutable. The engine never mutates a player snapshot;
callers derive a new snapshot from the result and persist it themselves.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Hashable


class InvalidInputError(ValueError):
    """Raised when a caller hands the engine values it cannot rate."""
    pass


class MatchFormat(str, Enum):
    """How a match was played. Values match the stored match_format column."""
    ONE_SET = "one_set"
    TWO_SETS = "two_sets"
    TWO_SETS_SUPER_TIEBREAK = "two_sets_super_tb"
    THREE_SETS = "three_sets"
    SUPER_TIEBREAK_ONLY = "super_tiebreak"


class ModifierKind(str, Enum):
    NEW_OPPONENT = "new_opponent"
    REPETITION = "repetition"
    UPSET = "upset"
    WEEKLY_DIVERSITY = "weekly_diversity"


@dataclass(frozen=True)
class PlayerForCalculation:
    """
    Snapshot of one side of a match at calculation time.

    Attributes:
        id: Opaque player identifier
        current_rating: Rating before the match
        matches_played: Completed matches before this one
    """
    id: Hashable
    current_rating: int
    matches_played: int


@dataclass(frozen=True)
class MatchForCalculation:
    """
    One entry in a player's recent history, seen from that player's side.

    Only used for modifier lookups, so it carries no ratings.
    """
    opponent_id: Hashable
    played_at: datetime
    winner_id: Hashable


@dataclass(frozen=True)
class ModifierDetail:
    kind: ModifierKind
    value: float
    description: str


@dataclass(frozen=True)
class ModifiersResult:
    """
    Composite gameplay modifier for one player.

    Attributes:
        total_modifier: Product of every applied value, rounded to 2 decimals
        details: Applied modifiers in evaluation order
    """
    total_modifier: float = 1.0
    details: tuple[ModifierDetail, ...] = ()

    def has(self, kind: ModifierKind) -> bool:
        return any(d.kind == kind for d in self.details)


@dataclass(frozen=True)
class EloChangeResult:
    """
    Before/after rating for one player plus everything that produced it.

    The caller stores rating_after on the player and keeps the rest as the
    rating-history entry shown in the match breakdown.
    """
    rating_before: int
    rating_after: int
    k_factor: int
    expected_score: float
    actual_score: int
    modifiers: ModifiersResult = field(default_factory=ModifiersResult)

    @property
    def delta(self) -> int:
        """Rating change after clamping."""
        return self.rating_after - self.rating_before

    def __repr__(self) -> str:
        return (
            f"<EloChangeResult({self.rating_before} -> {self.rating_after}, "
            f"K={self.k_factor}, x{self.modifiers.total_modifier})>"
        )


@dataclass(frozen=True)
class MatchEloResult:
    winner: EloChangeResult
    loser: EloChangeResult


@dataclass(frozen=True)
class MatchSimulation:
    """Both hypothetical outcomes of a match that has not been played yet."""
    if_player1_wins: MatchEloResult
    if_player2_wins: MatchEloResult
    player1_win_probability: float


@dataclass(frozen=True)
class GamesTally:
    """Total games (or points for a match tiebreak) won by each side."""
    winner_games: int
    loser_games: int

    @property
    def margin(self) -> int:
        return self.winner_games - self.loser_games


@dataclass(frozen=True)
class RankTitle:
    title: str
    color: str
    icon: str


@dataclass(frozen=True)
class EloCalculationParams:
    """
    Inputs for the format-aware calculator.

    Context flags are pre-computed by the caller from its match history,
    so this path does not need the history itself.

    Attributes:
        winner_rating: Winner's rating before the match
        loser_rating: Loser's rating before the match
        winner_match_count: Winner's completed matches
        loser_match_count: Loser's completed matches
        match_format: How the match was played
        winner_games: Games (points for a match tiebreak) won by the winner
        loser_games: Games (points for a match tiebreak) won by the loser
        is_new_opponent: First meeting between the two players
        recent_matches_vs_same_opponent: Meetings in the repetition window
        weekly_unique_opponents: Distinct opponents in the last 7 days
    """
    winner_rating: int
    loser_rating: int
    winner_match_count: int
    loser_match_count: int
    match_format: MatchFormat = MatchFormat.TWO_SETS
    winner_games: int | None = None
    loser_games: int | None = None
    is_new_opponent: bool = False
    recent_matches_vs_same_opponent: int = 0
    weekly_unique_opponents: int = 0


@dataclass(frozen=True)
class EloBreakdown:
    """Every factor of a format-aware calculation, for display."""
    k_factor: int
    k_factor_label: str
    expected_score: float
    win_probability: int
    format_coefficient: float
    format_label: str
    margin_modifier: float
    margin_label: str
    new_opponent_bonus: float
    upset_bonus: float
    repetition_malus: float
    diversity_bonus: float
    raw_change: int
    final_change: int


@dataclass(frozen=True)
class EloCalculationResult:
    winner_delta: int
    loser_delta: int
    breakdown: EloBreakdown
