"""
Match format weighting and margin of victory.

Not every result says the same amount about the two players:
- 1 set = high variance, the better player loses one set easily
- 2 sets = the standard amateur format, a reliable signal
- 3 sets = a full match, maximum impact
- Match tiebreak only = close to a coin flip, minimal impact

The margin modifier separates a 6-0 6-1 from a 7-6 7-5. For a match
tiebreak the margin is measured in points instead of games.

Neither value is applied by calculate_match_elo(). The caller composes them
explicitly with the gameplay modifiers:

    modifier = gameplay.total_modifier * format_coefficient * margin_modifier

See compose_match_modifier().
"""

from typing import Optional

from matchfinder.elo.types import InvalidInputError, MatchFormat

# Format -> (coefficient, label, description)
FORMAT_TABLE: dict[MatchFormat, tuple[float, str, str]] = {
    MatchFormat.ONE_SET: (0.5, "1 set", "Quick match, lunch break"),
    MatchFormat.TWO_SETS: (0.8, "2 sets", "Standard amateur format"),
    MatchFormat.TWO_SETS_SUPER_TIEBREAK: (
        0.85,
        "2 sets + super tiebreak",
        "Third set played as a 10-point tiebreak",
    ),
    MatchFormat.THREE_SETS: (1.0, "3 sets", "Full match, tournaments"),
    MatchFormat.SUPER_TIEBREAK_ONLY: (0.3, "Super tiebreak", "Single 10-point tiebreak"),
}

FORMAT_COEFFICIENTS = {fmt: row[0] for fmt, row in FORMAT_TABLE.items()}
FORMAT_LABELS = {fmt: row[1] for fmt, row in FORMAT_TABLE.items()}
FORMAT_DESCRIPTIONS = {fmt: row[2] for fmt, row in FORMAT_TABLE.items()}


def is_valid_match_format(value: object) -> bool:
    """True if value is a MatchFormat or one of its stored string values."""
    if isinstance(value, MatchFormat):
        return True
    return value in {fmt.value for fmt in MatchFormat}


def coerce_match_format(value: MatchFormat | str) -> MatchFormat:
    """
    Turn a stored format string into a MatchFormat.

    Raises:
        InvalidInputError: If the value is not a known format
    """
    if not is_valid_match_format(value):
        raise InvalidInputError(f"Unknown match format: {value!r}")
    return MatchFormat(value)


def get_format_coefficient(match_format: MatchFormat | str) -> float:
    return FORMAT_COEFFICIENTS[coerce_match_format(match_format)]


def get_format_label(match_format: MatchFormat | str) -> str:
    return FORMAT_LABELS[coerce_match_format(match_format)]


def get_format_description(match_format: MatchFormat | str) -> str:
    return FORMAT_DESCRIPTIONS[coerce_match_format(match_format)]


def get_margin_modifier(
    winner_units: int,
    loser_units: int,
    match_format: Optional[MatchFormat | str] = None,
) -> float:
    """
    Multiplier for how convincing the win was.

    Args:
        winner_units: Games won by the winner (points for a match tiebreak)
        loser_units: Games won by the loser (points for a match tiebreak)
        match_format: Format of the match. Only the match tiebreak format
                      changes the scale; None means set-based.

    Returns:
        Modifier between 0.90 and 1.15

    Examples:
        get_margin_modifier(12, 2)   # 6-1 6-1 -> 1.15
        get_margin_modifier(12, 7)   # 6-4 6-3 -> 1.05
        get_margin_modifier(7, 6)    # 7-6 -> 0.90
        get_margin_modifier(6, 4)    # 6-4 -> 1.0
        get_margin_modifier(10, 8, MatchFormat.SUPER_TIEBREAK_ONLY)  # -> 0.95
    """
    margin = winner_units - loser_units

    if match_format is not None and coerce_match_format(match_format) == MatchFormat.SUPER_TIEBREAK_ONLY:
        # Point-based: 10-4 is dominant, 10-8 or 11-9 is a toss-up
        if margin >= 5:
            return 1.10
        if margin >= 3:
            return 1.05
        if margin <= 2:
            return 0.95
        return 1.0

    if margin >= 5:
        return 1.15  # 6-1, 6-0
    if margin >= 3:
        return 1.05  # 6-3, 6-2
    if margin <= 1:
        return 0.90  # 7-6, 7-5
    return 1.0  # 6-4


def get_margin_label(modifier: float) -> str:
    if modifier >= 1.15:
        return "Dominant win"
    if modifier >= 1.05:
        return "Clear win"
    if modifier <= 0.95:
        return "Tight match"
    return "Standard"


def compose_match_modifier(
    gameplay_modifier: float,
    match_format: MatchFormat | str,
    margin_modifier: float = 1.0,
) -> float:
    """
    Combine gameplay, format and margin multipliers into one modifier.

    The result is what a caller passes as ``modifier`` to
    calculate_new_rating() when it wants format weighting. It is kept out
    of calculate_match_elo() so each factor stays independently testable.
    """
    if gameplay_modifier <= 0 or margin_modifier <= 0:
        raise InvalidInputError("modifiers must be positive")
    return gameplay_modifier * get_format_coefficient(match_format) * margin_modifier
