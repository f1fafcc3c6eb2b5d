"""
Score parsing for user-entered match results.

Club members type scores by hand, so they come in many shapes:
- Simple: "6-4 6-3"
- Comma separated: "6-4, 6-3"
- Tiebreak annotation: "7-6(5) 6-4"
- Match tiebreak instead of a third set: "6-4 3-6 10-8" or "6-4 3-6 [10-8]"
- Match tiebreak only: "10-7"

Parsing here is lenient on purpose. Nothing in this module raises on bad
input: a token we can't read contributes zero games, and format inference
always lands on a concrete MatchFormat.
"""

import re
from typing import Hashable, Optional

from matchfinder.elo.types import GamesTally, MatchFormat

# "6-4", optionally with a tiebreak annotation "7-6(5)" or "7-6(7-5)"
_SET_PATTERN = re.compile(r"^(\d+)-(\d+)(?:\(\d+(?:-\d+)?\))?$")

# Match tiebreaks are first to 10
SUPER_TIEBREAK_TARGET = 10


def tokenize_score(score: Optional[str]) -> list[str]:
    """
    Split a raw score into set tokens.

    A token is any whitespace/comma separated chunk containing a dash.
    Tokens are not validated here, so "6-x" is still a token (it just
    won't parse). Brackets around a match tiebreak are dropped first.

    Examples:
        >>> tokenize_score("6-4, 3-6 [10-8]")
        ['6-4', '3-6', '10-8']
    """
    if not score:
        return []

    cleaned = re.sub(r"\[([^\]]*)\]", r"\1", score)
    cleaned = cleaned.replace(",", " ")
    return [part for part in cleaned.split() if "-" in part]


def _parse_token(token: str) -> Optional[tuple[int, int]]:
    """Return (first, second) for a well-formed set token, else None."""
    match = _SET_PATTERN.match(token)
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def _looks_like_super_tiebreak(token: str) -> bool:
    """A played-to-ten tiebreak: either side reached 10. No set goes that high."""
    parsed = _parse_token(token)
    if parsed is None:
        return False
    return max(parsed) >= SUPER_TIEBREAK_TARGET


def parse_score_for_games(
    score: Optional[str],
    winner_id: Hashable,
    player1_id: Hashable,
) -> GamesTally:
    """
    Total the games each side won and orient them winner/loser.

    The score is written from player 1's point of view, so the first number
    of each set belongs to player 1.

    Args:
        score: Raw score string, e.g. "6-4 3-6 6-2"
        winner_id: Id of the player who won the match
        player1_id: Id of the player whose games are written first

    Returns:
        GamesTally with the winner's and loser's games

    Examples:
        "6-4 6-3", player 1 won  -> winner 12, loser 7
        "6-4 3-6 6-2", player 1 won -> winner 15, loser 12
    """
    player1_games = 0
    player2_games = 0

    for token in tokenize_score(score):
        parsed = _parse_token(token)
        if parsed is None:
            continue
        player1_games += parsed[0]
        player2_games += parsed[1]

    if winner_id == player1_id:
        return GamesTally(winner_games=player1_games, loser_games=player2_games)
    return GamesTally(winner_games=player2_games, loser_games=player1_games)


def infer_format_from_score(score: Optional[str]) -> MatchFormat:
    """
    Guess how a match was played from its score.

    - One token: a match tiebreak ("10-7") or a single set ("6-4")
    - Two tokens: two sets
    - Three tokens: a match tiebreak in the decider means two sets plus
      super tiebreak, otherwise a full three-setter
    - Anything else falls back to two sets, the usual club format
    """
    tokens = tokenize_score(score)

    if len(tokens) == 1:
        if _looks_like_super_tiebreak(tokens[0]):
            return MatchFormat.SUPER_TIEBREAK_ONLY
        return MatchFormat.ONE_SET

    if len(tokens) == 2:
        return MatchFormat.TWO_SETS

    if len(tokens) == 3:
        if _looks_like_super_tiebreak(tokens[2]):
            return MatchFormat.TWO_SETS_SUPER_TIEBREAK
        return MatchFormat.THREE_SETS

    return MatchFormat.TWO_SETS


def is_valid_super_tiebreak_score(score: Optional[str]) -> bool:
    """
    Check that a single "W-L" token is a finished match tiebreak.

    Valid iff the higher number is at least 10 and leads by 2 or more. A
    tiebreak that ends exactly at 10 must have stopped at 10-8 or below,
    since 10-9 would still be in progress.
    """
    tokens = tokenize_score(score)
    if len(tokens) != 1:
        return False

    parsed = _parse_token(tokens[0])
    if parsed is None:
        return False

    high, low = max(parsed), min(parsed)
    if high < SUPER_TIEBREAK_TARGET or high - low < 2:
        return False
    if high == SUPER_TIEBREAK_TARGET and low > 8:
        return False
    return True
