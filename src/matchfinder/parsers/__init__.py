"""
Parsers for user-entered match data.

This module contains parsers for:
- Score parsing (games per side, match format inference)
"""

from matchfinder.parsers.score import (
    infer_format_from_score,
    is_valid_super_tiebreak_score,
    parse_score_for_games,
    tokenize_score,
)

__all__ = [
    "infer_format_from_score",
    "is_valid_super_tiebreak_score",
    "parse_score_for_games",
    "tokenize_score",
]
