"""
Unit tests for score parser.

Tests the various ways members type scores:
- Regular sets: "6-4 6-3"
- Comma separated: "6-4, 6-3"
- Tiebreak annotations: "7-6(5)"
- Match tiebreaks: "10-8" or "[10-8]"
- Garbage: never raises
"""

import pytest

from matchfinder.elo.types import MatchFormat
from matchfinder.parsers.score import (
    infer_format_from_score,
    is_valid_super_tiebreak_score,
    parse_score_for_games,
    tokenize_score,
)


class TestTokenizeScore:
    """Tests for tokenize_score."""

    def test_space_separated(self):
        assert tokenize_score("6-4 6-3") == ["6-4", "6-3"]

    def test_comma_separated(self):
        assert tokenize_score("6-4,6-3") == ["6-4", "6-3"]
        assert tokenize_score("6-4, 6-3") == ["6-4", "6-3"]

    def test_brackets_dropped(self):
        assert tokenize_score("6-4 3-6 [10-8]") == ["6-4", "3-6", "10-8"]

    def test_chunks_without_dash_ignored(self):
        assert tokenize_score("6-4 RET") == ["6-4"]

    @pytest.mark.parametrize("score", ["", "   ", None])
    def test_empty(self, score):
        assert tokenize_score(score) == []


class TestParseScoreForGames:
    """Tests for parse_score_for_games."""

    def test_straight_sets_player1_wins(self):
        games = parse_score_for_games("6-4 6-3", "p1", "p1")

        assert games.winner_games == 12
        assert games.loser_games == 7
        assert games.margin == 5

    def test_player2_wins(self):
        """Score is written from player 1's side, so it flips."""
        games = parse_score_for_games("4-6 3-6", "p2", "p1")

        assert games.winner_games == 12
        assert games.loser_games == 7

    def test_three_sets(self):
        games = parse_score_for_games("6-4 3-6 6-2", "p1", "p1")

        assert games.winner_games == 15
        assert games.loser_games == 12

    def test_tiebreak_annotation(self):
        games = parse_score_for_games("7-6(5) 6-4", "p1", "p1")

        assert games.winner_games == 13
        assert games.loser_games == 10

    def test_malformed_tokens_contribute_zero(self):
        games = parse_score_for_games("6-4 x-3 6-", "p1", "p1")

        assert games.winner_games == 6
        assert games.loser_games == 4

    @pytest.mark.parametrize("score", ["", "not a score", "---", None])
    def test_garbage_never_raises(self, score):
        games = parse_score_for_games(score, "p1", "p1")

        assert games.winner_games == 0
        assert games.loser_games == 0

    def test_integer_ids(self):
        games = parse_score_for_games("6-1", 42, 7)

        assert games.winner_games == 1
        assert games.loser_games == 6


class TestInferFormat:
    """Tests for infer_format_from_score."""

    @pytest.mark.parametrize(
        "score, expected",
        [
            ("6-4 6-3", MatchFormat.TWO_SETS),
            ("10-7", MatchFormat.SUPER_TIEBREAK_ONLY),
            ("6-4 3-6 10-8", MatchFormat.TWO_SETS_SUPER_TIEBREAK),
            ("6-4 3-6 6-2", MatchFormat.THREE_SETS),
            ("6-4", MatchFormat.ONE_SET),
            ("7-6(4)", MatchFormat.ONE_SET),
            ("6-4, 3-6, [11-9]", MatchFormat.TWO_SETS_SUPER_TIEBREAK),
        ],
    )
    def test_examples(self, score, expected):
        assert infer_format_from_score(score) == expected

    @pytest.mark.parametrize("score", ["10-2", "10-7", "7-10", "11-9", "15-13"])
    def test_one_token_reaching_ten_is_a_tiebreak(self, score):
        """Only a match tiebreak reaches 10, whatever the margin."""
        assert infer_format_from_score(score) == MatchFormat.SUPER_TIEBREAK_ONLY

    def test_decider_reaching_ten_is_a_tiebreak(self):
        assert infer_format_from_score("6-4 3-6 10-5") == MatchFormat.TWO_SETS_SUPER_TIEBREAK

    def test_decider_not_a_tiebreak(self):
        assert infer_format_from_score("6-4 3-6 12-10") == MatchFormat.TWO_SETS_SUPER_TIEBREAK
        assert infer_format_from_score("6-4 3-6 7-5") == MatchFormat.THREE_SETS

    @pytest.mark.parametrize("score", ["", "abc", "6-4 6-3 6-2 6-1", "6-4 4-6 6-4 4-6 6-4"])
    def test_fallback_two_sets(self, score):
        assert infer_format_from_score(score) == MatchFormat.TWO_SETS

    def test_malformed_single_token(self):
        assert infer_format_from_score("ten-seven") == MatchFormat.ONE_SET


class TestSuperTiebreakValidation:
    """Tests for is_valid_super_tiebreak_score."""

    @pytest.mark.parametrize("score", ["10-8", "8-10", "10-0", "11-9", "15-13", "12-5"])
    def test_valid(self, score):
        assert is_valid_super_tiebreak_score(score)

    @pytest.mark.parametrize(
        "score",
        ["10-9", "9-7", "11-10", "12-11", "10-10", "6-4", "", "abc", "10-8 6-4"],
    )
    def test_invalid(self, score):
        assert not is_valid_super_tiebreak_score(score)
