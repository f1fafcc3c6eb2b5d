"""Unit tests for match format weighting and margin of victory."""

import pytest

from matchfinder.elo.formats import (
    FORMAT_COEFFICIENTS,
    coerce_match_format,
    compose_match_modifier,
    get_format_coefficient,
    get_format_description,
    get_format_label,
    get_margin_label,
    get_margin_modifier,
    is_valid_match_format,
)
from matchfinder.elo.types import InvalidInputError, MatchFormat


class TestFormatTable:
    """Tests for the coefficient table lookups."""

    @pytest.mark.parametrize(
        "match_format, coefficient",
        [
            (MatchFormat.ONE_SET, 0.5),
            (MatchFormat.TWO_SETS, 0.8),
            (MatchFormat.TWO_SETS_SUPER_TIEBREAK, 0.85),
            (MatchFormat.THREE_SETS, 1.0),
            (MatchFormat.SUPER_TIEBREAK_ONLY, 0.3),
        ],
    )
    def test_coefficients(self, match_format, coefficient):
        assert get_format_coefficient(match_format) == coefficient

    def test_every_format_has_a_row(self):
        assert set(FORMAT_COEFFICIENTS) == set(MatchFormat)
        for match_format in MatchFormat:
            assert get_format_label(match_format)
            assert get_format_description(match_format)

    def test_string_values_accepted(self):
        assert get_format_coefficient("two_sets_super_tb") == 0.85
        assert get_format_label("three_sets") == "3 sets"

    def test_validation(self):
        assert is_valid_match_format("one_set")
        assert is_valid_match_format(MatchFormat.THREE_SETS)
        assert not is_valid_match_format("best_of_five")
        assert not is_valid_match_format(None)

    def test_coerce_unknown_raises(self):
        with pytest.raises(InvalidInputError):
            coerce_match_format("doubles")


class TestMarginModifier:
    """Tests for get_margin_modifier."""

    @pytest.mark.parametrize(
        "winner, loser, expected",
        [
            (6, 0, 1.15),   # bagel
            (12, 2, 1.15),  # 6-1 6-1
            (6, 3, 1.05),
            (12, 7, 1.15),  # 6-4 6-3, diff 5
            (6, 2, 1.05),
            (6, 4, 1.0),
            (7, 5, 1.0),
            (6, 5, 0.90),
            (7, 6, 0.90),
        ],
    )
    def test_set_based(self, winner, loser, expected):
        assert get_margin_modifier(winner, loser) == expected
        assert get_margin_modifier(winner, loser, MatchFormat.TWO_SETS) == expected

    @pytest.mark.parametrize(
        "winner, loser, expected",
        [(10, 4, 1.10), (10, 5, 1.10), (10, 6, 1.05), (10, 7, 1.05), (10, 8, 0.95), (11, 9, 0.95)],
    )
    def test_point_based_super_tiebreak(self, winner, loser, expected):
        assert get_margin_modifier(winner, loser, MatchFormat.SUPER_TIEBREAK_ONLY) == expected

    def test_range(self):
        for winner in range(0, 25):
            for loser in range(0, 25):
                assert 0.90 <= get_margin_modifier(winner, loser) <= 1.15
                assert 0.90 <= get_margin_modifier(winner, loser, "super_tiebreak") <= 1.15

    def test_labels(self):
        assert get_margin_label(1.15) == "Dominant win"
        assert get_margin_label(1.05) == "Clear win"
        assert get_margin_label(1.10) == "Clear win"
        assert get_margin_label(0.90) == "Tight match"
        assert get_margin_label(0.95) == "Tight match"
        assert get_margin_label(1.0) == "Standard"


class TestComposeMatchModifier:
    def test_explicit_product(self):
        # 1.15 gameplay x 0.8 two sets x 1.05 clear win
        assert compose_match_modifier(1.15, MatchFormat.TWO_SETS, 1.05) == pytest.approx(0.966)

    def test_default_margin(self):
        assert compose_match_modifier(1.0, "three_sets") == 1.0

    def test_non_positive_rejected(self):
        with pytest.raises(InvalidInputError):
            compose_match_modifier(0, MatchFormat.TWO_SETS)
