"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

from datetime import datetime, timedelta

import pytest

from matchfinder.elo.types import MatchForCalculation, PlayerForCalculation

# Fixed reference time so the 7/30-day windows are deterministic
NOW = datetime(2026, 3, 14, 18, 0, 0)


@pytest.fixture
def now():
    """The reference time every windowed rule is evaluated against."""
    return NOW


@pytest.fixture
def played():
    """
    Build a history entry N days before NOW.

    Usage:
        played("opp", days_ago=3)
        played("opp", days_ago=3, won=False)
    """
    def _played(opponent_id, days_ago, won=True, player_id="me"):
        return MatchForCalculation(
            opponent_id=opponent_id,
            played_at=NOW - timedelta(days=days_ago),
            winner_id=player_id if won else opponent_id,
        )

    return _played


@pytest.fixture
def intermediate_pair():
    """Two 1200 players with 20 matches each (K=32)."""
    return (
        PlayerForCalculation(id="alice", current_rating=1200, matches_played=20),
        PlayerForCalculation(id="bob", current_rating=1200, matches_played=20),
    )
