"""
MatchFinder - club tennis matchmaking

Rating engine for a club-based tennis matchmaking app. Members record
their matches, and every result moves both players' ratings.

Main components:
- elo: Rating engine (K-factor, expected score, gameplay modifiers,
  format weighting, presentation helpers)
- parsers: Lenient parsing of user-entered scores
- config: Settings loaded from the environment
"""

__version__ = "1.0.0"
