#!/usr/bin/env python3
"""
Preview what a match would do to two players' ratings.

Both outcomes (no history, first meeting):
    python scripts/preview_match.py --rating1 1200 --rating2 1400

With experience and recent meetings against each other:
    python scripts/preview_match.py --rating1 1650 --matches1 42 \\
        --rating2 1580 --matches2 12 --recent-meetings 2

Format-weighted breakdown for an entered score (player 1 won):
    python scripts/preview_match.py --rating1 1200 --rating2 1250 --score "6-4 3-6 10-8"
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path so this script can be run directly
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from matchfinder.config import get_settings
from matchfinder.elo import (
    EloChangeResult,
    InvalidInputError,
    MatchForCalculation,
    PlayerForCalculation,
    calculate_elo_change,
    format_elo_delta,
    format_modifiers,
    get_elo_rank_title,
    simulate_match,
)
from matchfinder.elo.types import EloCalculationParams
from matchfinder.logging_setup import configure_logging
from matchfinder.parsers import infer_format_from_score, parse_score_for_games

logger = logging.getLogger(__name__)

PLAYER1_ID = "player-1"
PLAYER2_ID = "player-2"


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Preview rating changes for a match between two players.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--rating1", type=int, default=settings.default_rating, help="Player 1 rating.")
    parser.add_argument("--rating2", type=int, default=settings.default_rating, help="Player 2 rating.")
    parser.add_argument("--matches1", type=int, default=0, help="Player 1 completed matches.")
    parser.add_argument("--matches2", type=int, default=0, help="Player 2 completed matches.")
    parser.add_argument(
        "--recent-meetings",
        type=int,
        default=0,
        help=(
            "Meetings between the two players, one every three days. "
            "Meetings older than MATCHFINDER_HISTORY_WINDOW_DAYS are not loaded."
        ),
    )
    parser.add_argument(
        "--score",
        default=None,
        help="Score from player 1's side, e.g. '6-4 6-3'. Prints the format-weighted breakdown.",
    )
    return parser


def _meeting_history(
    opponent_id: str,
    meetings: int,
    now: datetime,
    window_days: int,
) -> list[MatchForCalculation]:
    """Synthesise meetings one every three days, keeping only the loaded window."""
    history = []
    for i in range(meetings):
        days_ago = 3 * (i + 1)
        if days_ago > window_days:
            break
        history.append(MatchForCalculation(
            opponent_id=opponent_id,
            played_at=now - timedelta(days=days_ago),
            winner_id=opponent_id,
        ))
    return history


def _print_side(label: str, change: EloChangeResult) -> None:
    rank = get_elo_rank_title(change.rating_after)
    print(
        f"  {label:<8} {change.rating_before} -> {change.rating_after} "
        f"({format_elo_delta(change.delta)})  K={change.k_factor}  "
        f"{rank.icon} {rank.title}"
    )
    print(f"           {format_modifiers(change.modifiers)}")


def main() -> int:
    configure_logging()
    args = _build_parser().parse_args()
    if args.recent_meetings < 0:
        print("ERROR: --recent-meetings cannot be negative")
        return 1
    now = datetime.now(timezone.utc)
    window_days = get_settings().history_window_days

    player1 = PlayerForCalculation(PLAYER1_ID, args.rating1, args.matches1)
    player2 = PlayerForCalculation(PLAYER2_ID, args.rating2, args.matches2)

    try:
        preview = simulate_match(
            player1,
            player2,
            _meeting_history(PLAYER2_ID, args.recent_meetings, now, window_days),
            _meeting_history(PLAYER1_ID, args.recent_meetings, now, window_days),
            now=now,
        )
    except InvalidInputError as exc:
        print(f"ERROR: {exc}")
        return 1

    print(f"Player 1 win probability: {preview.player1_win_probability:.1%}")
    print("If player 1 wins:")
    _print_side("player 1", preview.if_player1_wins.winner)
    _print_side("player 2", preview.if_player1_wins.loser)
    print("If player 2 wins:")
    _print_side("player 2", preview.if_player2_wins.winner)
    _print_side("player 1", preview.if_player2_wins.loser)

    if args.score:
        match_format = infer_format_from_score(args.score)
        games = parse_score_for_games(args.score, PLAYER1_ID, PLAYER1_ID)
        logger.info("Score %r read as %s (%s-%s)", args.score, match_format.value,
                    games.winner_games, games.loser_games)

        result = calculate_elo_change(
            EloCalculationParams(
                winner_rating=args.rating1,
                loser_rating=args.rating2,
                winner_match_count=args.matches1,
                loser_match_count=args.matches2,
                match_format=match_format,
                winner_games=games.winner_games,
                loser_games=games.loser_games,
                is_new_opponent=args.recent_meetings == 0,
                recent_matches_vs_same_opponent=args.recent_meetings,
            )
        )
        b = result.breakdown
        print(f"Format-weighted ({b.format_label}, {b.margin_label}):")
        print(f"  K={b.k_factor} ({b.k_factor_label})  win prob={b.win_probability}%")
        print(f"  format x{b.format_coefficient}  margin x{b.margin_modifier}  "
              f"new opp x{b.new_opponent_bonus}  upset x{b.upset_bonus}  "
              f"repeat x{b.repetition_malus}")
        print(f"  winner {format_elo_delta(result.winner_delta)}  "
              f"loser {format_elo_delta(result.loser_delta)}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
