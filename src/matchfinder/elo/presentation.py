"""Display helpers for ratings: delta text, rank titles and trends."""

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Sequence

from matchfinder.elo.constants import RANK_TIERS, TREND_THRESHOLD, TREND_WINDOW_DAYS
from matchfinder.elo.modifiers import to_utc_naive
from matchfinder.elo.types import RankTitle


def format_elo_delta(delta: int) -> str:
    """'+12' for gains, '-8' for losses, '0' for no change."""
    if delta > 0:
        return f"+{delta}"
    return str(delta)


def get_elo_delta_color(delta: int) -> str:
    if delta > 0:
        return "text-green-600"
    if delta < 0:
        return "text-red-600"
    return "text-gray-600"


def get_elo_rank_title(rating: int) -> RankTitle:
    """Rank title shown next to a player's rating."""
    for minimum, title, color, icon in RANK_TIERS:
        if rating >= minimum:
            return RankTitle(title=title, color=color, icon=icon)
    _, title, color, icon = RANK_TIERS[-1]
    return RankTitle(title=title, color=color, icon=icon)


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def _classify(movement: float) -> str:
    if movement > TREND_THRESHOLD:
        return "up"
    if movement < -TREND_THRESHOLD:
        return "down"
    return "stable"


def calculate_elo_trend(
    history: Sequence[Any],
    days: int = TREND_WINDOW_DAYS,
    now: Optional[datetime] = None,
) -> str:
    """
    Classify recent rating movement as 'up', 'down' or 'stable'.

    Accepts two shapes of history (mappings or objects):
    - Rating-history rows with a ``delta``: the deltas are summed
    - Matches with ``played_at`` and ``rating_after``: the first and last
      rating inside the last ``days`` days are compared (needs 2+ matches)

    A net move of more than 10 points either way counts as a trend.
    """
    if not history:
        return "stable"

    first = history[0]
    if _field(first, "delta") is not None and _field(first, "played_at") is None:
        return _classify(sum(_field(entry, "delta") for entry in history))

    if now is None:
        now = datetime.now(timezone.utc)
    cutoff = to_utc_naive(now) - timedelta(days=days)

    recent = [
        entry for entry in history
        if _field(entry, "played_at") is not None
        and to_utc_naive(_field(entry, "played_at")) >= cutoff
    ]
    if len(recent) < 2:
        return "stable"

    recent.sort(key=lambda entry: to_utc_naive(_field(entry, "played_at")))
    movement = _field(recent[-1], "rating_after") - _field(recent[0], "rating_after")
    return _classify(movement)

