"""
Rating engine constants.

Ratings live on the classic chess-style scale: new club members start at
1200 and the logistic spread is 400 points, so a 200-point gap means the
stronger player is expected to win roughly three matches in four.

K factor: Controls rating volatility (how much ratings change per match)
  - New players move fast so their rating converges quickly
  - Established and high-rated players move slowly

Modifiers: Multipliers on top of K that reward playing many different
opponents and penalise farming the same opponent over and over.
"""

# Starting rating for a brand-new player
DEFAULT_RATING = 1200

# Hard bounds, enforced by the calculator only
MIN_RATING = 100
MAX_RATING = 3000

# Logistic spread (rating gap that gives 10:1 odds)
RATING_DIVISOR = 400

# Experience buckets for the K-factor
HIGH_RATING_THRESHOLD = 1800
NEW_PLAYER_MATCHES = 10
INTERMEDIATE_PLAYER_MATCHES = 30

# K-factor per bucket
K_FACTORS = {
    "new": 40,
    "intermediate": 32,
    "established": 24,
    "high": 16,
}

K_FACTOR_LABELS = {
    "new": "New player",
    "intermediate": "Intermediate",
    "established": "Established",
    "high": "High rating",
}

# Gameplay modifiers
MODIFIER_DEFAULTS = {
    # +15% the first time two players meet
    "new_opponent_bonus": 1.15,

    # -5% per match against the same opponent in the last 30 days, floor 70%
    "repetition_penalty_per_match": 0.05,
    "repetition_min_modifier": 0.70,
    "repetition_window_days": 30,

    # +20% for beating someone rated at least 100 points higher
    "upset_bonus": 1.20,
    "upset_rating_threshold": 100,

    # +10% for facing 3+ different opponents in the last 7 days
    "weekly_diversity_bonus": 1.10,
    "weekly_diversity_min_opponents": 3,
    "weekly_window_days": 7,
}

# Format-aware calculator: the loser gives up 80% of the winner's gain
LOSER_RATIO = 0.8

# Matches assumed for both players by the quick calculator
ESTABLISHED_MATCH_COUNT = 30

# Rank tiers, highest first. (min rating, title, colour, icon)
RANK_TIERS = (
    (2000, "Grandmaster", "text-purple-600", "👑"),
    (1800, "Expert", "text-red-600", "🏆"),
    (1600, "Advanced", "text-orange-500", "⭐"),
    (1400, "Intermediate+", "text-yellow-600", "🎯"),
    (1200, "Intermediate", "text-green-600", "🎾"),
    (1000, "Beginner+", "text-blue-600", "📈"),
    (0, "Beginner", "text-gray-600", "🌱"),
)

# Net rating movement needed before a trend counts as up or down
TREND_THRESHOLD = 10
TREND_WINDOW_DAYS = 30
