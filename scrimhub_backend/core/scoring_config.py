# scrimhub_backend/core/scoring_config.py

from typing import Dict

# 🏆 Placement points awarded per match (Free Fire scrim standard)
# Any placement not listed here (0, 11th and below) earns nothing.
PLACEMENT_POINTS: Dict[int, int] = {
    1: 12,   # Booyah
    2: 9,
    3: 8,
    4: 7,
    5: 6,
    6: 5,
    7: 4,
    8: 3,
    9: 2,
    10: 1,
}

# Placement that counts as a Booyah
BOOYAH_PLACEMENT = 1

# ============================
# 📌 LEADERBOARD DISPLAY
# ============================
# Label shown for players without a current team
FREE_AGENT_LABEL = "Free Agent"

# Decimal places for averages shown on leaderboards and stats pages
AVERAGE_DECIMALS = 2
AVG_PLACEMENT_DECIMALS = 1

# ============================
# 📌 TEAM JOIN CODES
# ============================
JOIN_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
JOIN_CODE_LENGTH = 6
