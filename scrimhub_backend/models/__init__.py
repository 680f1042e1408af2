# scrimhub_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Admin
from .admin_model import Admin, AdminSession, AdminRegister, AdminLogin

# Team
from .team_model import Team, TeamCreate, TeamRead

# Player
from .player_model import (
    Player, PlayerStatus, PlayerRole, PlayerCreate, PlayerTeamUpdate, PlayerRead
)

# Scrim, participation and rosters
from .scrim_model import (
    Scrim, ScrimStatus, ScrimTeam, ScrimPlayer, ScrimCreate, ScrimRead,
    ScrimTeamAdd, ScrimTeamRead, RosterUpdate, RosterEntryRead
)

# Match and results
from .match_model import (
    Match, MatchStatus, MatchTeamStats, MatchPlayerStats, MatchRead,
    TeamResultEntry, MatchResultSubmission
)
