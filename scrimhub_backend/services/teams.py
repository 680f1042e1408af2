# teams.py
# Team registration (with join codes) and player sign-up / team changes.

import re
import secrets
from typing import Optional

from sqlmodel import Session, select

from scrimhub_backend.core.exceptions import ValidationError, NotFound
from scrimhub_backend.core.logger import setup_logger
from scrimhub_backend.core.scoring_config import JOIN_CODE_ALPHABET, JOIN_CODE_LENGTH
from scrimhub_backend.models.player_model import Player, PlayerCreate, PlayerStatus
from scrimhub_backend.models.team_model import Team, TeamCreate

logger = setup_logger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def generate_join_code(session: Session) -> str:
    """Random code from JOIN_CODE_ALPHABET that no other team uses yet."""
    while True:
        code = "".join(secrets.choice(JOIN_CODE_ALPHABET) for _ in range(JOIN_CODE_LENGTH))
        taken = session.exec(select(Team).where(Team.join_code == code)).first()
        if not taken:
            return code


# =========================================
# TEAMS
# =========================================
def create_team(session: Session, data: TeamCreate) -> Team:
    name = data.name.strip()
    if len(name) < 2:
        raise ValidationError("Team name must be at least 2 characters.")

    existing = session.exec(select(Team).where(Team.email == data.email)).first()
    if existing:
        raise ValidationError("A team with this email already exists.")

    team = Team(
        name=name,
        email=data.email,
        join_code=generate_join_code(session),
        country=data.country,
        logo_url=data.logo_url,
    )
    session.add(team)
    session.commit()
    session.refresh(team)

    logger.info(f"Registered team {team.id} '{team.name}' (join code {team.join_code})")
    return team


def get_team(session: Session, team_id: int) -> Team:
    team = session.get(Team, team_id)
    if not team:
        raise NotFound("Team", team_id)
    return team


# =========================================
# PLAYERS
# =========================================
def create_player(session: Session, data: PlayerCreate) -> Player:
    """
    Sign up a player. With a join_code the player joins that team right away
    (status pending until the team approves).
    """
    if not USERNAME_PATTERN.match(data.username):
        raise ValidationError("Username can only contain letters, numbers, underscores and hyphens.")

    if session.exec(select(Player).where(Player.username == data.username)).first():
        raise ValidationError("Username is already taken.")
    if session.exec(select(Player).where(Player.email == data.email)).first():
        raise ValidationError("A player with this email already exists.")

    team_id: Optional[int] = None
    if data.join_code:
        team = session.exec(
            select(Team).where(Team.join_code == data.join_code.strip().upper())
        ).first()
        if not team:
            raise NotFound("Team", data.join_code)
        team_id = team.id

    player = Player(
        username=data.username,
        email=data.email,
        team_id=team_id,
        status=PlayerStatus.PENDING,
        role=data.role,
        in_game_name=data.in_game_name,
        game_uid=data.game_uid,
    )
    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info(f"Registered player {player.id} '{player.username}' (team {team_id})")
    return player


def get_player(session: Session, player_id: int) -> Player:
    player = session.get(Player, player_id)
    if not player:
        raise NotFound("Player", player_id)
    return player


def set_player_team(session: Session, player_id: int, team_id: Optional[int]) -> Player:
    """Move a player to team_id, or make them a free agent with None. Past stats keep their team."""
    player = get_player(session, player_id)
    if team_id is not None:
        get_team(session, team_id)

    if team_id != player.team_id:
        # New team has to approve the player again
        player.status = PlayerStatus.PENDING
    player.team_id = team_id
    session.add(player)
    session.commit()
    session.refresh(player)

    logger.info(f"Player {player_id} moved to team {team_id}")
    return player
