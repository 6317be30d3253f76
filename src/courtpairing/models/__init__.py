from courtpairing.models.enums import (
    Gender,
    HealthLevel,
    MatchStatus,
    RoundStatus,
    TournamentFormat,
    TournamentMode,
    TournamentStatus,
)
from courtpairing.models.match import Bye, Match, Round, Team
from courtpairing.models.player import Player, generate_id
from courtpairing.models.standing import PlayerStanding, WinnerSummary, rank_standings
from courtpairing.models.tournament import Tournament, TournamentSettings

__all__ = [
    "Bye",
    "Gender",
    "HealthLevel",
    "Match",
    "MatchStatus",
    "Player",
    "PlayerStanding",
    "Round",
    "RoundStatus",
    "Team",
    "Tournament",
    "TournamentFormat",
    "TournamentMode",
    "TournamentSettings",
    "TournamentStatus",
    "WinnerSummary",
    "generate_id",
    "rank_standings",
]
