"""Tournament settings and the tournament aggregate.

The tournament is a snapshot handed to the engine by its caller. Score entry
mutates matches and rounds in place; standings are always rebuilt.
"""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from courtpairing.constants import (
    DEFAULT_CHANGEOVER_MINUTES,
    DEFAULT_COURTS_COUNT,
    DEFAULT_MATCH_DURATION_MINUTES,
    DEFAULT_MATCH_MINUTES_ESTIMATE,
    DEFAULT_POINTS_PER_MATCH,
    MIN_PLAYERS,
)
from courtpairing.models.enums import (
    Gender,
    RoundStatus,
    TournamentFormat,
    TournamentMode,
    TournamentStatus,
)
from courtpairing.models.match import Match, Round
from courtpairing.models.player import Player, generate_id
from courtpairing.models.standing import PlayerStanding, WinnerSummary, rank_standings
from courtpairing.utils import format_datetime, parse_datetime


@dataclass
class TournamentSettings:
    """Configuration settings for a tournament.

    Attributes
    ----------
    courts_count : int
        Courts available; at most one match per court per round.
    points_per_match : int
        Fixed total every completed match must add up to.
    match_duration_minutes : int
        Nominal match length shown to players.
    mode : TournamentMode
        Planning strategy.
    planned_rounds : int or None
        Round count when ``mode`` is rounds-planned.
    total_minutes : int or None
        Time budget when ``mode`` is time-planned.
    match_minutes_estimate : int
        Estimated playing time of one match.
    changeover_minutes : int
        Time between matches on a court.
    recommended_serves_per_player : int or None
        Output of the time advisor, if it was consulted.
    recommended_total_points_per_match : int or None
        Output of the time advisor, if it was consulted.
    lock_total_points : bool
        Score entry completes the opposing score automatically.
    allow_edits_after_end : bool
        Scores may still change after the tournament is completed.
    """

    courts_count: int = DEFAULT_COURTS_COUNT
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    match_duration_minutes: int = DEFAULT_MATCH_DURATION_MINUTES
    mode: TournamentMode = TournamentMode.OPEN_ENDED
    planned_rounds: Optional[int] = None
    total_minutes: Optional[int] = None
    match_minutes_estimate: int = DEFAULT_MATCH_MINUTES_ESTIMATE
    changeover_minutes: int = DEFAULT_CHANGEOVER_MINUTES
    recommended_serves_per_player: Optional[int] = None
    recommended_total_points_per_match: Optional[int] = None
    lock_total_points: bool = True
    allow_edits_after_end: bool = False

    @property
    def effective_match_duration(self) -> int:
        """Match duration including changeover."""
        return self.match_minutes_estimate + self.changeover_minutes

    def to_dict(self) -> Dict[str, Any]:
        """Serialize settings to dictionary."""
        return {
            "courts_count": self.courts_count,
            "points_per_match": self.points_per_match,
            "match_duration_minutes": self.match_duration_minutes,
            "mode": self.mode.value,
            "planned_rounds": self.planned_rounds,
            "total_minutes": self.total_minutes,
            "match_minutes_estimate": self.match_minutes_estimate,
            "changeover_minutes": self.changeover_minutes,
            "recommended_serves_per_player": self.recommended_serves_per_player,
            "recommended_total_points_per_match": self.recommended_total_points_per_match,
            "lock_total_points": self.lock_total_points,
            "allow_edits_after_end": self.allow_edits_after_end,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSettings":
        """Deserialize settings from dictionary."""
        return cls(
            courts_count=data.get("courts_count", DEFAULT_COURTS_COUNT),
            points_per_match=data.get("points_per_match", DEFAULT_POINTS_PER_MATCH),
            match_duration_minutes=data.get(
                "match_duration_minutes", DEFAULT_MATCH_DURATION_MINUTES
            ),
            mode=TournamentMode(data.get("mode", TournamentMode.OPEN_ENDED.value)),
            planned_rounds=data.get("planned_rounds"),
            total_minutes=data.get("total_minutes"),
            match_minutes_estimate=data.get(
                "match_minutes_estimate", DEFAULT_MATCH_MINUTES_ESTIMATE
            ),
            changeover_minutes=data.get(
                "changeover_minutes", DEFAULT_CHANGEOVER_MINUTES
            ),
            recommended_serves_per_player=data.get("recommended_serves_per_player"),
            recommended_total_points_per_match=data.get(
                "recommended_total_points_per_match"
            ),
            lock_total_points=data.get("lock_total_points", True),
            allow_edits_after_end=data.get("allow_edits_after_end", False),
        )


@dataclass
class Tournament:
    """A tournament snapshot: roster, schedule, results and derived standings."""

    name: str
    event_date: date = field(default_factory=date.today)
    format: TournamentFormat = TournamentFormat.AMERICANO
    status: TournamentStatus = TournamentStatus.DRAFT
    settings: TournamentSettings = field(default_factory=TournamentSettings)
    players: List[Player] = field(default_factory=list)
    rounds: List[Round] = field(default_factory=list)
    standings: List[PlayerStanding] = field(default_factory=list)
    winner_summary: Optional[WinnerSummary] = None
    seed: Optional[int] = None
    id: str = field(default_factory=generate_id)
    created_by: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    # ========== Roster ==========

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def active_players(self) -> List[Player]:
        return [p for p in self.players if p.is_active]

    @property
    def active_player_count(self) -> int:
        return len(self.active_players)

    @property
    def male_players(self) -> List[Player]:
        return [p for p in self.active_players if p.gender == Gender.MALE]

    @property
    def female_players(self) -> List[Player]:
        return [p for p in self.active_players if p.gender == Gender.FEMALE]

    @property
    def is_valid_mixed_setup(self) -> bool:
        """Mixed format needs equal, non-zero male and female counts."""
        if not self.format.is_mixed:
            return True
        males = len(self.male_players)
        return males > 0 and males == len(self.female_players)

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    # ========== Settings shortcuts ==========

    @property
    def courts_count(self) -> int:
        return self.settings.courts_count

    @property
    def points_per_match(self) -> int:
        return self.settings.points_per_match

    # ========== Schedule ==========

    @property
    def total_rounds(self) -> int:
        return len(self.rounds)

    @property
    def completed_rounds(self) -> int:
        return sum(1 for r in self.rounds if r.status == RoundStatus.COMPLETED)

    @property
    def total_scheduled_matches(self) -> int:
        return sum(len(r.matches) for r in self.rounds)

    @property
    def total_completed_matches(self) -> int:
        return sum(r.completed_matches_count for r in self.rounds)

    @property
    def current_round(self) -> Optional[Round]:
        """The round in progress, else the first pending round."""
        for wanted in (RoundStatus.IN_PROGRESS, RoundStatus.PENDING):
            for round_data in self.rounds:
                if round_data.status == wanted:
                    return round_data
        return None

    def get_match(self, match_id: str) -> Optional[Match]:
        for round_data in self.rounds:
            for match in round_data.matches:
                if match.id == match_id:
                    return match
        return None

    # ========== Lifecycle ==========

    @property
    def can_score(self) -> bool:
        if self.status == TournamentStatus.IN_PROGRESS:
            return True
        return (
            self.status == TournamentStatus.COMPLETED
            and self.settings.allow_edits_after_end
        )

    @property
    def can_start(self) -> bool:
        """Check if tournament can start (has enough players and schedule)."""
        return (
            self.status.can_start
            and bool(self.rounds)
            and self.active_player_count >= MIN_PLAYERS
        )

    # ========== Standings ==========

    def get_standing(self, player_id: str) -> Optional[PlayerStanding]:
        return next((s for s in self.standings if s.player_id == player_id), None)

    @property
    def leaderboard(self) -> List[PlayerStanding]:
        """Standings in ranking order."""
        return rank_standings(self.standings, {p.id: p.name for p in self.players})

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "event_date": self.event_date.isoformat(),
            "format": self.format.value,
            "status": self.status.value,
            "settings": self.settings.to_dict(),
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "standings": [s.to_dict() for s in self.standings],
            "winner_summary": (
                self.winner_summary.to_dict() if self.winner_summary else None
            ),
            "seed": self.seed,
            "created_by": self.created_by,
            "created_at": format_datetime(self.created_at),
            "started_at": format_datetime(self.started_at),
            "ended_at": format_datetime(self.ended_at),
            "completed_at": format_datetime(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Tournament":
        """Deserialize tournament from dictionary."""
        winner = data.get("winner_summary")
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled Tournament"),
            event_date=(
                date.fromisoformat(data["event_date"])
                if data.get("event_date")
                else date.today()
            ),
            format=TournamentFormat(data.get("format", TournamentFormat.AMERICANO.value)),
            status=TournamentStatus(data.get("status", TournamentStatus.DRAFT.value)),
            settings=TournamentSettings.from_dict(data.get("settings") or {}),
            players=[Player.from_dict(p) for p in data.get("players", [])],
            rounds=[Round.from_dict(r) for r in data.get("rounds", [])],
            standings=[PlayerStanding.from_dict(s) for s in data.get("standings", [])],
            winner_summary=WinnerSummary.from_dict(winner) if winner else None,
            seed=data.get("seed"),
            created_by=data.get("created_by"),
            created_at=parse_datetime(data.get("created_at")) or datetime.now(),
            started_at=parse_datetime(data.get("started_at")),
            ended_at=parse_datetime(data.get("ended_at")),
            completed_at=parse_datetime(data.get("completed_at")),
        )

    def __str__(self) -> str:
        return (
            f"Tournament(id: {self.id}, name: {self.name}, "
            f"players: {self.player_count}, status: {self.status.value})"
        )
