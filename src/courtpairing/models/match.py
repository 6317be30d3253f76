"""Data models for teams, matches, byes and rounds."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional, Set

from courtpairing.models.enums import MatchStatus, RoundStatus
from courtpairing.models.player import generate_id
from courtpairing.utils import format_datetime, parse_datetime


@dataclass(frozen=True)
class Team:
    """An unordered pair of player ids.

    ``Team("a", "b") == Team("b", "a")`` and both hash alike.
    """

    player1_id: str
    player2_id: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Team):
            return NotImplemented
        return {self.player1_id, self.player2_id} == {
            other.player1_id,
            other.player2_id,
        }

    def __hash__(self) -> int:
        return hash(frozenset((self.player1_id, self.player2_id)))

    @property
    def player_ids(self) -> List[str]:
        return [self.player1_id, self.player2_id]

    def contains_player(self, player_id: str) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def to_dict(self) -> Dict[str, Any]:
        return {"player1_id": self.player1_id, "player2_id": self.player2_id}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(player1_id=data["player1_id"], player2_id=data["player2_id"])


@dataclass
class Match:
    """A single match on one court in one round.

    Attributes:
        round_index: Round the match belongs to (0-indexed)
        court_index: Court the match is played on (0-indexed)
        team_a: First team
        team_b: Second team
        id: Unique match identifier
        score_a: Points of team A, ``None`` until scored
        score_b: Points of team B, ``None`` until scored
        status: Lifecycle status of the match
        started_at: When play started, if tracked
        completed_at: When the score was entered
    """

    round_index: int
    court_index: int
    team_a: Team
    team_b: Team
    id: str = field(default_factory=generate_id)
    score_a: Optional[int] = None
    score_b: Optional[int] = None
    status: MatchStatus = MatchStatus.SCHEDULED
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def all_player_ids(self) -> List[str]:
        """All four player ids, team A first."""
        return self.team_a.player_ids + self.team_b.player_ids

    def contains_player(self, player_id: str) -> bool:
        return self.team_a.contains_player(player_id) or self.team_b.contains_player(
            player_id
        )

    @property
    def is_complete(self) -> bool:
        return self.status == MatchStatus.COMPLETED

    @property
    def has_scores(self) -> bool:
        return self.score_a is not None and self.score_b is not None

    def has_valid_scores(self, points_per_match: int) -> bool:
        """Check the scores are present, non-negative and sum to the match total."""
        return (
            self.has_scores
            and self.score_a >= 0
            and self.score_b >= 0
            and self.score_a + self.score_b == points_per_match
        )

    def clear_score(self) -> None:
        """Return the match to its unplayed state."""
        self.score_a = None
        self.score_b = None
        self.status = MatchStatus.SCHEDULED
        self.completed_at = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round_index": self.round_index,
            "court_index": self.court_index,
            "team_a": self.team_a.to_dict(),
            "team_b": self.team_b.to_dict(),
            "score_a": self.score_a,
            "score_b": self.score_b,
            "status": self.status.value,
            "started_at": format_datetime(self.started_at),
            "completed_at": format_datetime(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        return cls(
            id=data["id"],
            round_index=data["round_index"],
            court_index=data["court_index"],
            team_a=Team.from_dict(data["team_a"]),
            team_b=Team.from_dict(data["team_b"]),
            score_a=data.get("score_a"),
            score_b=data.get("score_b"),
            status=MatchStatus(data.get("status", MatchStatus.SCHEDULED.value)),
            started_at=parse_datetime(data.get("started_at")),
            completed_at=parse_datetime(data.get("completed_at")),
        )

    def __str__(self) -> str:
        return (
            f"Match(round: {self.round_index}, court: {self.court_index}, "
            f"status: {self.status.value})"
        )


@dataclass(frozen=True)
class Bye:
    """A player sitting out a round."""

    player_id: str
    round_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {"player_id": self.player_id, "round_index": self.round_index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bye":
        return cls(player_id=data["player_id"], round_index=data["round_index"])


@dataclass
class Round:
    """Container for all data related to a single tournament round.

    Attributes
    ----------
    index : int
        Round number (0-indexed).
    matches : list of Match
        One match per used court, ordered by court index.
    byes : list of Bye
        Players sitting out this round.
    status : RoundStatus
        Completed exactly when every match is completed.
    started_at : datetime or None
        When the round was opened for play.
    completed_at : datetime or None
        When the last match of the round was scored.
    """

    index: int
    matches: List[Match] = field(default_factory=list)
    byes: List[Bye] = field(default_factory=list)
    status: RoundStatus = RoundStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        """Check if all matches in this round are complete."""
        return all(m.status == MatchStatus.COMPLETED for m in self.matches)

    @property
    def completed_matches_count(self) -> int:
        return sum(1 for m in self.matches if m.status == MatchStatus.COMPLETED)

    @property
    def has_unfinished_matches(self) -> bool:
        """True when a match still needs a result (byes never do)."""
        return any(not m.status.is_finished for m in self.matches)

    @property
    def playing_ids(self) -> Set[str]:
        return {pid for m in self.matches for pid in m.all_player_ids}

    @property
    def bye_ids(self) -> Set[str]:
        return {b.player_id for b in self.byes}

    def get_match_by_court(self, court_index: int) -> Optional[Match]:
        return next((m for m in self.matches if m.court_index == court_index), None)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round data to dictionary."""
        return {
            "index": self.index,
            "matches": [m.to_dict() for m in self.matches],
            "byes": [b.to_dict() for b in self.byes],
            "status": self.status.value,
            "started_at": format_datetime(self.started_at),
            "completed_at": format_datetime(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round data from dictionary."""
        return cls(
            index=data["index"],
            matches=[Match.from_dict(m) for m in data.get("matches", [])],
            byes=[Bye.from_dict(b) for b in data.get("byes", [])],
            status=RoundStatus(data.get("status", RoundStatus.PENDING.value)),
            started_at=parse_datetime(data.get("started_at")),
            completed_at=parse_datetime(data.get("completed_at")),
        )

    def __str__(self) -> str:
        return (
            f"Round(index: {self.index}, matches: {len(self.matches)}, "
            f"byes: {len(self.byes)})"
        )
