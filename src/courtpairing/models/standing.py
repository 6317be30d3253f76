"""Per-player standings and the winner summary."""

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
from typing import Any, Dict, Iterable, List, Mapping, Optional

from courtpairing.utils import format_datetime, parse_datetime


@dataclass
class PlayerStanding:
    """Aggregate results of one player.

    Standings are derived data. They are rebuilt from the rounds by the
    standings calculator and never patched from outside it.

    Attributes:
        player_id: Player the standing belongs to
        points_total: Sum of points scored by the player's teams
        matches_played: Completed matches the player took part in
        wins: Matches won outright
        losses: Matches lost outright (draws count as neither)
        points_for: Points scored
        points_against: Points conceded
        bye_count: Rounds sat out
    """

    player_id: str
    points_total: int = 0
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    points_for: int = 0
    points_against: int = 0
    bye_count: int = 0

    @property
    def points_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def average_points_per_match(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.points_total / self.matches_played

    def add_match_result(self, points_scored: int, points_conceded: int) -> None:
        """Credit one completed match to this standing."""
        self.points_total += points_scored
        self.matches_played += 1
        self.points_for += points_scored
        self.points_against += points_conceded
        if points_scored > points_conceded:
            self.wins += 1
        elif points_scored < points_conceded:
            self.losses += 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "points_total": self.points_total,
            "matches_played": self.matches_played,
            "wins": self.wins,
            "losses": self.losses,
            "points_for": self.points_for,
            "points_against": self.points_against,
            "bye_count": self.bye_count,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerStanding":
        return cls(
            player_id=data["player_id"],
            points_total=data.get("points_total", 0),
            matches_played=data.get("matches_played", 0),
            wins=data.get("wins", 0),
            losses=data.get("losses", 0),
            points_for=data.get("points_for", 0),
            points_against=data.get("points_against", 0),
            bye_count=data.get("bye_count", 0),
        )


def rank_standings(
    standings: Iterable[PlayerStanding], player_names: Mapping[str, str]
) -> List[PlayerStanding]:
    """Sort standings into leaderboard order.

    Order: total points desc, wins desc, point differential desc, player
    name asc. The player id breaks any remaining tie so the order is total.

    Args:
        standings: Standings to rank
        player_names: Player id -> display name

    Returns:
        A new, ranked list
    """

    def key(standing: PlayerStanding):
        return (
            -standing.points_total,
            -standing.wins,
            -standing.points_differential,
            player_names.get(standing.player_id, ""),
            standing.player_id,
        )

    return sorted(standings, key=key)


@dataclass
class WinnerSummary:
    """Podium of a finished tournament.

    The mixed-format fields name the best ranked male and female player,
    wherever they sit in the overall ranking.
    """

    overall_winner_player_id: Optional[str] = None
    top3_player_ids: List[str] = field(default_factory=list)
    mixed_top_male_player_id: Optional[str] = None
    mixed_top_female_player_id: Optional[str] = None
    finalized_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_winner_player_id": self.overall_winner_player_id,
            "top3_player_ids": list(self.top3_player_ids),
            "mixed_top_male_player_id": self.mixed_top_male_player_id,
            "mixed_top_female_player_id": self.mixed_top_female_player_id,
            "finalized_at": format_datetime(self.finalized_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WinnerSummary":
        return cls(
            overall_winner_player_id=data.get("overall_winner_player_id"),
            top3_player_ids=list(data.get("top3_player_ids", [])),
            mixed_top_male_player_id=data.get("mixed_top_male_player_id"),
            mixed_top_female_player_id=data.get("mixed_top_female_player_id"),
            finalized_at=parse_datetime(data.get("finalized_at")),
        )
