"""Standings, ranking and winner summaries for tournaments.

Standings are always rebuilt from the rounds. Nothing here patches a
standing incrementally, so calling the calculator twice on the same
snapshot yields identical results.
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

from datetime import datetime
from typing import Dict, List, Sequence

from courtpairing.models.enums import (
    Gender,
    MatchStatus,
    TournamentFormat,
    TournamentStatus,
)
from courtpairing.models.player import Player
from courtpairing.models.standing import PlayerStanding, WinnerSummary, rank_standings
from courtpairing.models.tournament import Tournament
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

TOP_PLACES = 3


class StandingsCalculator:
    """Calculates standings and podiums from a tournament snapshot.

    Ranking order:
    - Total points (descending)
    - Wins (descending)
    - Point differential (descending)
    - Player name (ascending)
    """

    def recalculate_standings(self, tournament: Tournament) -> List[PlayerStanding]:
        """Rebuild every player's standing from completed matches and byes.

        Args:
            tournament: Snapshot to read; it is not modified

        Returns:
            One standing per roster player, in roster order
        """
        standings: Dict[str, PlayerStanding] = {
            p.id: PlayerStanding(player_id=p.id) for p in tournament.players
        }

        for round_data in tournament.rounds:
            for match in round_data.matches:
                if match.status != MatchStatus.COMPLETED or not match.has_scores:
                    continue
                for player_id in match.team_a.player_ids:
                    if player_id in standings:
                        standings[player_id].add_match_result(
                            match.score_a, match.score_b
                        )
                for player_id in match.team_b.player_ids:
                    if player_id in standings:
                        standings[player_id].add_match_result(
                            match.score_b, match.score_a
                        )

            for bye in round_data.byes:
                if bye.player_id in standings:
                    standings[bye.player_id].bye_count += 1

        return list(standings.values())

    def sort_standings(
        self, standings: Sequence[PlayerStanding], players: Sequence[Player]
    ) -> List[PlayerStanding]:
        return rank_standings(standings, {p.id: p.name for p in players})

    def compute_winner_summary(
        self,
        players: Sequence[Player],
        standings: Sequence[PlayerStanding],
        format: TournamentFormat,
    ) -> WinnerSummary:
        """Pick the winner, the top three and, for mixed play, the best of each gender.

        Args:
            players: Roster used for names and genders
            standings: Standings in any order
            format: Tournament format

        Returns:
            WinnerSummary stamped with the current time, or an empty one
            when there are no standings
        """
        if not standings:
            return WinnerSummary()

        ranked = self.sort_standings(standings, players)
        summary = WinnerSummary(
            overall_winner_player_id=ranked[0].player_id,
            top3_player_ids=[s.player_id for s in ranked[:TOP_PLACES]],
            finalized_at=datetime.now(),
        )

        if format.is_mixed:
            genders = {p.id: p.gender for p in players}
            for standing in ranked:
                gender = genders.get(standing.player_id)
                if summary.mixed_top_male_player_id is None and gender == Gender.MALE:
                    summary.mixed_top_male_player_id = standing.player_id
                if (
                    summary.mixed_top_female_player_id is None
                    and gender == Gender.FEMALE
                ):
                    summary.mixed_top_female_player_id = standing.player_id
                if summary.mixed_top_male_player_id and summary.mixed_top_female_player_id:
                    break

        return summary

    def finalize_tournament(self, tournament: Tournament) -> Tournament:
        """Complete the tournament and store its standings and podium."""
        self._store_results(tournament)
        now = datetime.now()
        tournament.status = TournamentStatus.COMPLETED
        tournament.ended_at = now
        tournament.completed_at = now
        logger.info(
            f"Tournament {tournament.name} finalized, winner "
            f"{tournament.winner_summary.overall_winner_player_id}"
        )
        return tournament

    def refinalize_tournament(self, tournament: Tournament) -> Tournament:
        """Recompute standings and podium without touching status or timestamps."""
        self._store_results(tournament)
        logger.debug(f"Tournament {tournament.name} re-finalized")
        return tournament

    def _store_results(self, tournament: Tournament) -> None:
        tournament.standings = self.recalculate_standings(tournament)
        tournament.winner_summary = self.compute_winner_summary(
            tournament.players, tournament.standings, tournament.format
        )


_calculator = StandingsCalculator()


def recalculate_standings(tournament: Tournament) -> List[PlayerStanding]:
    return _calculator.recalculate_standings(tournament)


def sort_standings(
    standings: Sequence[PlayerStanding], players: Sequence[Player]
) -> List[PlayerStanding]:
    return _calculator.sort_standings(standings, players)


def compute_winner_summary(
    players: Sequence[Player],
    standings: Sequence[PlayerStanding],
    format: TournamentFormat,
) -> WinnerSummary:
    return _calculator.compute_winner_summary(players, standings, format)


def finalize_tournament(tournament: Tournament) -> Tournament:
    return _calculator.finalize_tournament(tournament)


def refinalize_tournament(tournament: Tournament) -> Tournament:
    return _calculator.refinalize_tournament(tournament)
