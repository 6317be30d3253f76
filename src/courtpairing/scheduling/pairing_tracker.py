"""Pairing history bookkeeping for a single candidate schedule."""

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

import statistics
from typing import Iterable, List

from courtpairing.models.match import Match, Team
from courtpairing.type_hints import CourtCounts, PairCounts


class PairingTracker:
    """Tracks partner, opponent, court and bye counts while a schedule is built.

    Every candidate schedule owns one tracker. Counts are symmetric:
    ``partner_count[a][b] == partner_count[b][a]``.

    Attributes:
        partner_count: Times two players shared a team
        opponent_count: Times two players faced each other
        court_count: Matches each player played on each court
        bye_count: Rounds each player sat out
    """

    def __init__(self, player_ids: Iterable[str]):
        ids = list(player_ids)
        self.partner_count: PairCounts = {pid: {} for pid in ids}
        self.opponent_count: PairCounts = {pid: {} for pid in ids}
        self.court_count: CourtCounts = {pid: {} for pid in ids}
        self.bye_count = {pid: 0 for pid in ids}

    # ========== Lookups ==========

    def partners(self, player1_id: str, player2_id: str) -> int:
        """Times the two players were partners."""
        return self.partner_count[player1_id].get(player2_id, 0)

    def team_partner_score(self, team: Team) -> int:
        return self.partners(team.player1_id, team.player2_id)

    def opponent_score(self, team_a: Team, team_b: Team) -> int:
        """Earlier meetings between the two teams, counted from both sides."""
        score = 0
        for a_id in team_a.player_ids:
            row = self.opponent_count[a_id]
            for b_id in team_b.player_ids:
                score += 2 * row.get(b_id, 0)
        return score

    # ========== Updates ==========

    def record_match(self, match: Match) -> None:
        """Update every count for a newly scheduled match."""
        for team in (match.team_a, match.team_b):
            self._increment(self.partner_count, team.player1_id, team.player2_id)

        for a_id in match.team_a.player_ids:
            for b_id in match.team_b.player_ids:
                self._increment(self.opponent_count, a_id, b_id)

        for pid in match.all_player_ids:
            courts = self.court_count[pid]
            courts[match.court_index] = courts.get(match.court_index, 0) + 1

    def record_bye(self, player_id: str) -> None:
        self.bye_count[player_id] += 1

    @staticmethod
    def _increment(counts: PairCounts, first: str, second: str) -> None:
        counts[first][second] = counts[first].get(second, 0) + 1
        counts[second][first] = counts[second].get(first, 0) + 1

    # ========== Statistics ==========

    @staticmethod
    def _repeat_count(counts: PairCounts) -> int:
        # Each unordered pair appears twice in the symmetric map
        repeats = sum(
            count - 1
            for row in counts.values()
            for count in row.values()
            if count > 1
        )
        return repeats // 2

    def partner_repeat_count(self) -> int:
        return self._repeat_count(self.partner_count)

    def opponent_repeat_count(self) -> int:
        return self._repeat_count(self.opponent_count)

    def court_variance(self) -> float:
        """Population variance of the per-player per-court usage counts."""
        return _population_variance(
            [count for row in self.court_count.values() for count in row.values()]
        )

    def bye_variance(self) -> float:
        """Population variance of the per-player bye counts."""
        return _population_variance(list(self.bye_count.values()))


def _population_variance(values: List[int]) -> float:
    if not values:
        return 0.0
    return float(statistics.pvariance(values))
