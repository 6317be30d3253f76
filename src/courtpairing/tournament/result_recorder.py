"""Score entry for tournaments.

This module records and clears match scores, keeps round status in line with
its matches, and rebuilds standings after every change.
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
from typing import Optional, Tuple

from courtpairing.exceptions import MatchNotFoundException
from courtpairing.models.enums import MatchStatus, RoundStatus, TournamentStatus
from courtpairing.models.match import Match, Round
from courtpairing.models.tournament import Tournament
from courtpairing.tournament.standings_calculator import StandingsCalculator
from courtpairing.utils import setup_logger
from courtpairing.utils.validation import validate_scores_strict

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and clearing match results.

    This class is responsible for:
    - Validating score pairs against the tournament's points per match
    - Updating match and round status
    - Rebuilding standings after every change
    - Completing the tournament once every round is done
    """

    def __init__(self, calculator: Optional[StandingsCalculator] = None):
        self.calculator = calculator or StandingsCalculator()

    def update_match_score(
        self, tournament: Tournament, match_id: str, score_a: int, score_b: int
    ) -> Tournament:
        """Record the final score of a match.

        Args:
            tournament: Tournament to update in place
            match_id: Id of the match being scored
            score_a: Points of team A
            score_b: Points of team B

        Returns:
            The updated tournament

        Raises:
            MatchNotFoundException: If no match has ``match_id``
            InvalidScoreException: If the scores are negative, not whole
                numbers, or do not sum to the points per match
        """
        round_data, match = self._find_match(tournament, match_id)
        validate_scores_strict(score_a, score_b, tournament.points_per_match)

        if not tournament.can_score:
            logger.warning(
                f"Scoring match {match_id} while tournament {tournament.name} "
                f"is {tournament.status.value}"
            )

        match.score_a = score_a
        match.score_b = score_b
        match.status = MatchStatus.COMPLETED
        match.completed_at = datetime.now()
        logger.debug(
            f"Recorded round {match.round_index} court {match.court_index}: "
            f"{score_a} - {score_b}"
        )

        self.derive_round_status(round_data)
        tournament.standings = self.calculator.recalculate_standings(tournament)

        if tournament.status == TournamentStatus.COMPLETED:
            self.calculator.refinalize_tournament(tournament)
        elif all(r.status == RoundStatus.COMPLETED for r in tournament.rounds):
            tournament.status = TournamentStatus.COMPLETED
            tournament.completed_at = datetime.now()
            tournament.winner_summary = self.calculator.compute_winner_summary(
                tournament.players, tournament.standings, tournament.format
            )
            logger.info(f"All rounds complete, tournament {tournament.name} completed")

        return tournament

    def reset_match(self, tournament: Tournament, match_id: str) -> Tournament:
        """Clear a match's score and return it to the unplayed state.

        Raises:
            MatchNotFoundException: If no match has ``match_id``
        """
        round_data, match = self._find_match(tournament, match_id)
        match.clear_score()
        logger.debug(
            f"Cleared round {match.round_index} court {match.court_index} score"
        )

        self.derive_round_status(round_data)
        tournament.standings = self.calculator.recalculate_standings(tournament)

        if (
            tournament.status == TournamentStatus.COMPLETED
            and tournament.settings.allow_edits_after_end
        ):
            self.calculator.refinalize_tournament(tournament)
        return tournament

    def reset_results_keep_schedule(self, tournament: Tournament) -> Tournament:
        """Clear every result while keeping the generated rounds."""
        for round_data in tournament.rounds:
            for match in round_data.matches:
                if match.status != MatchStatus.BYE:
                    match.clear_score()
            round_data.status = RoundStatus.PENDING
            round_data.completed_at = None

        tournament.standings = []
        tournament.winner_summary = None
        tournament.status = TournamentStatus.IN_PROGRESS
        tournament.ended_at = None
        tournament.completed_at = None
        logger.info(f"Results of tournament {tournament.name} reset")
        return tournament

    @staticmethod
    def derive_round_status(round_data: Round) -> RoundStatus:
        """Set a round's status from its matches and return it.

        Completed when every match is finished, in progress as soon as any
        match is started or scored, else pending.
        """
        if round_data.matches and not round_data.has_unfinished_matches:
            round_data.status = RoundStatus.COMPLETED
            if round_data.completed_at is None:
                round_data.completed_at = datetime.now()
            return round_data.status

        round_data.completed_at = None
        touched = any(
            m.status in (MatchStatus.COMPLETED, MatchStatus.IN_PROGRESS)
            for m in round_data.matches
        )
        if touched or round_data.started_at is not None:
            round_data.status = RoundStatus.IN_PROGRESS
        else:
            round_data.status = RoundStatus.PENDING
        return round_data.status

    @staticmethod
    def _find_match(tournament: Tournament, match_id: str) -> Tuple[Round, Match]:
        for round_data in tournament.rounds:
            for match in round_data.matches:
                if match.id == match_id:
                    return round_data, match
        raise MatchNotFoundException(f"Match {match_id} not found in tournament")


_recorder = ResultRecorder()


def update_match_score(
    tournament: Tournament, match_id: str, score_a: int, score_b: int
) -> Tournament:
    return _recorder.update_match_score(tournament, match_id, score_a, score_b)


def reset_match(tournament: Tournament, match_id: str) -> Tournament:
    return _recorder.reset_match(tournament, match_id)


def reset_results_keep_schedule(tournament: Tournament) -> Tournament:
    return _recorder.reset_results_keep_schedule(tournament)
