"""Random Tournament Generator (RTG) - seeded tournaments for testing.

This module builds rosters, runs the scheduler and simulates scores so that
tests and benchmarks can exercise the whole engine on realistic data.
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

import argparse
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from courtpairing.constants import DEFAULT_POINTS_PER_MATCH
from courtpairing.models.enums import Gender, TournamentFormat
from courtpairing.models.match import Match
from courtpairing.models.player import Player
from courtpairing.models.tournament import Tournament, TournamentSettings
from courtpairing.scheduling.americano_scheduler import (
    AmericanoScheduler,
    SchedulerConfig,
)
from courtpairing.tournament.result_recorder import ResultRecorder
from courtpairing.tournament.round_manager import RoundManager
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)

MAX_SKILL = 5


class SkillDistribution(Enum):
    """Skill distribution patterns for generated rosters."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    CLUB = "club"


class ResultPattern(Enum):
    """Score generation patterns for simulated matches."""

    REALISTIC = "realistic"
    BALANCED = "balanced"
    RANDOM = "random"


@dataclass
class RTGConfig:
    """Configuration for Random Tournament Generator."""

    num_players: int
    courts_count: int = 2
    format: TournamentFormat = TournamentFormat.AMERICANO
    points_per_match: int = DEFAULT_POINTS_PER_MATCH
    skill_distribution: SkillDistribution = SkillDistribution.NORMAL
    result_pattern: ResultPattern = ResultPattern.REALISTIC
    seed: Optional[int] = None
    candidate_count: int = 10
    completion_rate: float = 1.0


class PlayerFactory:
    """Factory for creating tournament rosters."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def create_players(self) -> List[Player]:
        """Create players based on configuration.

        Mixed rosters alternate male and female so the counts stay equal for
        an even ``num_players``.
        """
        players = []
        for i in range(self.config.num_players):
            gender = self._generate_gender(i)
            players.append(
                Player(
                    name=f"{gender.short_name}-{i + 1:03d}",
                    gender=gender,
                    skill_rating=self._generate_skill(),
                    id=f"player-{i + 1:03d}",
                )
            )

        logger.info(
            f"Created {len(players)} players with "
            f"{self.config.skill_distribution.value} distribution"
        )
        return players

    def _generate_gender(self, index: int) -> Gender:
        if self.config.format == TournamentFormat.SAME_SEX_MALE:
            return Gender.MALE
        if self.config.format == TournamentFormat.SAME_SEX_FEMALE:
            return Gender.FEMALE
        return Gender.MALE if index % 2 == 0 else Gender.FEMALE

    def _generate_skill(self) -> int:
        if self.config.skill_distribution == SkillDistribution.UNIFORM:
            return self.random.randint(1, MAX_SKILL)
        if self.config.skill_distribution == SkillDistribution.CLUB:
            return self.random.choice([2, 3, 3, 3, 4])
        skill = round(self.random.gauss(3, 1))
        return max(1, min(MAX_SKILL, skill))


class ResultSimulator:
    """Simulates match scores that add up to the points per match."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.random = (
            random.Random(config.seed) if config.seed is not None else random.Random()
        )

    def simulate_match_score(
        self, team_a_skill: int, team_b_skill: int
    ) -> Tuple[int, int]:
        """Return team A score and team B score."""
        total = self.config.points_per_match
        if self.config.result_pattern == ResultPattern.RANDOM:
            score_a = self.random.randint(0, total)
            return score_a, total - score_a

        if self.config.result_pattern == ResultPattern.BALANCED:
            share = 0.5
        else:
            # Each skill point of difference shifts the expected share by 4%
            share = 0.5 + (team_a_skill - team_b_skill) * 0.04

        share = max(0.1, min(0.9, self.random.gauss(share, 0.12)))
        score_a = max(0, min(total, round(total * share)))
        return score_a, total - score_a


class RandomTournamentGenerator:
    """Main tournament generator orchestrating roster, schedule and results."""

    def __init__(self, config: RTGConfig):
        self.config = config
        self.player_factory = PlayerFactory(config)
        self.result_simulator = ResultSimulator(config)
        scheduler = AmericanoScheduler(
            SchedulerConfig(candidate_count=config.candidate_count)
        )
        self.round_manager = RoundManager(scheduler)
        self.result_recorder = ResultRecorder()

    def generate_complete_tournament(self) -> Tournament:
        """Generate a started tournament with simulated scores.

        ``completion_rate`` is the share of matches that receive a score, in
        schedule order.
        """
        logger.info(
            f"Generating tournament: {self.config.num_players} players, "
            f"{self.config.courts_count} courts"
        )
        players = self.player_factory.create_players()
        settings = TournamentSettings(
            courts_count=self.config.courts_count,
            points_per_match=self.config.points_per_match,
        )
        tournament = self.round_manager.create_scheduled_tournament(
            name=f"RTG {self.config.num_players}p",
            players=players,
            settings=settings,
            format=self.config.format,
            seed=self.config.seed,
        )
        self.round_manager.start_tournament(tournament)

        skills = {p.id: p.skill_rating for p in players}
        matches = [m for r in tournament.rounds for m in r.matches]
        to_score = int(len(matches) * self.config.completion_rate)
        for match in matches[:to_score]:
            score_a, score_b = self.result_simulator.simulate_match_score(
                *self._team_skills(match, skills)
            )
            self.result_recorder.update_match_score(
                tournament, match.id, score_a, score_b
            )

        logger.info("Tournament generation complete")
        return tournament

    @staticmethod
    def _team_skills(match: Match, skills: Dict[str, int]) -> Tuple[int, int]:
        return (
            sum(skills[pid] for pid in match.team_a.player_ids),
            sum(skills[pid] for pid in match.team_b.player_ids),
        )


def create_small_tournament(
    num_players: int = 8, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create small open tournament for testing."""
    config = RTGConfig(num_players=num_players, courts_count=2, seed=seed)
    return RandomTournamentGenerator(config)


def create_mixed_tournament(
    num_players: int = 12, seed: Optional[int] = None
) -> RandomTournamentGenerator:
    """Create mixed tournament with equal male and female counts."""
    config = RTGConfig(
        num_players=num_players,
        courts_count=2,
        format=TournamentFormat.MIXED_AMERICANO,
        seed=seed,
    )
    return RandomTournamentGenerator(config)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Random Tournament Generator (RTG)")
    parser.add_argument("--players", type=int, default=12, help="Number of players")
    parser.add_argument("--courts", type=int, default=2, help="Number of courts")
    parser.add_argument(
        "--format",
        choices=[f.value for f in TournamentFormat],
        default=TournamentFormat.AMERICANO.value,
    )
    parser.add_argument("--points", type=int, default=DEFAULT_POINTS_PER_MATCH)
    parser.add_argument("--candidates", type=int, default=50)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    generator = RandomTournamentGenerator(
        RTGConfig(
            num_players=args.players,
            courts_count=args.courts,
            format=TournamentFormat(args.format),
            points_per_match=args.points,
            candidate_count=args.candidates,
            seed=args.seed,
        )
    )
    result = generator.generate_complete_tournament()
    names = {p.id: p.name for p in result.players}
    print(f"{result.name}: {result.total_rounds} rounds, seed {result.seed}")
    for rank, standing in enumerate(result.leaderboard, start=1):
        print(
            f"{rank:>3}. {names[standing.player_id]:<8} "
            f"{standing.points_total:>4} pts  {standing.wins}W {standing.losses}L  "
            f"diff {standing.points_differential:+d}"
        )
