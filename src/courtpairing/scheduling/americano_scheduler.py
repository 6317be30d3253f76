"""Americano schedule generation with fairness optimization.

The scheduler builds many independent candidate schedules from derived seeds
and keeps the one with the lowest fairness cost. Two candidate generators
exist: a windowed greedy search for open and same-sex formats, and a circle
method rotation for mixed (one male + one female per team) formats.
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

import random
import time
import uuid
from dataclasses import dataclass, field
from itertools import combinations, islice
from typing import Any, Dict, List, Optional, Sequence, Tuple

from courtpairing.constants import (
    BYE_WEIGHT,
    COURT_WEIGHT,
    DEFAULT_CANDIDATE_COUNT,
    DEFAULT_SEARCH_WINDOW,
    MIN_PLAYERS,
    MIN_ROUNDS,
    OPPONENT_WEIGHT,
    PARTNER_WEIGHT,
    PLAYERS_PER_MATCH,
)
from courtpairing.exceptions import (
    GenerationFailedException,
    InsufficientPlayersException,
    InvalidConfigurationException,
    InvalidRosterException,
)
from courtpairing.models.enums import Gender, TournamentFormat
from courtpairing.models.match import Bye, Match, Round, Team
from courtpairing.models.player import Player
from courtpairing.scheduling.pairing_tracker import PairingTracker
from courtpairing.type_hints import PlayerIds
from courtpairing.utils import setup_logger
from courtpairing.utils.validation import validate_courts_count

logger = setup_logger(__name__)


@dataclass
class SchedulerConfig:
    """Tunable parameters of the candidate search.

    Attributes:
        candidate_count: Independent candidate schedules to build
        partner_weight: Cost of a repeated partnership
        opponent_weight: Cost of a repeated opponent meeting
        court_weight: Cost of reusing the same court
        bye_weight: Cost of uneven byes
        search_window: Players considered when filling one court
    """

    candidate_count: int = DEFAULT_CANDIDATE_COUNT
    partner_weight: float = PARTNER_WEIGHT
    opponent_weight: float = OPPONENT_WEIGHT
    court_weight: float = COURT_WEIGHT
    bye_weight: float = BYE_WEIGHT
    search_window: int = DEFAULT_SEARCH_WINDOW

    def validate(self) -> None:
        """Raise InvalidConfigurationException for unusable values."""
        if self.candidate_count < 1:
            raise InvalidConfigurationException(
                f"candidate_count must be at least 1 (got {self.candidate_count})"
            )
        if self.search_window < PLAYERS_PER_MATCH:
            raise InvalidConfigurationException(
                f"search_window must be at least {PLAYERS_PER_MATCH} "
                f"(got {self.search_window})"
            )
        for name in ("partner_weight", "opponent_weight", "court_weight", "bye_weight"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationException(f"{name} must not be negative")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidate_count": self.candidate_count,
            "partner_weight": self.partner_weight,
            "opponent_weight": self.opponent_weight,
            "court_weight": self.court_weight,
            "bye_weight": self.bye_weight,
            "search_window": self.search_window,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchedulerConfig":
        return cls(
            candidate_count=data.get("candidate_count", DEFAULT_CANDIDATE_COUNT),
            partner_weight=data.get("partner_weight", PARTNER_WEIGHT),
            opponent_weight=data.get("opponent_weight", OPPONENT_WEIGHT),
            court_weight=data.get("court_weight", COURT_WEIGHT),
            bye_weight=data.get("bye_weight", BYE_WEIGHT),
            search_window=data.get("search_window", DEFAULT_SEARCH_WINDOW),
        )


@dataclass
class ScheduleStats:
    """Raw fairness statistics of a finished schedule."""

    partner_repeat_count: int
    opponent_repeat_count: int
    court_variance: float
    bye_variance: float
    total_matches: int
    total_rounds: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "partner_repeat_count": self.partner_repeat_count,
            "opponent_repeat_count": self.opponent_repeat_count,
            "court_variance": self.court_variance,
            "bye_variance": self.bye_variance,
            "total_matches": self.total_matches,
            "total_rounds": self.total_rounds,
        }

    def __str__(self) -> str:
        return (
            f"Stats(partners: {self.partner_repeat_count}, "
            f"opponents: {self.opponent_repeat_count}, "
            f"courtVar: {self.court_variance:.2f}, byeVar: {self.bye_variance:.2f})"
        )


@dataclass
class ScheduleResult:
    """The chosen schedule together with the seed that reproduces it."""

    rounds: List[Round]
    seed: int
    score: float
    stats: ScheduleStats = field(repr=False)


class AmericanoScheduler:
    """Generates fair Americano schedules by randomized restarts.

    Every candidate owns a ``random.Random`` seeded with ``base_seed + i``
    and its own ``PairingTracker``; nothing is shared between candidates.
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()
        self.config.validate()

    # ========== Public API ==========

    def generate_schedule(
        self,
        players: Sequence[Player],
        courts_count: int,
        format: TournamentFormat = TournamentFormat.AMERICANO,
        seed: Optional[int] = None,
        num_rounds: Optional[int] = None,
    ) -> ScheduleResult:
        """Generate the lowest cost schedule over all candidates.

        Args:
            players: Roster; inactive players are ignored
            courts_count: Courts available per round
            format: Tournament format, selects the candidate generator
            seed: Base seed; defaults to the current epoch milliseconds
            num_rounds: Explicit round count instead of the derived one

        Returns:
            ScheduleResult with the best candidate and its own seed

        Raises:
            InsufficientPlayersException: Fewer than four active players
            InvalidRosterException: Mixed roster without equal genders
            InvalidConfigurationException: Courts or rounds below one
            GenerationFailedException: A candidate broke a schedule invariant
        """
        active = [p for p in players if p.is_active]
        validate_courts_count(courts_count)
        if num_rounds is not None and num_rounds < 1:
            raise InvalidConfigurationException(
                f"num_rounds must be at least 1 (got {num_rounds})"
            )
        if len(active) < MIN_PLAYERS:
            raise InsufficientPlayersException(len(active))
        if format.is_mixed:
            self._check_mixed_roster(active)

        base_seed = seed if seed is not None else int(time.time() * 1000)
        logger.info(
            f"Generating {format.value} schedule: {len(active)} players, "
            f"{courts_count} courts, {self.config.candidate_count} candidates, "
            f"base seed {base_seed}"
        )

        best: Optional[ScheduleResult] = None
        for i in range(self.config.candidate_count):
            candidate = self.generate_candidate(
                active, courts_count, format, base_seed + i, num_rounds
            )
            logger.debug(
                f"Candidate {i} (seed {candidate.seed}): "
                f"score {candidate.score:.2f} {candidate.stats}"
            )
            if best is None or candidate.score < best.score:
                best = candidate

        if best is None:
            raise GenerationFailedException("No candidate schedule was produced")

        self.verify_schedule(best.rounds, active, format)
        logger.info(
            f"Selected schedule seed {best.seed} with score {best.score:.2f} {best.stats}"
        )
        return best

    def generate_candidate(
        self,
        players: Sequence[Player],
        courts_count: int,
        format: TournamentFormat,
        seed: int,
        num_rounds: Optional[int] = None,
    ) -> ScheduleResult:
        """Build one candidate schedule from a single seed.

        ``players`` must already be filtered to active players.
        """
        rng = random.Random(seed)
        if format.is_mixed:
            males = [p.id for p in players if p.gender == Gender.MALE]
            females = [p.id for p in players if p.gender == Gender.FEMALE]
            tracker, rounds = self._mixed_candidate(
                males, females, courts_count, rng, num_rounds
            )
        else:
            tracker, rounds = self._open_candidate(
                [p.id for p in players], courts_count, rng, num_rounds
            )

        stats = self.calculate_stats(tracker, rounds)
        return ScheduleResult(
            rounds=rounds, seed=seed, score=self.calculate_score(stats), stats=stats
        )

    @staticmethod
    def open_round_count(player_count: int) -> int:
        """Rounds for the open format: close to ``n - 1``, capped at ``n // 2 + 2``."""
        return max(min(player_count - 1, player_count // 2 + 2), MIN_ROUNDS)

    @staticmethod
    def mixed_round_count(male_count: int) -> int:
        """One full circle method cycle over the rotating males."""
        return male_count - 1 if male_count > 1 else 1

    # ========== Open / same-sex ==========

    def _open_candidate(
        self,
        player_ids: PlayerIds,
        courts_count: int,
        rng: random.Random,
        num_rounds: Optional[int],
    ) -> Tuple[PairingTracker, List[Round]]:
        tracker = PairingTracker(player_ids)
        total_rounds = num_rounds or self.open_round_count(len(player_ids))
        players_per_round = min(PLAYERS_PER_MATCH * courts_count, len(player_ids))

        order = list(player_ids)
        rounds = []
        for round_index in range(total_rounds):
            rng.shuffle(order)
            # Players who sat out more often go first
            order.sort(key=lambda pid: -tracker.bye_count[pid])

            available = order[:players_per_round]
            resting = order[players_per_round:]

            matches = []
            for court_index in range(len(available) // PLAYERS_PER_MATCH):
                team_a, team_b = self._select_best_match(
                    available, court_index, tracker, rng
                )
                match = Match(
                    round_index=round_index,
                    court_index=court_index,
                    team_a=team_a,
                    team_b=team_b,
                    id=_match_id(rng),
                )
                tracker.record_match(match)
                matches.append(match)
                taken = set(match.all_player_ids)
                available = [pid for pid in available if pid not in taken]

            resting.extend(available)
            rounds.append(self._close_round(round_index, matches, resting, tracker))

        return tracker, rounds

    def _select_best_match(
        self,
        available: PlayerIds,
        court_index: int,
        tracker: PairingTracker,
        rng: random.Random,
    ) -> Tuple[Team, Team]:
        """Find the cheapest match among a shuffled window of available players.

        Every pair of disjoint teams inside the window is a candidate match.
        Teams are visited in order of a lower bound on any match they take
        part in, so the search stops once no remaining pair can beat the
        best match found. Bounds are never negative, so a match of cost 0
        ends the search immediately.
        """
        shuffled = list(available)
        rng.shuffle(shuffled)
        window = shuffled[: self.config.search_window]
        if len(window) < PLAYERS_PER_MATCH:
            raise GenerationFailedException(
                f"Not enough players for a match on court {court_index}"
            )

        teams, cross = self._window_costs(window, court_index, tracker)

        best_cost = float("inf")
        best = None
        for pos, (bound_a, own_a, a1, a2) in enumerate(teams):
            # Every later pair has both bounds at least bound_a
            if 2 * bound_a >= best_cost:
                break
            cross_a1 = cross[a1]
            cross_a2 = cross[a2]
            for bound_b, own_b, b1, b2 in islice(teams, pos + 1, None):
                if bound_a + bound_b >= best_cost:
                    break
                if b1 == a1 or b1 == a2 or b2 == a1 or b2 == a2:
                    continue
                cost = (
                    own_a
                    + own_b
                    + cross_a1[b1]
                    + cross_a1[b2]
                    + cross_a2[b1]
                    + cross_a2[b2]
                )
                if cost < best_cost:
                    best_cost = cost
                    best = (a1, a2, b1, b2)

        a1, a2, b1, b2 = best
        return Team(window[a1], window[a2]), Team(window[b1], window[b2])

    def _window_costs(
        self, window: PlayerIds, court_index: int, tracker: PairingTracker
    ) -> Tuple[List[Tuple[float, float, int, int]], List[List[float]]]:
        """Weighted costs of every team and every opponent pair in the window.

        Returns ``(teams, cross)``. Each team is ``(bound, own, i, j)`` with
        window positions ``i < j``; ``own`` is its partner and court cost and
        ``bound`` adds the cheapest opponent cost of each member. ``teams`` is
        sorted by bound. ``cross[i][j]`` is the cost of ``i`` facing ``j``.

        A match costs ``own_a + own_b`` plus its four cross entries, and the
        four cross entries sum to at least the members' cheapest opponent
        costs, so ``bound_a + bound_b`` never exceeds the match cost.
        """
        partner_weight = self.config.partner_weight
        # Opponent meetings are counted from both sides
        opponent_weight = 2 * self.config.opponent_weight
        court_weight = self.config.court_weight

        size = len(window)
        court_costs = [
            court_weight * tracker.court_count[pid].get(court_index, 0)
            for pid in window
        ]
        cross = [[0.0] * size for _ in range(size)]
        pairs = []
        for i, pid in enumerate(window):
            opponents = tracker.opponent_count[pid]
            partners = tracker.partner_count[pid]
            row = cross[i]
            row[i] = float("inf")
            court_i = court_costs[i]
            for j in range(i + 1, size):
                other = window[j]
                row[j] = cross[j][i] = opponent_weight * opponents.get(other, 0)
                own = court_i + court_costs[j] + partner_weight * partners.get(other, 0)
                pairs.append((own, i, j))

        floor = [min(row) for row in cross]
        teams = sorted((own + floor[i] + floor[j], own, i, j) for own, i, j in pairs)
        return teams, cross

    # ========== Mixed ==========

    def _mixed_candidate(
        self,
        male_ids: PlayerIds,
        female_ids: PlayerIds,
        courts_count: int,
        rng: random.Random,
        num_rounds: Optional[int],
    ) -> Tuple[PairingTracker, List[Round]]:
        tracker = PairingTracker(male_ids + female_ids)
        pair_count = len(male_ids)
        teams_per_round = min(2 * courts_count, pair_count)
        matches_per_round = teams_per_round // 2
        total_rounds = num_rounds or self.mixed_round_count(pair_count)

        fixed_male = male_ids[0]
        rotating_males = list(male_ids[1:])
        rotating_females = list(female_ids)

        rounds = []
        for round_index in range(total_rounds):
            current_males = [fixed_male] + rotating_males
            teams = self._form_mixed_teams(
                current_males[:teams_per_round], rotating_females, tracker, rng
            )

            rng.shuffle(teams)
            teams.sort(key=tracker.team_partner_score)

            matches = []
            for court_index in range(matches_per_round):
                pair = self._select_best_team_pair(teams, tracker)
                if pair is None:
                    break
                team_a, team_b = pair
                teams.remove(team_a)
                teams.remove(team_b)
                match = Match(
                    round_index=round_index,
                    court_index=court_index,
                    team_a=team_a,
                    team_b=team_b,
                    id=_match_id(rng),
                )
                tracker.record_match(match)
                matches.append(match)

            playing = {pid for m in matches for pid in m.all_player_ids}
            resting = [pid for pid in male_ids + female_ids if pid not in playing]
            rounds.append(self._close_round(round_index, matches, resting, tracker))

            # Circle method: rotate both rings by one position
            if rotating_males:
                rotating_males.insert(0, rotating_males.pop())
            if rotating_females:
                rotating_females.insert(0, rotating_females.pop())

        return tracker, rounds

    @staticmethod
    def _form_mixed_teams(
        males: PlayerIds,
        females: PlayerIds,
        tracker: PairingTracker,
        rng: random.Random,
    ) -> List[Team]:
        """Give each playing male the least-partnered remaining female.

        Females who sat out more often are preferred on ties.
        """
        remaining = list(females)
        rng.shuffle(remaining)
        teams = []
        for male_id in males:
            female_id = min(
                remaining,
                key=lambda fid: (tracker.partners(male_id, fid), -tracker.bye_count[fid]),
            )
            remaining.remove(female_id)
            teams.append(Team(male_id, female_id))
        return teams

    @staticmethod
    def _select_best_team_pair(
        teams: List[Team], tracker: PairingTracker
    ) -> Optional[Tuple[Team, Team]]:
        best_score = float("inf")
        best = None
        for team_a, team_b in combinations(teams, 2):
            score = tracker.opponent_score(team_a, team_b)
            if score < best_score:
                best_score = score
                best = (team_a, team_b)
        return best

    # ========== Shared helpers ==========

    @staticmethod
    def _close_round(
        round_index: int,
        matches: List[Match],
        resting: PlayerIds,
        tracker: PairingTracker,
    ) -> Round:
        for pid in resting:
            tracker.record_bye(pid)
        byes = [Bye(player_id=pid, round_index=round_index) for pid in resting]
        return Round(index=round_index, matches=matches, byes=byes)

    @staticmethod
    def _check_mixed_roster(active: Sequence[Player]) -> None:
        males = sum(1 for p in active if p.gender == Gender.MALE)
        females = sum(1 for p in active if p.gender == Gender.FEMALE)
        unspecified = len(active) - males - females
        if unspecified:
            raise InvalidRosterException(
                InvalidRosterException.UNSPECIFIED_GENDER, males, females, unspecified
            )
        if males == 0 or females == 0:
            raise InvalidRosterException(
                InvalidRosterException.MISSING_GENDER, males, females
            )
        if males != females:
            raise InvalidRosterException(
                InvalidRosterException.UNEQUAL_GENDER_COUNTS, males, females
            )

    def calculate_stats(
        self, tracker: PairingTracker, rounds: List[Round]
    ) -> ScheduleStats:
        return ScheduleStats(
            partner_repeat_count=tracker.partner_repeat_count(),
            opponent_repeat_count=tracker.opponent_repeat_count(),
            court_variance=tracker.court_variance(),
            bye_variance=tracker.bye_variance(),
            total_matches=sum(len(r.matches) for r in rounds),
            total_rounds=len(rounds),
        )

    def calculate_score(self, stats: ScheduleStats) -> float:
        """Weighted fairness cost; lower is better."""
        return (
            stats.partner_repeat_count * self.config.partner_weight
            + stats.opponent_repeat_count * self.config.opponent_weight
            + stats.court_variance * self.config.court_weight
            + stats.bye_variance * self.config.bye_weight
        )

    @staticmethod
    def verify_schedule(
        rounds: List[Round], players: Sequence[Player], format: TournamentFormat
    ) -> None:
        """Check the schedule invariants, raising GenerationFailedException."""
        active_ids = {p.id for p in players if p.is_active}
        genders = {p.id: p.gender for p in players}

        for round_data in rounds:
            seen: List[str] = []
            for match in round_data.matches:
                seen.extend(match.all_player_ids)
                if format.is_mixed:
                    for team in (match.team_a, match.team_b):
                        team_genders = {genders.get(pid) for pid in team.player_ids}
                        if team_genders != {Gender.MALE, Gender.FEMALE}:
                            raise GenerationFailedException(
                                f"Round {round_data.index}: team {team} "
                                "is not one male and one female"
                            )
            seen.extend(b.player_id for b in round_data.byes)

            if len(seen) != len(set(seen)) or set(seen) != active_ids:
                raise GenerationFailedException(
                    f"Round {round_data.index} does not place every active "
                    "player exactly once"
                )

            courts = sorted(m.court_index for m in round_data.matches)
            if courts != list(range(len(round_data.matches))):
                raise GenerationFailedException(
                    f"Round {round_data.index} uses non-contiguous courts {courts}"
                )


def _match_id(rng: random.Random) -> str:
    """Match id drawn from the candidate's own random stream."""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_schedule(
    players: Sequence[Player],
    courts_count: int,
    format: TournamentFormat = TournamentFormat.AMERICANO,
    seed: Optional[int] = None,
    num_rounds: Optional[int] = None,
    config: Optional[SchedulerConfig] = None,
) -> ScheduleResult:
    """Generate a schedule with a default or given scheduler configuration."""
    return AmericanoScheduler(config).generate_schedule(
        players, courts_count, format, seed=seed, num_rounds=num_rounds
    )
