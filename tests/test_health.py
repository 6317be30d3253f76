from courtpairing.models import (
    HealthLevel,
    Match,
    MatchStatus,
    Player,
    Round,
    RoundStatus,
    Team,
    Tournament,
    TournamentStatus,
)
from courtpairing.tournament import (
    TournamentHealthService,
    can_end_tournament,
    compute_health,
    get_end_warnings,
)
from courtpairing.tournament.result_recorder import ResultRecorder


def _tournament(rounds_count=5, completed=0, extra_players=0):
    players = [Player(name=f"P{i}", id=f"p{i}") for i in range(8 + extra_players)]
    rounds = []
    for index in range(rounds_count):
        rounds.append(
            Round(
                index=index,
                matches=[
                    Match(index, 0, Team("p0", "p1"), Team("p2", "p3")),
                    Match(index, 1, Team("p4", "p5"), Team("p6", "p7")),
                ],
            )
        )

    remaining = completed
    for round_data in rounds:
        for match in round_data.matches:
            if remaining == 0:
                break
            match.score_a, match.score_b = 14, 10
            match.status = MatchStatus.COMPLETED
            remaining -= 1
        ResultRecorder.derive_round_status(round_data)

    return Tournament(
        name="Health check",
        status=TournamentStatus.IN_PROGRESS,
        players=players,
        rounds=rounds,
    )


def test_six_of_ten_is_moderate():
    health = compute_health(_tournament(completed=6))

    assert health.scheduled_matches == 10
    assert health.completed_matches == 6
    assert health.completion_percentage == 60.0
    assert health.health_level == HealthLevel.MODERATE
    assert health.incomplete_matches == 4


def test_current_round_is_first_with_unfinished_match():
    health = compute_health(_tournament(completed=5))

    assert health.current_round_index == 2
    assert health.incomplete_matches_in_current_round == 1
    assert health.completed_rounds == 2
    assert health.rounds_with_incomplete_matches == 3
    assert not health.is_current_round_complete


def test_fully_complete_tournament():
    health = compute_health(_tournament(completed=10))

    assert health.is_fully_complete
    assert health.health_level == HealthLevel.COMPLETE
    assert health.current_round_index == 4
    assert health.incomplete_matches_in_current_round == 0
    assert health.completed_rounds == 5


def test_health_levels_by_threshold():
    assert compute_health(_tournament(completed=8)).health_level == HealthLevel.GOOD
    assert compute_health(_tournament(completed=5)).health_level == HealthLevel.MODERATE
    assert compute_health(_tournament(completed=4)).health_level == HealthLevel.LOW


def test_bye_placeholder_matches_count_as_done():
    tournament = _tournament(completed=0)
    tournament.rounds[0].matches[0].status = MatchStatus.BYE

    health = compute_health(tournament)
    assert health.completed_matches == 1
    assert health.incomplete_matches_in_current_round == 1


def test_empty_schedule():
    tournament = _tournament(rounds_count=0)
    health = compute_health(tournament)

    assert health.current_round_index == -1
    assert health.completion_percentage == 0.0
    assert health.health_level == HealthLevel.LOW
    assert not can_end_tournament(tournament)


def test_players_without_match_detected():
    health = compute_health(_tournament(extra_players=2))
    assert health.players_without_match == 2


def test_end_warnings():
    warnings = get_end_warnings(_tournament(completed=4))

    assert warnings == [
        "6 matches are incomplete and will not count",
        "2 matches in current round are unfinished",
        "Less than 50% of matches completed",
    ]


def test_no_warnings_when_complete():
    tournament = _tournament(completed=10)
    assert get_end_warnings(tournament) == []
    assert TournamentHealthService().can_end_tournament(tournament)


def test_summary_text():
    summary = compute_health(_tournament(completed=5)).to_summary()

    assert "Completed: 5 / 10 matches" in summary
    assert "Completion: 50.0%" in summary
    assert "Incomplete in current round: 1" in summary
    assert "Rounds: 2 / 5 completed" in summary


def test_round_status_stays_authoritative_for_completed_rounds():
    tournament = _tournament(completed=2)
    tournament.rounds[0].status = RoundStatus.IN_PROGRESS

    health = compute_health(tournament)
    assert health.completed_rounds == 0
    assert health.current_round_index == 1
