from datetime import date, datetime, timezone

import pytest

from courtpairing.exceptions import (
    ConfigurationException,
    CourtPairingException,
    InsufficientTimeException,
    InvalidConfigurationException,
    InvalidScoreException,
    ScoringException,
    ValidationException,
)
from courtpairing.models import (
    Bye,
    Gender,
    Match,
    MatchStatus,
    Player,
    PlayerStanding,
    Round,
    RoundStatus,
    Team,
    Tournament,
    TournamentFormat,
    TournamentMode,
    TournamentSettings,
    TournamentStatus,
    WinnerSummary,
)
from courtpairing.utils.validation import (
    auto_balance_score,
    validate_scores,
    validate_time_settings,
)


def test_team_equality_ignores_order():
    assert Team("a", "b") == Team("b", "a")
    assert hash(Team("a", "b")) == hash(Team("b", "a"))
    assert len({Team("a", "b"), Team("b", "a"), Team("a", "c")}) == 2


def test_player_identity_is_the_id():
    ana = Player(name="Ana", gender=Gender.FEMALE, id="x1")
    renamed = ana.copy_with(name="Ana Maria")

    assert renamed == ana
    assert renamed.name == "Ana Maria"
    assert ana.name == "Ana"
    assert Player(name="Ana") != Player(name="Ana")


def test_player_from_dict_tolerates_unknown_gender():
    player = Player.from_dict({"id": "p", "name": "Sam", "gender": "other"})
    assert player.gender == Gender.UNSPECIFIED
    assert player.is_active


def test_match_valid_scores():
    match = Match(0, 0, Team("a", "b"), Team("c", "d"))
    assert not match.has_valid_scores(24)

    match.score_a, match.score_b = 15, 9
    assert match.has_valid_scores(24)
    assert not match.has_valid_scores(32)

    match.status = MatchStatus.COMPLETED
    match.clear_score()
    assert match.status == MatchStatus.SCHEDULED
    assert not match.has_scores


def test_round_status_helpers():
    round_data = Round(
        index=0,
        matches=[
            Match(0, 0, Team("a", "b"), Team("c", "d")),
            Match(0, 1, Team("e", "f"), Team("g", "h"), status=MatchStatus.BYE),
        ],
        byes=[Bye("i", 0)],
    )

    assert round_data.has_unfinished_matches
    assert not round_data.is_complete
    assert round_data.playing_ids == set("abcdefgh")
    assert round_data.bye_ids == {"i"}
    assert round_data.get_match_by_court(1).status == MatchStatus.BYE
    assert round_data.get_match_by_court(2) is None


def test_standing_average_and_draws():
    standing = PlayerStanding("a")
    assert standing.average_points_per_match == 0.0

    standing.add_match_result(12, 12)
    standing.add_match_result(20, 4)
    assert standing.wins == 1
    assert standing.losses == 0
    assert standing.average_points_per_match == 16.0
    assert standing.points_differential == 16


def test_effective_match_duration():
    settings = TournamentSettings(match_minutes_estimate=12, changeover_minutes=3)
    assert settings.effective_match_duration == 15


def test_tournament_serialization_preserves_snapshot():
    started = datetime(2025, 5, 3, 18, 30)
    tournament = Tournament(
        name="Club night",
        event_date=date(2025, 5, 3),
        format=TournamentFormat.MIXED_AMERICANO,
        status=TournamentStatus.IN_PROGRESS,
        settings=TournamentSettings(
            courts_count=1, mode=TournamentMode.ROUNDS_PLANNED, planned_rounds=3
        ),
        players=[
            Player(name="Ana", gender=Gender.FEMALE, id="a"),
            Player(name="Ben", gender=Gender.MALE, id="b"),
        ],
        rounds=[
            Round(
                index=0,
                matches=[
                    Match(
                        0,
                        0,
                        Team("a", "b"),
                        Team("c", "d"),
                        id="m0",
                        score_a=14,
                        score_b=10,
                        status=MatchStatus.COMPLETED,
                    )
                ],
                status=RoundStatus.COMPLETED,
            )
        ],
        standings=[PlayerStanding("a", points_total=14, matches_played=1, wins=1)],
        winner_summary=WinnerSummary("a", ["a", "b"]),
        seed=1234,
        started_at=started,
    )

    restored = Tournament.from_dict(tournament.to_dict())

    assert restored.to_dict() == tournament.to_dict()
    assert restored.event_date == date(2025, 5, 3)
    assert restored.settings.mode == TournamentMode.ROUNDS_PLANNED
    assert restored.rounds[0].matches[0].team_a == Team("b", "a")
    assert restored.started_at == started
    assert restored.winner_summary.top3_player_ids == ["a", "b"]


def test_utc_timestamps_from_store_are_parsed():
    match = Match.from_dict(
        {
            "id": "m1",
            "round_index": 0,
            "court_index": 0,
            "team_a": {"player1_id": "a", "player2_id": "b"},
            "team_b": {"player1_id": "c", "player2_id": "d"},
            "status": "completed",
            "completed_at": "2025-05-03T19:05:00Z",
        }
    )
    assert match.completed_at == datetime(2025, 5, 3, 19, 5, tzinfo=timezone.utc)
    assert match.status == MatchStatus.COMPLETED


def test_mixed_setup_requires_balanced_genders():
    tournament = Tournament(
        name="Mixed",
        format=TournamentFormat.MIXED_AMERICANO,
        players=[
            Player(name="Ana", gender=Gender.FEMALE),
            Player(name="Ben", gender=Gender.MALE),
            Player(name="Cal", gender=Gender.MALE),
        ],
    )
    assert not tournament.is_valid_mixed_setup

    tournament.players.append(Player(name="Dee", gender=Gender.FEMALE))
    assert tournament.is_valid_mixed_setup


def test_cannot_start_without_schedule():
    tournament = Tournament(
        name="Empty", players=[Player(name=f"P{i}") for i in range(4)]
    )
    assert not tournament.can_start


# ========== Validation helpers ==========


def test_validation_result_is_truthy_only_when_valid():
    assert validate_scores(14, 10, 24)
    result = validate_scores(14, 9, 24)
    assert not result
    assert "sum to 24" in result.error_message


@pytest.mark.parametrize("entered,expected", [(10, 14), (0, 24), (30, 0), (-5, 24)])
def test_auto_balance_score_clamps(entered, expected):
    assert auto_balance_score(entered, 24) == expected


def test_time_settings_need_positive_cycle():
    result = validate_time_settings(60, 0, 0, 8)
    assert not result
    assert "positive" in result.error_message


def test_failures_share_the_package_base_class():
    assert issubclass(InvalidScoreException, ScoringException)
    assert issubclass(InsufficientTimeException, ValidationException)
    assert issubclass(InvalidConfigurationException, ConfigurationException)
    for exc_class in (ScoringException, ValidationException, ConfigurationException):
        assert issubclass(exc_class, CourtPairingException)
