from courtpairing.models import (
    Bye,
    Gender,
    Match,
    MatchStatus,
    Player,
    PlayerStanding,
    Round,
    Team,
    Tournament,
    TournamentFormat,
    TournamentStatus,
    rank_standings,
)
from courtpairing.tournament import (
    StandingsCalculator,
    compute_winner_summary,
    finalize_tournament,
    recalculate_standings,
    refinalize_tournament,
)


def _score(match, score_a, score_b):
    match.score_a = score_a
    match.score_b = score_b
    match.status = MatchStatus.COMPLETED
    return match


def _tournament(format=TournamentFormat.AMERICANO):
    players = [
        Player(name="Ana", gender=Gender.FEMALE, id="a"),
        Player(name="Ben", gender=Gender.MALE, id="b"),
        Player(name="Cal", gender=Gender.MALE, id="c"),
        Player(name="Dee", gender=Gender.FEMALE, id="d"),
        Player(name="Eve", gender=Gender.FEMALE, id="e"),
    ]
    rounds = [
        Round(
            index=0,
            matches=[Match(0, 0, Team("a", "b"), Team("c", "d"), id="m0")],
            byes=[Bye("e", 0)],
        ),
        Round(
            index=1,
            matches=[Match(1, 0, Team("a", "c"), Team("b", "e"), id="m1")],
            byes=[Bye("d", 1)],
        ),
    ]
    return Tournament(
        name="Friday Americano",
        format=format,
        status=TournamentStatus.IN_PROGRESS,
        players=players,
        rounds=rounds,
    )


def _by_id(standings):
    return {s.player_id: s for s in standings}


def test_completed_matches_credit_both_teams():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 15, 9)

    standings = _by_id(recalculate_standings(tournament))

    assert standings["a"].points_total == 15
    assert standings["a"].wins == 1
    assert standings["a"].points_against == 9
    assert standings["c"].points_total == 9
    assert standings["c"].losses == 1
    assert standings["c"].points_differential == -6
    assert standings["e"].matches_played == 0


def test_unfinished_matches_are_ignored():
    tournament = _tournament()
    match = tournament.rounds[0].matches[0]
    match.score_a = 20
    match.score_b = 4

    standings = _by_id(recalculate_standings(tournament))
    assert standings["a"].matches_played == 0
    assert standings["a"].points_total == 0


def test_byes_are_counted_for_every_round():
    standings = _by_id(recalculate_standings(_tournament()))
    assert standings["e"].bye_count == 1
    assert standings["d"].bye_count == 1
    assert standings["a"].bye_count == 0


def test_draw_is_neither_win_nor_loss():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 12, 12)

    standings = _by_id(recalculate_standings(tournament))
    for pid in ("a", "b", "c", "d"):
        assert standings[pid].matches_played == 1
        assert standings[pid].wins == 0
        assert standings[pid].losses == 0


def test_recalculation_is_idempotent():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 14, 10)
    _score(tournament.rounds[1].matches[0], 8, 16)

    first = [s.to_dict() for s in recalculate_standings(tournament)]
    second = [s.to_dict() for s in recalculate_standings(tournament)]
    assert first == second


def test_ranking_order_and_name_tiebreak():
    names = {"x": "Zoe", "y": "Adam", "z": "Mia", "w": "Bo"}
    standings = [
        PlayerStanding("x", points_total=30, wins=1, points_for=30, points_against=18),
        PlayerStanding("y", points_total=30, wins=1, points_for=30, points_against=18),
        PlayerStanding("z", points_total=30, wins=2, points_for=30, points_against=18),
        PlayerStanding("w", points_total=40, wins=0, points_for=40, points_against=40),
    ]

    ranked = [s.player_id for s in rank_standings(standings, names)]
    assert ranked == ["w", "z", "y", "x"]


def test_differential_breaks_ties_before_name():
    names = {"x": "Adam", "y": "Zoe"}
    standings = [
        PlayerStanding("x", points_total=20, wins=1, points_for=20, points_against=28),
        PlayerStanding("y", points_total=20, wins=1, points_for=20, points_against=16),
    ]
    ranked = [s.player_id for s in rank_standings(standings, names)]
    assert ranked == ["y", "x"]


def test_winner_summary_top_three():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 16, 8)
    _score(tournament.rounds[1].matches[0], 13, 11)
    standings = recalculate_standings(tournament)

    summary = compute_winner_summary(
        tournament.players, standings, TournamentFormat.AMERICANO
    )

    # a: 29, b: 27, c: 21, e: 11, d: 8
    assert summary.overall_winner_player_id == "a"
    assert summary.top3_player_ids == ["a", "b", "c"]
    assert summary.mixed_top_male_player_id is None
    assert summary.finalized_at is not None


def test_winner_summary_mixed_picks_best_of_each_gender():
    tournament = _tournament(TournamentFormat.MIXED_AMERICANO)
    _score(tournament.rounds[0].matches[0], 16, 8)
    _score(tournament.rounds[1].matches[0], 13, 11)
    standings = recalculate_standings(tournament)

    summary = compute_winner_summary(
        tournament.players, standings, TournamentFormat.MIXED_AMERICANO
    )
    assert summary.mixed_top_female_player_id == "a"
    assert summary.mixed_top_male_player_id == "b"


def test_winner_summary_empty_standings():
    summary = StandingsCalculator().compute_winner_summary(
        [], [], TournamentFormat.AMERICANO
    )
    assert summary.overall_winner_player_id is None
    assert summary.top3_player_ids == []


def test_finalize_completes_and_stamps_tournament():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 14, 10)

    finalize_tournament(tournament)

    assert tournament.status == TournamentStatus.COMPLETED
    assert tournament.ended_at is not None
    assert tournament.completed_at is not None
    assert tournament.winner_summary.overall_winner_player_id in ("a", "b")
    assert len(tournament.standings) == 5


def test_refinalize_keeps_status_and_timestamps():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 14, 10)
    finalize_tournament(tournament)
    ended_at = tournament.ended_at
    completed_at = tournament.completed_at

    _score(tournament.rounds[0].matches[0], 4, 20)
    refinalize_tournament(tournament)

    assert tournament.status == TournamentStatus.COMPLETED
    assert tournament.ended_at == ended_at
    assert tournament.completed_at == completed_at
    assert tournament.winner_summary.overall_winner_player_id in ("c", "d")


def test_leaderboard_uses_player_names():
    tournament = _tournament()
    _score(tournament.rounds[0].matches[0], 12, 12)
    tournament.standings = recalculate_standings(tournament)

    leaders = [s.player_id for s in tournament.leaderboard]
    # All four players tie, so names decide
    assert leaders[:4] == ["a", "b", "c", "d"]
