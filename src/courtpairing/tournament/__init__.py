from courtpairing.tournament.health import (
    TournamentHealth,
    TournamentHealthService,
    can_end_tournament,
    compute_health,
    get_end_warnings,
)
from courtpairing.tournament.result_recorder import (
    ResultRecorder,
    reset_match,
    reset_results_keep_schedule,
    update_match_score,
)
from courtpairing.tournament.round_manager import (
    RoundManager,
    RoundProgress,
    TournamentProgress,
    create_scheduled_tournament,
    get_round_progress,
    get_tournament_progress,
    start_tournament,
)
from courtpairing.tournament.standings_calculator import (
    StandingsCalculator,
    compute_winner_summary,
    finalize_tournament,
    recalculate_standings,
    refinalize_tournament,
    sort_standings,
)

__all__ = [
    "ResultRecorder",
    "RoundManager",
    "RoundProgress",
    "StandingsCalculator",
    "TournamentHealth",
    "TournamentHealthService",
    "TournamentProgress",
    "can_end_tournament",
    "compute_health",
    "compute_winner_summary",
    "create_scheduled_tournament",
    "finalize_tournament",
    "get_end_warnings",
    "get_round_progress",
    "get_tournament_progress",
    "recalculate_standings",
    "refinalize_tournament",
    "reset_match",
    "reset_results_keep_schedule",
    "sort_standings",
    "start_tournament",
    "update_match_score",
]
