from courtpairing.scheduling.americano_scheduler import (
    AmericanoScheduler,
    ScheduleResult,
    ScheduleStats,
    SchedulerConfig,
    generate_schedule,
)
from courtpairing.scheduling.pairing_tracker import PairingTracker
from courtpairing.scheduling.time_recommendation import (
    TimeRecommendation,
    TimeRecommendationService,
    recommend,
)

__all__ = [
    "AmericanoScheduler",
    "PairingTracker",
    "ScheduleResult",
    "ScheduleStats",
    "SchedulerConfig",
    "TimeRecommendation",
    "TimeRecommendationService",
    "generate_schedule",
    "recommend",
]
