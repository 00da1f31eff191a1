# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from habitlocal.models.storage_entry import StorageEntry
from habitlocal.models.habit import Habit, HABIT_COLORS
from habitlocal.models.stats import (
    Trend,
    ProgressDataPoint,
    HabitCompletionStat,
    TrendResult,
    StatsSummary,
    DailySnapshot,
)
from habitlocal.models.ai import (
    DailyMicroSummary,
    StatsInsight,
    GamifiedChallenge,
    HabitDefinition,
    HabitRecommendations,
)

__all__ = [
    "StorageEntry",
    "Habit",
    "HABIT_COLORS",
    "Trend",
    "ProgressDataPoint",
    "HabitCompletionStat",
    "TrendResult",
    "StatsSummary",
    "DailySnapshot",
    "DailyMicroSummary",
    "StatsInsight",
    "GamifiedChallenge",
    "HabitDefinition",
    "HabitRecommendations",
]
