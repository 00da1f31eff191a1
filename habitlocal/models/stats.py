from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Trend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class ProgressDataPoint(BaseModel):
    date: str  # YYYY-MM-DD
    completed: int  # active habits completed that day
    total: int  # active habits
    rate: float  # percentage 0-100, one decimal


class HabitCompletionStat(BaseModel):
    id: str
    name: str
    rate: float  # percentage 0-100, one decimal
    color: Optional[str] = None


class TrendResult(BaseModel):
    trend: Trend = Trend.STABLE
    average_last_7_days: Optional[float] = None


class StatsSummary(BaseModel):
    """Statistics handed to the stats-insight prompt."""

    model_config = ConfigDict(populate_by_name=True)

    overall_completion_trend: Trend = Field(Trend.STABLE, alias="overallCompletionTrend")
    lowest_performing_habit: Optional[HabitCompletionStat] = Field(None, alias="lowestPerformingHabit")
    highest_performing_habit: Optional[HabitCompletionStat] = Field(None, alias="highestPerformingHabit")
    active_habit_count: int = Field(0, alias="activeHabitCount")
    average_completion_rate_last_7_days: Optional[float] = Field(
        None, alias="averageCompletionRateLast7Days"
    )


class DailySnapshot(BaseModel):
    """Yesterday's figures, as fed to the daily micro-summary."""

    model_config = ConfigDict(populate_by_name=True)

    completion_rate: float = Field(alias="completionRate")
    total_habits: int = Field(alias="totalHabits")
    habits_completed: int = Field(alias="habitsCompleted")
    longest_streak: int = Field(alias="longestStreak")
