"""
stats_service.py — Completion statistics
Rolling completion-rate series, week-over-week trend, per-habit success rates
and yesterday's snapshot. Everything is a pure function of a habit list and
an explicit ``today``.
"""

from datetime import date, datetime, timedelta

from habitlocal.models.habit import Habit
from habitlocal.models.stats import (
    DailySnapshot,
    HabitCompletionStat,
    ProgressDataPoint,
    StatsSummary,
    Trend,
    TrendResult,
)
from habitlocal.services.streak_service import StreakService
from habitlocal.utils.dates import date_key, parse_date_key, trailing_window

TREND_THRESHOLD = 5.0  # percentage points between the two weekly averages
SUCCESS_WINDOW_DAYS = 30


def _percent(part: int, whole: int) -> float:
    return part * 100 / whole if whole > 0 else 0.0


def _mean(values: list[float]) -> float:
    return sum(values) / (len(values) or 1)


def _local_date(ts: datetime) -> date:
    if ts.tzinfo is not None:
        ts = ts.astimezone()
    return ts.date()


class StatsService:
    @staticmethod
    def active_habits(habits: list[Habit]) -> list[Habit]:
        return [h for h in habits if not h.archived]

    @staticmethod
    def completion_series(habits: list[Habit], today: date, days: int = 30) -> list[ProgressDataPoint]:
        """One point per day over the trailing window, oldest first."""
        active = StatsService.active_habits(habits)
        total = len(active)
        series = []
        for d in trailing_window(today, days):
            key = date_key(d)
            completed = sum(1 for h in active if h.is_completed(key))
            series.append(ProgressDataPoint(
                date=key,
                completed=completed,
                total=total,
                rate=round(_percent(completed, total), 1),
            ))
        return series

    @staticmethod
    def classify_trend(series: list[ProgressDataPoint]) -> TrendResult:
        """Compare the last 7 days against the 7 before them.

        With 7 to 13 points only the average is reported; with fewer than 7
        there is neither a trend nor an average.
        """
        rates = [_percent(p.completed, p.total) for p in series]

        if len(rates) >= 14:
            window = rates[-14:]
            avg_earlier = _mean(window[:7])
            avg_later = _mean(window[7:])
            # compared at fixed precision so an exact 5-point change stays stable
            delta = round(avg_later - avg_earlier, 6)
            if delta > TREND_THRESHOLD:
                trend = Trend.IMPROVING
            elif delta < -TREND_THRESHOLD:
                trend = Trend.DECLINING
            else:
                trend = Trend.STABLE
            return TrendResult(trend=trend, average_last_7_days=round(avg_later, 1))

        if len(rates) >= 7:
            return TrendResult(trend=Trend.STABLE, average_last_7_days=round(_mean(rates), 1))

        return TrendResult()

    @staticmethod
    def habit_success_rate(habit: Habit, today: date) -> float:
        """Completion rate over the last 30 days of recorded entries.

        A habit with no entries in the window falls back to the number of days
        since it was created (1..30) as denominator.
        """
        entries = [
            completed for key, completed in habit.progress.items()
            if (today - parse_date_key(key)).days <= SUCCESS_WINDOW_DAYS
        ]
        completed = sum(1 for c in entries if c)
        if entries:
            denominator = len(entries)
        else:
            age = (today - _local_date(habit.created_at)).days + 1
            denominator = min(SUCCESS_WINDOW_DAYS, age)
        return round(_percent(completed, max(1, denominator)), 1)

    @staticmethod
    def habit_success_rates(habits: list[Habit], today: date) -> list[HabitCompletionStat]:
        """Per active habit success rates, ascending."""
        stats = [
            HabitCompletionStat(
                id=h.id, name=h.name,
                rate=StatsService.habit_success_rate(h, today),
                color=h.color,
            )
            for h in StatsService.active_habits(habits)
        ]
        return sorted(stats, key=lambda s: s.rate)

    @staticmethod
    def performers(rates: list[HabitCompletionStat]) -> tuple[HabitCompletionStat | None, HabitCompletionStat | None]:
        """(lowest, highest) from an ascending list. No lowest when all are perfect."""
        if not rates:
            return None, None
        lowest = rates[0] if rates[0].rate < 100 else None
        return lowest, rates[-1]

    @staticmethod
    def summary(habits: list[Habit], today: date) -> StatsSummary:
        active = StatsService.active_habits(habits)
        if not active:
            return StatsSummary()

        trend = StatsService.classify_trend(StatsService.completion_series(active, today, 14))
        lowest, highest = StatsService.performers(StatsService.habit_success_rates(active, today))
        return StatsSummary(
            overall_completion_trend=trend.trend,
            lowest_performing_habit=lowest,
            highest_performing_habit=highest,
            active_habit_count=len(active),
            average_completion_rate_last_7_days=trend.average_last_7_days,
        )

    @staticmethod
    def habit_breakdown(habits: list[Habit]) -> list[HabitCompletionStat]:
        """All-time share of completed entries per active habit, best first."""
        stats = []
        for h in StatsService.active_habits(habits):
            completed = sum(1 for c in h.progress.values() if c)
            stats.append(HabitCompletionStat(
                id=h.id, name=h.name,
                rate=round(_percent(completed, len(h.progress)), 1),
                color=h.color,
            ))
        return sorted(stats, key=lambda s: s.rate, reverse=True)

    @staticmethod
    def daily_snapshot(habits: list[Habit], today: date) -> DailySnapshot | None:
        """Yesterday's completion figures; None when nothing is tracked."""
        active = StatsService.active_habits(habits)
        if not active:
            return None
        yesterday = date_key(today - timedelta(days=1))
        done = sum(1 for h in active if h.is_completed(yesterday))
        return DailySnapshot(
            completion_rate=round(_percent(done, len(active)), 1),
            total_habits=len(active),
            habits_completed=done,
            longest_streak=StreakService.longest_current_streak(active, today),
        )
