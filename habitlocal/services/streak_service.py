"""
streak_service.py — Streaks
Counts consecutive completed days backward from today. The current streak
gives one day of grace: a habit not yet ticked today still shows the streak
that ended yesterday.
"""

from datetime import date, timedelta

from habitlocal.models.habit import Habit
from habitlocal.utils.dates import date_key


class StreakService:
    @staticmethod
    def calculate_streak(progress: dict[str, bool], today: date) -> int:
        """Current streak with the one-day grace look-back for today."""
        streak = 0
        curr_date = today

        while True:
            if progress.get(date_key(curr_date)):
                streak += 1
                curr_date -= timedelta(days=1)
                continue

            # Not ticked today yet: look at yesterday once before giving up
            if streak == 0 and curr_date == today:
                curr_date -= timedelta(days=1)
                if progress.get(date_key(curr_date)):
                    continue
            break

        return streak

    @staticmethod
    def calculate_strict_streak(progress: dict[str, bool], today: date) -> int:
        """Consecutive completed days ending exactly at today, no grace."""
        streak = 0
        curr_date = today
        while progress.get(date_key(curr_date)):
            streak += 1
            curr_date -= timedelta(days=1)
        return streak

    @staticmethod
    def longest_current_streak(habits: list[Habit], today: date) -> int:
        """Largest strict streak among the given habits (0 when empty)."""
        return max(
            [0] + [StreakService.calculate_strict_streak(h.progress, today) for h in habits]
        )
