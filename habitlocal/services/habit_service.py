"""
habit_service.py — Habit store
Owns the list of habits, persists the whole list to the key-value store after
every mutation and then tells subscribers. A failed write is logged and kept
on ``last_persist_error``; the in-memory list stays authoritative.
"""

import logging
import uuid
from datetime import date, datetime
from typing import Callable

from pydantic import ValidationError

from habitlocal.config import HABITS_STORAGE_KEY
from habitlocal.models.habit import Habit, HABIT_COLORS, MUTABLE_FIELDS
from habitlocal.services.storage_service import KeyValueStore
from habitlocal.services.streak_service import StreakService
from habitlocal.utils.dates import date_key, local_now, to_date

logger = logging.getLogger(__name__)

HabitListener = Callable[[list[Habit]], None]


class HabitStore:
    def __init__(
        self,
        storage: KeyValueStore,
        storage_key: str = HABITS_STORAGE_KEY,
        clock: Callable[[], datetime] = local_now,
    ):
        self.storage = storage
        self.storage_key = storage_key
        self.clock = clock
        self.last_persist_error: str | None = None
        self._listeners: list[HabitListener] = []
        self._habits: list[Habit] = self._read()
        self.storage.add_listener(self._on_storage_change)

    # ------------------------------------------------------------------
    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    def today(self) -> date:
        return self.clock().date()

    # ------------------------------------------------------------------
    def add_habit(self, name: str, description: str = "") -> Habit:
        h = Habit(
            id=str(uuid.uuid4()),
            name=name,
            description=description or "",
            created_at=self.clock(),
            archived=False,
            progress={},
            color=HABIT_COLORS[len(self._habits) % len(HABIT_COLORS)],
        )
        self._commit(self._habits + [h])
        return h

    def update_habit(self, habit_id: str, data: dict) -> Habit | None:
        """Apply mutable fields from data; None when the habit does not exist."""
        h = self.get_by_id(habit_id)
        if not h:
            return None
        changes = {k: v for k, v in data.items() if k in MUTABLE_FIELDS}
        updated = Habit.model_validate({**h.model_dump(), **changes})
        self._commit([updated if x.id == habit_id else x for x in self._habits])
        return updated

    def delete_habit(self, habit_id: str) -> bool:
        """Remove the habit and its history. Deleting a missing id is a no-op."""
        if not self.get_by_id(habit_id):
            return False
        self._commit([x for x in self._habits if x.id != habit_id])
        return True

    def archive_habit(self, habit_id: str, archived: bool) -> Habit | None:
        return self.update_habit(habit_id, {"archived": archived})

    def toggle_progress(self, habit_id: str, day: date | datetime | str) -> Habit | None:
        h = self.get_by_id(habit_id)
        if not h:
            return None
        key = date_key(to_date(day))
        progress = dict(h.progress)
        progress[key] = not progress.get(key, False)
        return self.update_habit(habit_id, {"progress": progress})

    # ------------------------------------------------------------------
    def get_by_id(self, habit_id: str) -> Habit | None:
        for h in self._habits:
            if h.id == habit_id:
                return h
        return None

    def get_active_habits(self) -> list[Habit]:
        return [h for h in self._habits if not h.archived]

    def get_archived_habits(self) -> list[Habit]:
        return [h for h in self._habits if h.archived]

    def get_streak(self, habit_id: str) -> int:
        h = self.get_by_id(habit_id)
        if not h:
            return 0
        return StreakService.calculate_streak(h.progress, self.today())

    # ------------------------------------------------------------------
    def subscribe(self, listener: HabitListener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: HabitListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def reload(self):
        """Re-read the list from storage, e.g. after another writer changed it."""
        self._habits = self._read()
        self._notify()

    def close(self):
        self.storage.remove_listener(self._on_storage_change)

    # ------------------------------------------------------------------
    def _read(self) -> list[Habit]:
        raw = self.storage.load(self.storage_key, [])
        habits = []
        for item in raw or []:
            try:
                habits.append(Habit.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping unreadable habit record: {e}")
        return habits

    def _commit(self, habits: list[Habit]):
        self._habits = habits
        ok = self.storage.save(
            self.storage_key, [h.to_storage() for h in habits], source=self
        )
        if ok:
            self.last_persist_error = None
        else:
            self.last_persist_error = f"Could not persist habits under '{self.storage_key}'"
            logger.warning(self.last_persist_error)
        self._notify()

    def _notify(self):
        snapshot = self.habits
        for listener in list(self._listeners):
            listener(snapshot)

    def _on_storage_change(self, key: str | None, source: object | None):
        if source is self:
            return
        if key is None or key == self.storage_key:
            self.reload()
