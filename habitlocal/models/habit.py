from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from habitlocal.utils.dates import parse_date_key


# Rotating palette, picked by creation order
HABIT_COLORS = [
    "hsl(var(--chart-1))",
    "hsl(var(--chart-2))",
    "hsl(var(--chart-3))",
    "hsl(var(--chart-4))",
    "hsl(var(--chart-5))",
    "hsl(250, 60%, 60%)",
    "hsl(300, 60%, 60%)",
    "hsl(350, 60%, 60%)",
]


class Habit(BaseModel):
    """A tracked habit and its per-day completion ledger.

    Serialises with the camelCase names used by the stored JSON document
    (``createdAt``), and accepts either spelling on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    description: str = ""
    created_at: datetime = Field(alias="createdAt")
    archived: bool = False
    progress: dict[str, bool] = Field(default_factory=dict)  # "YYYY-MM-DD" -> completed
    color: Optional[str] = None

    @field_validator("progress")
    @classmethod
    def _check_progress_keys(cls, value: dict[str, bool]) -> dict[str, bool]:
        for key in value:
            parse_date_key(key)
        return value

    def is_completed(self, key: str) -> bool:
        return bool(self.progress.get(key))

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# Fields callers may change through update_habit
MUTABLE_FIELDS = ("name", "description", "archived", "progress", "color")
