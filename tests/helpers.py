from datetime import date, datetime, timedelta

from habitlocal.models.habit import Habit
from habitlocal.utils.dates import date_key

TODAY = date(2024, 3, 15)
NOW = datetime(2024, 3, 15, 9, 30)


class FixedClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakeProvider:
    """Stands in for GeminiProvider; replies are queued per test."""

    replies: list[dict] = []
    prompts: list[str] = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    @property
    def name(self) -> str:
        return "fake"

    async def complete(self, prompt: str, model: str | None = None) -> dict:
        FakeProvider.prompts.append(prompt)
        return FakeProvider.replies.pop(0)

    @staticmethod
    def reply(text: str) -> dict:
        return {"text": text, "provider": "fake", "model": "m", "status": "success", "error": None}

    @staticmethod
    def failure(error: str) -> dict:
        return {"text": None, "provider": "fake", "model": "m", "status": "failed", "error": error}


class FakeLLM:
    """Minimal text completer for AIService tests."""

    def __init__(self, *replies: str):
        self.replies = list(replies)
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.replies.pop(0)


def days_ago(n: int) -> str:
    return date_key(TODAY - timedelta(days=n))


def make_habit(name: str, progress: dict | None = None, archived: bool = False,
               created: datetime = NOW, habit_id: str | None = None):
    return Habit(
        id=habit_id or f"id-{name}",
        name=name,
        created_at=created,
        archived=archived,
        progress=progress or {},
    )
