"""
ai_service.py — AI flows
Builds prompts from habit statistics, sends them through the text-completion
client and parses the JSON reply into typed results.
"""

import json
import logging
import re
from typing import Protocol, TypeVar

from pydantic import BaseModel, ValidationError

from habitlocal import prompts
from habitlocal.errors import AIResponseFormatError
from habitlocal.models.ai import (
    DailyMicroSummary,
    GamifiedChallenge,
    HabitDefinition,
    HabitRecommendations,
    StatsInsight,
)
from habitlocal.models.habit import Habit
from habitlocal.models.stats import DailySnapshot, StatsSummary
from habitlocal.services.habit_service import HabitStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
_LIST_ITEM_RE = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s+(.*\S)\s*$")


class TextCompleter(Protocol):
    async def complete(self, prompt: str) -> str: ...


def extract_json(text: str) -> dict | None:
    """Pull the first JSON object out of a model reply (fenced or bare)."""
    fenced = _FENCE_RE.search(text)
    candidate = fenced.group(1) if fenced else text
    start, end = candidate.find("{"), candidate.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(candidate[start:end + 1])
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def parse_reply(text: str, schema: type[T]) -> T:
    data = extract_json(text)
    if data is None:
        raise AIResponseFormatError(f"AI reply did not contain a JSON object for {schema.__name__}")
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise AIResponseFormatError(f"AI reply did not match {schema.__name__}: {e}") from e


def parse_list_items(text: str) -> list[str]:
    """Numbered or bulleted lines from a plain-text reply."""
    items = []
    for line in text.splitlines():
        m = _LIST_ITEM_RE.match(line)
        if m:
            items.append(m.group(1))
    return items


class AIService:
    def __init__(self, llm: TextCompleter):
        self.llm = llm

    # ------------------------------------------------------------------
    async def daily_micro_summary(self, snapshot: DailySnapshot) -> DailyMicroSummary:
        prompt = prompts.DAILY_SUMMARY_PROMPT.format(
            habits_completed=snapshot.habits_completed,
            total_habits=snapshot.total_habits,
            completion_rate=snapshot.completion_rate,
            longest_streak=snapshot.longest_streak,
        )
        text = await self.llm.complete(prompt)
        try:
            return parse_reply(text, DailyMicroSummary)
        except AIResponseFormatError:
            # A plain sentence is an acceptable summary
            return DailyMicroSummary(summary=text.strip())

    # ------------------------------------------------------------------
    async def stats_insight(self, stats: StatsSummary) -> StatsInsight:
        prompt = prompts.STATS_INSIGHT_PROMPT.format(
            active_habit_count=stats.active_habit_count,
            trend=stats.overall_completion_trend.value,
            average_line=(
                f"Their average completion rate in the last 7 days was {stats.average_completion_rate_last_7_days}%.\n"
                if stats.average_completion_rate_last_7_days is not None else ""
            ),
            highest_line=(
                f"Their best performing habit is '{stats.highest_performing_habit.name}' "
                f"with {stats.highest_performing_habit.rate}% success.\n"
                if stats.highest_performing_habit else ""
            ),
            lowest_line=(
                f"Their habit needing more attention is '{stats.lowest_performing_habit.name}' "
                f"with {stats.lowest_performing_habit.rate}% success.\n"
                if stats.lowest_performing_habit else "All habits are doing well!\n"
            ),
        )
        text = await self.llm.complete(prompt)
        try:
            return parse_reply(text, StatsInsight)
        except AIResponseFormatError:
            return StatsInsight(insight=text.strip())

    # ------------------------------------------------------------------
    async def gamified_challenge(self, tracked_habits: list[str]) -> GamifiedChallenge:
        if tracked_habits:
            habit_lines = "\n".join(f"- {name}" for name in tracked_habits)
        else:
            habit_lines = "- General well-being and self-improvement."
        text = await self.llm.complete(
            prompts.GAMIFIED_CHALLENGE_PROMPT.format(habit_lines=habit_lines)
        )
        return parse_reply(text, GamifiedChallenge)

    # ------------------------------------------------------------------
    async def parse_habit(self, sentence: str) -> HabitDefinition:
        text = await self.llm.complete(
            prompts.NATURAL_LANGUAGE_HABIT_PROMPT.format(sentence=sentence)
        )
        return parse_reply(text, HabitDefinition)

    async def create_habit_from_sentence(self, store: HabitStore, sentence: str) -> Habit:
        """Parse a sentence with the model and add the resulting habit."""
        definition = await self.parse_habit(sentence)
        details = f"Frequency: {definition.frequency}"
        if definition.time:
            details += f", Time: {definition.time}"
        habit = store.add_habit(definition.name, f"{definition.description} ({details})")
        logger.info(f"Created habit '{habit.name}' from natural language input")
        return habit

    # ------------------------------------------------------------------
    async def recommend_strategies(self, habit: Habit, user_goals: str | None = None) -> HabitRecommendations:
        goals = user_goals or f"Improve consistency for habit: {habit.name}. {habit.description or ''}".strip()
        text = await self.llm.complete(
            prompts.RECOMMEND_STRATEGIES_PROMPT.format(
                habit_name=habit.name,
                progress_data=json.dumps(habit.progress),
                user_goals=goals,
            )
        )
        try:
            return parse_reply(text, HabitRecommendations)
        except AIResponseFormatError:
            items = parse_list_items(text)
            if not items:
                raise
            return HabitRecommendations(recommendations=items)
