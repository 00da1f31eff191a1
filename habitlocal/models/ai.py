from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Shapes the AI flows ask Gemini to answer with

class DailyMicroSummary(BaseModel):
    summary: str


class StatsInsight(BaseModel):
    insight: str


class GamifiedChallenge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    challenge_title: str = Field(alias="challengeTitle")
    challenge_description: str = Field(alias="challengeDescription")
    duration_days: int = Field(alias="durationDays", ge=3, le=30)
    reward_suggestion: str = Field(alias="rewardSuggestion")


class HabitDefinition(BaseModel):
    name: str = Field(min_length=1)
    description: str = ""
    frequency: str = "daily"
    time: Optional[str] = None


class HabitRecommendations(BaseModel):
    recommendations: list[str] = Field(default_factory=list)
