# ---------- routes/ai_routes.py ----------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from habitlocal.dependencies import (
    get_ai_service,
    get_habit_store,
    get_key_manager,
    get_llm_client,
)
from habitlocal.errors import AIServiceError, MissingApiKeyError
from habitlocal.services.ai_service import AIService
from habitlocal.services.habit_service import HabitStore
from habitlocal.services.key_manager import KeyManager
from habitlocal.services.llm_service import LLMClient
from habitlocal.services.stats_service import StatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/ai", tags=["AI"])


# ── Pydantic schemas ──────────────────────────────────────────────
class RecommendationRequest(BaseModel):
    user_goals: Optional[str] = None


class HabitSentence(BaseModel):
    sentence: str = Field(min_length=1)


# ── Helpers ───────────────────────────────────────────────────────
def _require_api_key(km: KeyManager):
    if not km.is_api_key_set:
        raise HTTPException(status_code=400, detail="Please set your Gemini API key to use AI features.")


def _ai_error(e: Exception) -> HTTPException:
    if isinstance(e, MissingApiKeyError):
        return HTTPException(status_code=400, detail=str(e))
    logger.error(f"AI request failed: {e}")
    return HTTPException(status_code=502, detail=str(e))


# ── Routes ────────────────────────────────────────────────────────
@router.post("/daily-summary")
async def daily_summary(
    store: HabitStore = Depends(get_habit_store),
    km: KeyManager = Depends(get_key_manager),
    ai: AIService = Depends(get_ai_service),
):
    """One-sentence recap of yesterday's completion."""
    _require_api_key(km)
    snapshot = StatsService.daily_snapshot(store.habits, store.today())
    if snapshot is None:
        raise HTTPException(status_code=400, detail="Track some habits to get a daily summary.")
    try:
        result = await ai.daily_micro_summary(snapshot)
    except AIServiceError as e:
        raise _ai_error(e)
    return {"summary": result.summary, "stats": snapshot.model_dump(by_alias=True)}


@router.post("/stats-insight")
async def stats_insight(
    store: HabitStore = Depends(get_habit_store),
    km: KeyManager = Depends(get_key_manager),
    ai: AIService = Depends(get_ai_service),
):
    _require_api_key(km)
    if not store.get_active_habits():
        raise HTTPException(status_code=400, detail="Track some habits to get AI insights on your stats.")
    summary = StatsService.summary(store.habits, store.today())
    try:
        result = await ai.stats_insight(summary)
    except AIServiceError as e:
        raise _ai_error(e)
    return {"insight": result.insight, "stats": summary.model_dump(mode="json", by_alias=True)}


@router.post("/challenge")
async def gamified_challenge(
    store: HabitStore = Depends(get_habit_store),
    km: KeyManager = Depends(get_key_manager),
    ai: AIService = Depends(get_ai_service),
):
    _require_api_key(km)
    names = [h.name for h in store.get_active_habits()]
    try:
        result = await ai.gamified_challenge(names)
    except AIServiceError as e:
        raise _ai_error(e)
    return result.model_dump(by_alias=True)


@router.post("/habits/parse")
async def create_habit_from_sentence(
    body: HabitSentence,
    store: HabitStore = Depends(get_habit_store),
    km: KeyManager = Depends(get_key_manager),
    ai: AIService = Depends(get_ai_service),
):
    """Turn a sentence like "Run 3 km Tue/Thu" into a new habit."""
    _require_api_key(km)
    try:
        habit = await ai.create_habit_from_sentence(store, body.sentence.strip())
    except AIServiceError as e:
        raise _ai_error(e)
    return {
        "status": "success",
        "data": habit.to_storage(),
        "persisted": store.last_persist_error is None,
    }


@router.post("/habits/{habit_id}/recommendations")
async def recommend_strategies(
    habit_id: str,
    body: Optional[RecommendationRequest] = None,
    store: HabitStore = Depends(get_habit_store),
    km: KeyManager = Depends(get_key_manager),
    ai: AIService = Depends(get_ai_service),
):
    _require_api_key(km)
    habit = store.get_by_id(habit_id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    try:
        result = await ai.recommend_strategies(habit, body.user_goals if body else None)
    except AIServiceError as e:
        raise _ai_error(e)
    return {"habit_id": habit_id, "recommendations": result.recommendations}


@router.get("/status")
async def ai_status(
    km: KeyManager = Depends(get_key_manager),
    llm: LLMClient = Depends(get_llm_client),
):
    return {"api_key_set": km.is_api_key_set, "model": llm.model, **llm.get_stats()}
