from fastapi import APIRouter, Depends, Query

from habitlocal.dependencies import get_habit_store
from habitlocal.services.habit_service import HabitStore
from habitlocal.services.stats_service import StatsService
from habitlocal.services.streak_service import StreakService

router = APIRouter(prefix="/api/v1/stats", tags=["Stats"])


@router.get("/series")
async def completion_series(
    days: int = Query(30, ge=1, le=365),
    store: HabitStore = Depends(get_habit_store),
):
    """Daily completion rate over the trailing window (7, 14 or 30 days in the UI)."""
    series = StatsService.completion_series(store.habits, store.today(), days)
    return [p.model_dump() for p in series]


@router.get("/summary")
async def stats_summary(store: HabitStore = Depends(get_habit_store)):
    summary = StatsService.summary(store.habits, store.today())
    return summary.model_dump(mode="json", by_alias=True)


@router.get("/habits")
async def habit_rates(store: HabitStore = Depends(get_habit_store)):
    today = store.today()
    return {
        "success_rates": [s.model_dump() for s in StatsService.habit_success_rates(store.habits, today)],
        "breakdown": [s.model_dump() for s in StatsService.habit_breakdown(store.habits)],
    }


@router.get("/snapshot")
async def daily_snapshot(store: HabitStore = Depends(get_habit_store)):
    snapshot = StatsService.daily_snapshot(store.habits, store.today())
    return snapshot.model_dump(by_alias=True) if snapshot else None


@router.get("/streaks")
async def habit_streaks(store: HabitStore = Depends(get_habit_store)):
    today = store.today()
    return [
        {"habit_id": h.id, "habit": h.name, "streak": StreakService.calculate_streak(h.progress, today)}
        for h in store.get_active_habits()
    ]
