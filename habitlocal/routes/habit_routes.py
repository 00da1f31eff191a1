import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from habitlocal.dependencies import get_habit_store
from habitlocal.services.habit_service import HabitStore

router = APIRouter(prefix="/api/v1/habits", tags=["Habits"])


class HabitCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = ""


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None


class ArchiveRequest(BaseModel):
    archived: bool = True


class ToggleRequest(BaseModel):
    date: Optional[dt.date] = None  # defaults to today


def _result(store: HabitStore, habit) -> dict:
    return {
        "status": "success",
        "data": habit.to_storage(),
        "persisted": store.last_persist_error is None,
    }


@router.get("")
async def list_habits(store: HabitStore = Depends(get_habit_store)):
    return [h.to_storage() for h in store.habits]


@router.post("")
async def create_habit(body: HabitCreate, store: HabitStore = Depends(get_habit_store)):
    h = store.add_habit(body.name, body.description or "")
    return _result(store, h)


@router.get("/active")
async def list_active_habits(store: HabitStore = Depends(get_habit_store)):
    return [h.to_storage() for h in store.get_active_habits()]


@router.get("/archived")
async def list_archived_habits(store: HabitStore = Depends(get_habit_store)):
    return [h.to_storage() for h in store.get_archived_habits()]


@router.get("/{habit_id}")
async def get_habit(habit_id: str, store: HabitStore = Depends(get_habit_store)):
    h = store.get_by_id(habit_id)
    if not h:
        raise HTTPException(status_code=404, detail="Habit not found")
    return h.to_storage()


@router.put("/{habit_id}")
async def update_habit(habit_id: str, body: HabitUpdate, store: HabitStore = Depends(get_habit_store)):
    h = store.update_habit(habit_id, body.model_dump(exclude_unset=True, exclude_none=True))
    if not h:
        raise HTTPException(status_code=404, detail="Habit not found")
    return _result(store, h)


@router.delete("/{habit_id}")
async def delete_habit(habit_id: str, store: HabitStore = Depends(get_habit_store)):
    deleted = store.delete_habit(habit_id)
    return {
        "status": "success",
        "deleted": deleted,
        "persisted": store.last_persist_error is None,
    }


@router.post("/{habit_id}/archive")
async def archive_habit(habit_id: str, body: ArchiveRequest, store: HabitStore = Depends(get_habit_store)):
    h = store.archive_habit(habit_id, body.archived)
    if not h:
        raise HTTPException(status_code=404, detail="Habit not found")
    return _result(store, h)


@router.post("/{habit_id}/toggle")
async def toggle_progress(
    habit_id: str,
    body: Optional[ToggleRequest] = None,
    store: HabitStore = Depends(get_habit_store),
):
    day = body.date if body and body.date else store.today()
    h = store.toggle_progress(habit_id, day)
    if not h:
        raise HTTPException(status_code=404, detail="Habit not found")
    return _result(store, h)


@router.get("/{habit_id}/streak")
async def habit_streak(habit_id: str, store: HabitStore = Depends(get_habit_store)):
    if not store.get_by_id(habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"habit_id": habit_id, "streak": store.get_streak(habit_id)}
