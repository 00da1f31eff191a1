"""
dependencies.py — Shared service instances for the API
One key-value store, one habit store, one key manager and one LLM client per
process, handed to routes through FastAPI's Depends.
"""

from habitlocal.database import SessionLocal
from habitlocal.services.ai_service import AIService
from habitlocal.services.habit_service import HabitStore
from habitlocal.services.key_manager import KeyManager
from habitlocal.services.llm_service import LLMClient
from habitlocal.services.storage_service import KeyValueStore

_storage: KeyValueStore | None = None
_habit_store: HabitStore | None = None
_key_manager: KeyManager | None = None
_llm_client: LLMClient | None = None


def get_storage() -> KeyValueStore:
    global _storage
    if _storage is None:
        _storage = KeyValueStore(SessionLocal)
    return _storage


def get_habit_store() -> HabitStore:
    global _habit_store
    if _habit_store is None:
        _habit_store = HabitStore(get_storage())
    return _habit_store


def get_key_manager() -> KeyManager:
    global _key_manager
    if _key_manager is None:
        _key_manager = KeyManager(get_storage())
    return _key_manager


def get_llm_client() -> LLMClient:
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient(get_key_manager())
    return _llm_client


def get_ai_service() -> AIService:
    return AIService(get_llm_client())
