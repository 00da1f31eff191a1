"""
storage_service.py — Key-value persistence
A local-storage style store: JSON documents under string keys, kept in a
single SQLAlchemy table. Writers can register listeners to hear about
changes made by other holders of the same store.
"""

import json
import logging
from typing import Any, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from habitlocal.models.storage_entry import StorageEntry

logger = logging.getLogger(__name__)

# listener(key, source): key is None when the whole store was cleared
StorageListener = Callable[[str | None, object | None], None]


class KeyValueStore:
    """JSON key-value store over a SQLAlchemy session factory."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        self._listeners: list[StorageListener] = []

    # ------------------------------------------------------------------
    def load(self, key: str, default: Any = None) -> Any:
        """Return the decoded value for key, or default when missing/unreadable."""
        db: Session = self._session_factory()
        try:
            entry = db.get(StorageEntry, key)
            if entry is None:
                return default
            return json.loads(entry.value)
        except (SQLAlchemyError, ValueError) as e:
            logger.warning(f"Error reading storage key '{key}': {e}")
            return default
        finally:
            db.close()

    # ------------------------------------------------------------------
    def save(self, key: str, value: Any, source: object | None = None) -> bool:
        """Encode and upsert value. Returns False (and logs) on failure."""
        db: Session = self._session_factory()
        try:
            payload = json.dumps(value)
            entry = db.get(StorageEntry, key)
            if entry:
                entry.value = payload
            else:
                db.add(StorageEntry(key=key, value=payload))
            db.commit()
        except (SQLAlchemyError, TypeError, ValueError) as e:
            db.rollback()
            logger.warning(f"Error setting storage key '{key}': {e}")
            return False
        finally:
            db.close()

        self._notify(key, source)
        return True

    # ------------------------------------------------------------------
    def remove(self, key: str, source: object | None = None) -> bool:
        db: Session = self._session_factory()
        try:
            entry = db.get(StorageEntry, key)
            if entry is None:
                return True
            db.delete(entry)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Error removing storage key '{key}': {e}")
            return False
        finally:
            db.close()

        self._notify(key, source)
        return True

    # ------------------------------------------------------------------
    def clear(self, source: object | None = None) -> bool:
        db: Session = self._session_factory()
        try:
            db.query(StorageEntry).delete()
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Error clearing storage: {e}")
            return False
        finally:
            db.close()

        self._notify(None, source)
        return True

    # ------------------------------------------------------------------
    def add_listener(self, listener: StorageListener):
        self._listeners.append(listener)

    def remove_listener(self, listener: StorageListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, key: str | None, source: object | None):
        for listener in list(self._listeners):
            try:
                listener(key, source)
            except Exception as e:
                logger.warning(f"Storage listener failed for key '{key}': {e}")
