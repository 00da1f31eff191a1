import os

# Must be set before habitlocal.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEMINI_API_KEY"] = ""
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from habitlocal.database import Base
from habitlocal.models.storage_entry import StorageEntry  # noqa: F401
from habitlocal.services.habit_service import HabitStore
from habitlocal.services.key_manager import KeyManager
from habitlocal.services.storage_service import KeyValueStore

from tests.helpers import FakeProvider, FixedClock


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def storage(session_factory):
    return KeyValueStore(session_factory)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def store(storage, clock):
    s = HabitStore(storage, clock=clock)
    yield s
    s.close()


@pytest.fixture
def key_manager(storage):
    return KeyManager(storage, secret="test-secret", env_key="")


@pytest.fixture(autouse=True)
def reset_fake_provider():
    FakeProvider.replies = []
    FakeProvider.prompts = []
    yield
