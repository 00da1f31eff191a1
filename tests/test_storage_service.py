from habitlocal.services.storage_service import KeyValueStore


def test_load_missing_key_returns_default(storage):
    assert storage.load("absent") is None
    assert storage.load("absent", []) == []


def test_save_and_load_round_trip(storage):
    value = [{"id": "1", "progress": {"2024-03-15": True, "2024-03-14": False}, "archived": False}]
    assert storage.save("k", value) is True
    assert storage.load("k") == value


def test_save_overwrites(storage):
    storage.save("k", 1)
    storage.save("k", 2)
    assert storage.load("k") == 2


def test_unserialisable_value_fails_softly(storage):
    assert storage.save("k", {"bad": object()}) is False
    assert storage.load("k", "default") == "default"


def test_remove_and_clear(storage):
    storage.save("a", 1)
    storage.save("b", 2)
    assert storage.remove("a") is True
    assert storage.load("a") is None
    assert storage.remove("a") is True
    storage.clear()
    assert storage.load("b") is None


def test_listeners_receive_key_and_source(storage):
    events = []
    listener = lambda key, source: events.append((key, source))
    storage.add_listener(listener)
    storage.save("a", 1, source="tab-1")
    storage.remove("a")
    storage.clear(source="tab-2")
    assert events == [("a", "tab-1"), ("a", None), (None, "tab-2")]

    storage.remove_listener(listener)
    storage.save("a", 1)
    assert len(events) == 3


def test_failing_listener_does_not_break_writes(storage):
    def boom(key, source):
        raise RuntimeError("listener failed")

    storage.add_listener(boom)
    assert storage.save("a", 1) is True
    assert storage.load("a") == 1


def test_separate_stores_share_the_table(session_factory):
    first = KeyValueStore(session_factory)
    second = KeyValueStore(session_factory)
    first.save("shared", {"x": 1})
    assert second.load("shared") == {"x": 1}
