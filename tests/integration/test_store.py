import pytest

from orbit import db
from orbit.core.errors import ValidationError
from orbit.store import HABITS_KEY, MemoryStore, SqliteStore


def test_empty_store_loads_nothing(tmp_orbit_dir):
    assert SqliteStore().load() == []


def test_save_then_load_round_trip(tmp_orbit_dir, make_habit):
    habits = [
        make_habit(title="Read", frequency="weekly", target_count=3, category="learning",
                   completed_dates=["2024-03-09", "2024-03-04"], streak=2),
        make_habit(title="Walk"),
    ]
    store = SqliteStore()
    store.save(habits)
    assert store.load() == habits


def test_save_replaces_collection(tmp_orbit_dir, make_habit):
    store = SqliteStore()
    store.save([make_habit(), make_habit()])
    store.save([make_habit(title="only")])
    assert [h.title for h in store.load()] == ["only"]


def test_store_uses_single_key(tmp_orbit_dir, make_habit):
    SqliteStore().save([make_habit(), make_habit()])
    with db.get_db() as conn:
        keys = [r[0] for r in conn.execute("SELECT key FROM kv").fetchall()]
    assert keys == [HABITS_KEY]


def test_corrupt_document_raises(tmp_orbit_dir):
    with db.get_db() as conn:
        conn.execute("INSERT INTO kv (key, value) VALUES (?, ?)", (HABITS_KEY, "{not json"))
    with pytest.raises(ValidationError):
        SqliteStore().load()


def test_explicit_db_path(tmp_orbit_dir, tmp_path, make_habit):
    path = tmp_path / "other.db"
    db.init(path)
    store = SqliteStore(path)
    store.save([make_habit(title="elsewhere")])
    assert SqliteStore(path).load()[0].title == "elsewhere"


def test_theme_defaults_to_light(tmp_orbit_dir):
    assert SqliteStore().get_theme() == "light"


def test_theme_persists(tmp_orbit_dir):
    SqliteStore().set_theme("dark")
    assert SqliteStore().get_theme() == "dark"


def test_theme_rejects_unknown(tmp_orbit_dir):
    with pytest.raises(ValidationError):
        SqliteStore().set_theme("neon")  # type: ignore[arg-type]


def test_memory_store_copies(make_habit):
    habits = [make_habit()]
    store = MemoryStore(habits)
    loaded = store.load()
    loaded.append(make_habit())
    assert len(store.load()) == 1
    store.set_theme("dark")
    assert store.get_theme() == "dark"
