from datetime import datetime
from pathlib import Path

import fncli
import pytest

from orbit import config, db
from orbit.core.errors import OrbitError
from orbit.core.models import Habit
from orbit.lib import ansi
from orbit.lib.providers import gemini

ORBIT_ROOT = Path(db.__file__).parent


class FnCLIRunner:
    """Dispatches explicit `orbit ...` argv the way the entry point does, capturing output."""

    def invoke(self, args: list[str]) -> fncli.Result:
        try:
            return fncli.invoke(["orbit", *args])
        except OrbitError as e:
            return fncli.Result(1, "", f"{e}\n")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("ORBIT_DEBUG", raising=False)
    monkeypatch.setattr(gemini.keyring, "get_password", lambda *_: None)
    ansi.use(ansi.DARK)


@pytest.fixture
def tmp_orbit_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "ORBIT_DIR", tmp_path)
    monkeypatch.setattr(config, "DB_PATH", tmp_path / "orbit.db")
    monkeypatch.setattr(config, "CONFIG_PATH", tmp_path / "config.yaml")
    monkeypatch.setattr(config, "BACKUP_DIR", tmp_path / "backups")
    db.init()
    return tmp_path


@pytest.fixture
def runner(tmp_orbit_dir, monkeypatch):
    monkeypatch.setattr(fncli, "_TIMING_LOG", tmp_orbit_dir / "cli_timings.jsonl", raising=False)
    fncli.autodiscover(ORBIT_ROOT, "orbit")
    return FnCLIRunner()


@pytest.fixture
def make_habit():
    counter = iter(range(1, 1000))

    def _make(**overrides) -> Habit:
        n = next(counter)
        fields = {
            "id": f"{n:08x}-0000-4000-8000-000000000000",
            "title": f"habit {n}",
            "frequency": "daily",
            "created_at": datetime(2024, 1, 1, 9, 0),
        }
        fields.update(overrides)
        if isinstance(fields.get("completed_dates"), list):
            fields["completed_dates"] = tuple(fields["completed_dates"])
        return Habit(**fields)

    return _make
