import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, cast

from . import db
from .core.errors import ValidationError
from .core.models import Habit
from .core.types import THEMES, ThemeName
from .lib.converters import dict_to_habit, habit_to_dict

__all__ = [
    "HABITS_KEY",
    "THEME_KEY",
    "HabitStore",
    "MemoryStore",
    "SqliteStore",
]

logger = logging.getLogger(__name__)

HABITS_KEY = "orbit_habits"
THEME_KEY = "orbit_theme"
DEFAULT_THEME: ThemeName = "light"


class HabitStore(Protocol):
    def load(self) -> list[Habit]: ...

    def save(self, habits: Sequence[Habit]) -> None: ...

    def get_theme(self) -> ThemeName: ...

    def set_theme(self, theme: ThemeName) -> None: ...


def _check_theme(theme: str) -> ThemeName:
    if theme not in THEMES:
        raise ValidationError(f"unknown theme '{theme}', use one of {', '.join(THEMES)}")
    return cast(ThemeName, theme)


class MemoryStore:
    """In-process store. Holds records as given, in order."""

    def __init__(self, habits: Sequence[Habit] = (), theme: ThemeName = DEFAULT_THEME) -> None:
        self._habits = list(habits)
        self._theme: ThemeName = theme

    def load(self) -> list[Habit]:
        return list(self._habits)

    def save(self, habits: Sequence[Habit]) -> None:
        self._habits = list(habits)

    def get_theme(self) -> ThemeName:
        return self._theme

    def set_theme(self, theme: ThemeName) -> None:
        self._theme = _check_theme(theme)


class SqliteStore:
    """Key/value store in the orbit database: the habit list is one JSON document under a fixed key."""

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path

    def _get(self, key: str) -> str | None:
        with db.get_db(self.db_path) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def _put(self, key: str, value: str) -> None:
        with db.get_db(self.db_path) as conn:
            conn.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, value),
            )

    def load(self) -> list[Habit]:
        raw = self._get(HABITS_KEY)
        if raw is None:
            return []
        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValidationError(f"stored habits are not valid JSON: {e}") from e
        if not isinstance(records, list):
            raise ValidationError("stored habits are not a list")
        return [dict_to_habit(r) for r in records]

    def save(self, habits: Sequence[Habit]) -> None:
        payload = json.dumps([habit_to_dict(h) for h in habits])
        self._put(HABITS_KEY, payload)
        logger.debug("saved %d habits", len(habits))

    def get_theme(self) -> ThemeName:
        raw = self._get(THEME_KEY)
        if raw in THEMES:
            return cast(ThemeName, raw)
        return DEFAULT_THEME

    def set_theme(self, theme: ThemeName) -> None:
        self._put(THEME_KEY, _check_theme(theme))
