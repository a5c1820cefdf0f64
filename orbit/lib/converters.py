from datetime import date, datetime
from typing import Any, cast

from orbit.core.errors import ValidationError
from orbit.core.models import Habit, HabitSuggestion
from orbit.core.types import CATEGORIES, FREQUENCIES, Category, Frequency

__all__ = [
    "dict_to_habit",
    "dict_to_suggestion",
    "habit_to_dict",
]


def _parse_datetime(val) -> datetime:
    """Parse a datetime value that may be an ISO string (with or without 'Z') or a timestamp."""
    if isinstance(val, (int, float)):
        return datetime.fromtimestamp(val)
    if isinstance(val, str) and val:
        text = val[:-1] + "+00:00" if val.endswith("Z") else val
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return datetime.combine(date.fromisoformat(val.split("T")[0]), datetime.min.time())
    return datetime.min


def _frequency(val: object) -> Frequency:
    if val not in FREQUENCIES:
        raise ValidationError(f"unknown frequency '{val}', use one of {', '.join(FREQUENCIES)}")
    return cast(Frequency, val)


def _category(val: object) -> Category:
    if val not in CATEGORIES:
        return "other"
    return cast(Category, val)


def _target(val: object) -> int:
    try:
        target = int(cast(Any, val))
    except (TypeError, ValueError):
        raise ValidationError(f"invalid target count '{val}'") from None
    if target < 1:
        raise ValidationError(f"target count must be positive, got {target}")
    return target


def _streak(val: object) -> int:
    try:
        return max(0, int(cast(Any, val or 0)))
    except (TypeError, ValueError):
        raise ValidationError(f"invalid streak '{val}'") from None


def _unique(keys: list[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(str(k) for k in keys))


def habit_to_dict(habit: Habit) -> dict[str, Any]:
    return {
        "id": habit.id,
        "title": habit.title,
        "description": habit.description,
        "frequency": habit.frequency,
        "targetCount": habit.target_count,
        "completedDates": list(habit.completed_dates),
        "category": habit.category,
        "streak": habit.streak,
        "createdAt": habit.created_at.isoformat(),
    }


def dict_to_habit(data: dict[str, Any]) -> Habit:
    """
    Converts a stored habit record into a Habit object.
    Accepts the camelCase record shape; duplicate day keys collapse to their first occurrence.
    """
    if not data.get("id"):
        raise ValidationError("habit record has no id")
    return Habit(
        id=str(data["id"]),
        title=str(data.get("title", "")),
        description=str(data.get("description") or ""),
        frequency=_frequency(data.get("frequency", "daily")),
        target_count=_target(data.get("targetCount", 1)),
        category=_category(data.get("category")),
        completed_dates=_unique(list(data.get("completedDates") or [])),
        streak=_streak(data.get("streak")),
        created_at=_parse_datetime(data.get("createdAt")),
    )


def dict_to_suggestion(data: dict[str, Any]) -> HabitSuggestion:
    title = str(data.get("title") or "").strip()
    if not title:
        raise ValidationError("suggestion has no title")
    return HabitSuggestion(
        title=title,
        description=str(data.get("description") or ""),
        frequency=_frequency(data.get("frequency")),
        target_count=_target(data.get("targetCount", 1)),
        category=_category(data.get("category")),
    )
