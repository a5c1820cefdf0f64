import uuid
from collections.abc import Sequence
from datetime import datetime

from fncli import UsageError, cli

from .core.errors import ValidationError
from .core.models import Habit, HabitSuggestion
from .core.types import CATEGORIES, THEMES
from .lib import ansi, clock
from .lib.converters import dict_to_suggestion
from .lib.dates import day_key, parse_day, parse_day_key
from .lib.fuzzy import find_in_pool
from .progress import toggle_completion
from .store import HabitStore, SqliteStore

__all__ = [
    "add_habit",
    "default_store",
    "delete_habit",
    "find_habit",
    "get_habit",
    "get_habits",
    "habit_from_suggestion",
    "new_habit",
    "toggle_habit",
]


# ── domain ───────────────────────────────────────────────────────────────────


def default_store() -> HabitStore:
    return SqliteStore()


def new_habit(
    title: str,
    frequency: str = "daily",
    target_count: int = 1,
    category: str = "other",
    description: str = "",
    now: datetime | None = None,
) -> Habit:
    title = title.strip()
    if not title:
        raise ValidationError("habit title cannot be empty")
    if category not in CATEGORIES:
        raise ValidationError(f"unknown category '{category}', use one of {', '.join(CATEGORIES)}")
    suggestion = dict_to_suggestion(
        {
            "title": title,
            "description": description,
            "frequency": frequency,
            "targetCount": target_count,
            "category": category,
        }
    )
    return habit_from_suggestion(suggestion, now=now)


def habit_from_suggestion(suggestion: HabitSuggestion, now: datetime | None = None) -> Habit:
    return Habit(
        id=str(uuid.uuid4()),
        title=suggestion.title,
        description=suggestion.description,
        frequency=suggestion.frequency,
        target_count=suggestion.target_count,
        category=suggestion.category,
        created_at=now or clock.now(),
    )


def get_habits(store: HabitStore) -> list[Habit]:
    return store.load()


def get_habit(store: HabitStore, habit_id: str) -> Habit | None:
    return next((h for h in store.load() if h.id == habit_id), None)


def find_habit(store: HabitStore, ref: str) -> Habit | None:
    return find_in_pool(ref, store.load())


def add_habit(store: HabitStore, habit: Habit) -> Habit:
    store.save([*store.load(), habit])
    return habit


def delete_habit(store: HabitStore, habit_id: str) -> bool:
    habits = store.load()
    remaining = [h for h in habits if h.id != habit_id]
    if len(remaining) == len(habits):
        return False
    store.save(remaining)
    return True


def toggle_habit(store: HabitStore, habit_id: str, key: str) -> Habit | None:
    """Toggle one day on the habit with `habit_id` and persist. None (no-op) for an unknown id."""
    parse_day_key(key)
    habits = store.load()
    updated: Habit | None = None
    result: list[Habit] = []
    for h in habits:
        if h.id == habit_id:
            updated = toggle_completion(h, key)
            result.append(updated)
        else:
            result.append(h)
    if updated is None:
        return None
    store.save(result)
    return updated


def _resolve(store: HabitStore, ref: Sequence[str]) -> Habit:
    from .lib.resolve import resolve_habit

    if not ref:
        raise UsageError("missing habit reference")
    return resolve_habit(" ".join(ref), store)


# ── cli ──────────────────────────────────────────────────────────────────────


@cli(
    "orbit",
    flags={
        "title": [],
        "frequency": ["-f", "--frequency"],
        "target": ["-n", "--target"],
        "category": ["-c", "--category"],
        "description": ["-d", "--description"],
    },
)
def add(
    title: list[str],
    frequency: str = "daily",
    target: int = 1,
    category: str = "other",
    description: str = "",
) -> None:
    """Add a habit: `orbit add read 20 pages -f weekly -n 3 -c learning`"""
    habit = new_habit(
        " ".join(title),
        frequency=frequency,
        target_count=target,
        category=category,
        description=description,
    )
    add_habit(default_store(), habit)
    print(f"□ {habit.title}  {ansi.muted(f'[{habit.id[:8]}]')}")


@cli("orbit", flags={"ref": []})
def rm(ref: list[str]) -> None:
    """Delete a habit by title or id prefix"""
    store = default_store()
    habit = _resolve(store, ref)
    delete_habit(store, habit.id)
    print(f"✗ {habit.title}")


@cli("orbit", flags={"ref": [], "day": ["-d", "--day"]})
def check(ref: list[str], day: str = "today") -> None:
    """Toggle a habit's completion for a day (default today)"""
    store = default_store()
    habit = _resolve(store, ref)
    key = day_key(parse_day(day))
    updated = toggle_habit(store, habit.id, key)
    if updated is None:
        return
    if key in updated.completed_dates:
        print(f"{ansi.green('✓')} {updated.title}  {ansi.muted(key)}  🔥 {updated.streak}")
    else:
        print(f"□ {updated.title}  {ansi.muted(key)}  {updated.streak}")


@cli("orbit", flags={"ref": [], "day": ["-d", "--day"]})
def progress(ref: list[str], day: str = "today") -> None:
    """Show a habit's progress for the period containing a day (default today)"""
    from .lib.render import render_progress

    habit = _resolve(default_store(), ref)
    print(render_progress(habit, parse_day(day)))


@cli("orbit", flags={"view": ["--view"], "day": ["-d", "--day"]})
def habits(view: str = "all", day: str = "today") -> None:
    """List habits with progress for the current period"""
    from .dashboard import filter_habits
    from .lib.render import render_habits

    reference = parse_day(day)
    print(render_habits(filter_habits(get_habits(default_store()), view), reference))


@cli("orbit", flags={"name": []})
def theme(name: str | None = None) -> None:
    """Set the colour theme (light or dark), or flip it with no argument"""
    store = default_store()
    if name is None:
        name = "light" if store.get_theme() == "dark" else "dark"
    if name not in THEMES:
        raise ValidationError(f"unknown theme '{name}', use one of {', '.join(THEMES)}")
    store.set_theme(name)  # type: ignore[arg-type]
    ansi.use_named(name)
    print(f"theme: {name}")

