from orbit.core.models import Habit
from orbit.habits import find_habit
from orbit.store import HabitStore

from .errors import exit_error

__all__ = ["resolve_habit"]


def resolve_habit(ref: str, store: HabitStore) -> Habit:
    habit = find_habit(store, ref)
    if not habit:
        exit_error(f"No habit found: '{ref}'")
    return habit
