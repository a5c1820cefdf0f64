from collections.abc import Sequence
from datetime import date

from fncli import cli

from .core.models import CalendarCell, Habit
from .lib.dates import day_key, month_grid

__all__ = ["cell_count", "month_view"]


def cell_count(habits: Sequence[Habit], key: str) -> int:
    """Number of habits completed on the day `key`."""
    return sum(1 for h in habits if key in h.completed_dates)


def month_view(
    habits: Sequence[Habit], year: int, month: int, habit_id: str | None = None
) -> list[CalendarCell]:
    """Month grid with per-day completion counts.

    With `habit_id` each cell reflects that habit alone (count 0 or 1); an
    unknown id yields an empty month.
    """
    if habit_id is None:
        return [CalendarCell(day=d, count=cell_count(habits, d.key)) for d in month_grid(year, month)]

    habit = next((h for h in habits if h.id == habit_id), None)
    cells = []
    for d in month_grid(year, month):
        done = habit is not None and d.key in habit.completed_dates
        cells.append(CalendarCell(day=d, count=1 if done else 0, completed=done))
    return cells


@cli("orbit", flags={"month": ["-m", "--month"], "habit": ["-H", "--habit"]})
def calendar(month: str | None = None, habit: str | None = None) -> None:
    """Show a month calendar of completions (month as YYYY-MM)"""
    from .habits import default_store
    from .lib import clock
    from .lib.errors import exit_error
    from .lib.render import render_calendar
    from .lib.resolve import resolve_habit

    today = clock.today()
    year, mon = today.year, today.month
    if month:
        try:
            first = date.fromisoformat(f"{month}-01")
        except ValueError:
            exit_error(f"invalid month '{month}', use YYYY-MM")
        year, mon = first.year, first.month

    store = default_store()
    habits = store.load()
    selected = resolve_habit(habit, store) if habit else None
    cells = month_view(habits, year, mon, selected.id if selected else None)
    print(render_calendar(cells, year, mon, today_key=day_key(today), habit=selected))
