from collections.abc import Sequence
from datetime import date

from fncli import cli

from .core.errors import ValidationError
from .core.models import DashboardStats, Habit
from .core.types import VIEWS
from .progress import daily_completion_rate, group_by_category

__all__ = ["dashboard_stats", "filter_habits"]


def filter_habits(habits: Sequence[Habit], view: str = "all") -> list[Habit]:
    if view not in VIEWS:
        raise ValidationError(f"unknown view '{view}', use one of {', '.join(VIEWS)}")
    if view == "all":
        return list(habits)
    return [h for h in habits if h.frequency == view]


def dashboard_stats(habits: Sequence[Habit], reference: date) -> DashboardStats:
    if not habits:
        return DashboardStats()
    return DashboardStats(
        total=len(habits),
        completion_rate=daily_completion_rate(habits, reference),
        by_category=group_by_category(habits),
    )


@cli("orbit")
def stats() -> None:
    """Show today's completion rate and habits per category"""
    from .habits import default_store
    from .lib import clock
    from .lib.render import render_stats

    print(render_stats(dashboard_stats(default_store().load(), clock.today())))
