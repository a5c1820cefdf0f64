"""Habit progress engine.

Pure functions over habit records. Every query takes its reference date as an
argument; nothing here reads the clock, touches storage or calls out.
"""

import dataclasses
from collections.abc import Iterable, Sequence
from datetime import date

from .core.models import CategoryCount, Habit, Progress
from .lib.dates import day_key, end_of_week, same_month, start_of_week

__all__ = [
    "daily_completion_rate",
    "group_by_category",
    "is_completed_on",
    "period_progress",
    "toggle_completion",
    "trailing_streak",
]


def _as_date(key: str) -> date | None:
    try:
        return date.fromisoformat(key)
    except (TypeError, ValueError):
        return None


def _completed_days(habit: Habit) -> list[date]:
    return [d for d in (_as_date(k) for k in habit.completed_dates) if d is not None]


def toggle_completion(habit: Habit, key: str) -> Habit:
    """Flip `key` in the habit's completed dates and move the streak counter by one.

    The streak is a running counter, not a recount of consecutive days: removing
    an old completion lowers it just as removing today's would. Floored at 0.
    """
    if key in habit.completed_dates:
        dates = tuple(d for d in habit.completed_dates if d != key)
        streak = max(0, habit.streak - 1)
    else:
        dates = (*habit.completed_dates, key)
        streak = habit.streak + 1
    return dataclasses.replace(habit, completed_dates=dates, streak=streak)


def is_completed_on(habit: Habit, day: date) -> bool:
    return day_key(day) in habit.completed_dates


def period_progress(habit: Habit, reference: date, *, bounded_week: bool = False) -> Progress:
    """Completions in the period containing `reference` against the period target.

    Weekly periods start on Monday and by default only the lower bound is
    checked, so completions dated after the current week still count. Pass
    `bounded_week=True` to cap the range at Sunday.
    """
    if habit.frequency == "daily":
        count = 1 if is_completed_on(habit, reference) else 0
        target = 1
    elif habit.frequency == "weekly":
        start = start_of_week(reference)
        end = end_of_week(reference)
        count = sum(
            1 for d in _completed_days(habit) if d >= start and (not bounded_week or d <= end)
        )
        target = habit.target_count
    elif habit.frequency == "monthly":
        count = sum(1 for d in _completed_days(habit) if same_month(d, reference))
        target = habit.target_count
    else:
        count, target = 0, habit.target_count
    return Progress(count=count, target=target, is_goal_met=count >= target)


def daily_completion_rate(habits: Iterable[Habit], reference: date) -> int:
    """Percent of daily habits completed on `reference`, rounded half up. 0 with no daily habits."""
    daily = [h for h in habits if h.frequency == "daily"]
    if not daily:
        return 0
    completed = sum(1 for h in daily if is_completed_on(h, reference))
    total = len(daily)
    return (200 * completed + total) // (2 * total)


def group_by_category(habits: Iterable[Habit]) -> list[CategoryCount]:
    counts: dict[str, int] = {}
    for h in habits:
        counts[h.category] = counts.get(h.category, 0) + 1
    return [CategoryCount(category=c, count=n) for c, n in counts.items()]


def trailing_streak(habit: Habit, reference: date) -> int:
    """Consecutive completed days ending on `reference`, or on the day before it.

    Read-only companion to the stored counter; it is never written back.
    """
    days: Sequence[date] = sorted(set(_completed_days(habit)), reverse=True)
    days = [d for d in days if d <= reference]
    if not days or (reference - days[0]).days > 1:
        return 0

    streak = 1
    for current, previous in zip(days, days[1:], strict=False):
        if (current - previous).days == 1:
            streak += 1
        else:
            break
    return streak
