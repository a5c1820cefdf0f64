import calendar
from collections.abc import Sequence
from datetime import date

from orbit.core.models import CalendarCell, DashboardStats, Habit, HabitSuggestion
from orbit.progress import period_progress, trailing_streak

from . import ansi

__all__ = [
    "render_calendar",
    "render_habit_row",
    "render_habits",
    "render_progress",
    "render_stats",
    "render_suggestions",
]

_BAR_WIDTH = 10
_FREQ_LABEL = {"daily": "day", "weekly": "week", "monthly": "month"}
_PERIOD_LABEL = {"daily": "today", "weekly": "this week", "monthly": "this month"}


def _bar(count: int, target: int) -> str:
    ratio = min(count / target, 1.0) if target > 0 else 0.0
    filled = round(ratio * _BAR_WIDTH)
    return "█" * filled + "░" * (_BAR_WIDTH - filled)


def _category(cat: str) -> str:
    return ansi.color(ansi.CATEGORY_COLORS.get(cat, "gray"), f"#{cat}")


def render_habit_row(habit: Habit, reference: date) -> str:
    p = period_progress(habit, reference)
    mark = ansi.green("✓") if p.is_goal_met else "□"
    flame = ansi.orange("🔥") if habit.streak > 0 else ansi.muted("·")
    label = f"{p.count}/{p.target} per {_FREQ_LABEL.get(habit.frequency, habit.frequency)}"
    bar = ansi.green(_bar(p.count, p.target)) if p.is_goal_met else _bar(p.count, p.target)
    return (
        f"  {mark} {habit.title}  {_category(habit.category)}  "
        f"{bar} {ansi.muted(label)}  {flame} {habit.streak}  {ansi.muted(f'[{habit.id[:8]}]')}"
    )


def render_habits(habits: Sequence[Habit], reference: date) -> str:
    if not habits:
        return ansi.muted("no habits yet, add one with: orbit add <title>")
    return "\n".join(render_habit_row(h, reference) for h in habits)


def render_progress(habit: Habit, reference: date) -> str:
    p = period_progress(habit, reference)
    run = trailing_streak(habit, reference)
    bar = ansi.green(_bar(p.count, p.target)) if p.is_goal_met else _bar(p.count, p.target)
    status = ansi.green("goal met") if p.is_goal_met else ansi.muted(f"{p.target - p.count} to go")
    period = _PERIOD_LABEL.get(habit.frequency, habit.frequency)
    lines = [
        f"{ansi.bold(habit.title)}  {_category(habit.category)}  {ansi.muted(f'[{habit.id[:8]}]')}",
        f"  {period:<11}{bar} {p.count}/{p.target}  {status}",
        f"  {'streak':<11}🔥 {habit.streak}  {ansi.muted(f'{run} days in a row')}",
    ]
    if habit.description:
        lines.insert(1, f"  {ansi.muted(habit.description)}")
    return "\n".join(lines)


def render_stats(stats: DashboardStats) -> str:
    lines = [
        f"{ansi.bold('habits')} {stats.total}",
        f"{ansi.bold('today')} {_bar(stats.completion_rate, 100)} {stats.completion_rate}%",
    ]
    if stats.by_category:
        lines.append(ansi.bold("by category"))
        lines.extend(f"  {_category(c.category)} {c.count}" for c in stats.by_category)
    return "\n".join(lines)


def _cell(cell: CalendarCell, today_key: str, single: bool) -> str:
    text = f"{cell.day.day:>2}"
    if cell.day.kind != "current":
        return ansi.muted(f" {text} ")
    if single:
        styled = ansi.green(text) if cell.completed else text
    elif cell.count >= 3:
        styled = ansi.bold(ansi.green(text))
    elif cell.count > 0:
        styled = ansi.green(text)
    else:
        styled = text
    if cell.day.key == today_key:
        return ansi.bold(f"[{ansi.strip(styled)}]")
    return f" {styled} "


def render_calendar(
    cells: Sequence[CalendarCell],
    year: int,
    month: int,
    today_key: str = "",
    habit: Habit | None = None,
) -> str:
    title = f"{calendar.month_name[month]} {year}"
    if habit is not None:
        title += f"  {ansi.muted(habit.title)}"
    header = "".join(f" {d} " for d in ("Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"))
    lines = [ansi.bold(title), ansi.muted(header)]
    for start in range(0, len(cells), 7):
        week = cells[start : start + 7]
        lines.append("".join(_cell(c, today_key, habit is not None) for c in week))
    return "\n".join(lines)


def render_suggestions(suggestions: Sequence[HabitSuggestion]) -> str:
    lines = []
    for i, s in enumerate(suggestions, 1):
        per = _FREQ_LABEL.get(s.frequency, s.frequency)
        lines.append(f"  {i}. {ansi.bold(s.title)}  {_category(s.category)}  {s.target_count}/{per}")
        if s.description:
            lines.append(f"     {ansi.muted(s.description)}")
    return "\n".join(lines)
