import dataclasses
from datetime import datetime
from typing import Generic, TypeVar

from .types import Category, DayKind, Frequency

V = TypeVar("V")


@dataclasses.dataclass(frozen=True)
class Habit:
    id: str
    title: str
    frequency: Frequency
    created_at: datetime
    description: str = ""
    target_count: int = 1
    category: Category = "other"
    completed_dates: tuple[str, ...] = dataclasses.field(default=(), hash=False)
    streak: int = 0


@dataclasses.dataclass(frozen=True)
class HabitSuggestion:
    title: str
    description: str
    frequency: Frequency
    target_count: int
    category: Category


@dataclasses.dataclass(frozen=True)
class Progress:
    count: int
    target: int
    is_goal_met: bool


@dataclasses.dataclass(frozen=True)
class CategoryCount:
    category: str
    count: int


@dataclasses.dataclass(frozen=True)
class DashboardStats:
    total: int = 0
    completion_rate: int = 0
    by_category: list[CategoryCount] = dataclasses.field(default_factory=list, hash=False)


@dataclasses.dataclass(frozen=True)
class CalendarDay:
    day: int
    kind: DayKind
    key: str


@dataclasses.dataclass(frozen=True)
class CalendarCell:
    day: CalendarDay
    count: int
    completed: bool = False


@dataclasses.dataclass(frozen=True)
class Outcome(Generic[V]):
    """Result of a collaborator call: the usable value plus whether it came back clean."""

    value: V
    ok: bool = True
    error: str | None = None

    @classmethod
    def fallback(cls, value: V, error: str) -> "Outcome[V]":
        return cls(value=value, ok=False, error=error)
