"""Core type definitions."""

from typing import Literal, get_args

Frequency = Literal["daily", "weekly", "monthly"]
Category = Literal["health", "productivity", "learning", "mindfulness", "other"]
View = Literal["daily", "weekly", "monthly", "all"]
DayKind = Literal["prev", "current", "next"]
ThemeName = Literal["light", "dark"]

FREQUENCIES: tuple[str, ...] = get_args(Frequency)
CATEGORIES: tuple[str, ...] = get_args(Category)
VIEWS: tuple[str, ...] = get_args(View)
THEMES: tuple[str, ...] = get_args(ThemeName)
