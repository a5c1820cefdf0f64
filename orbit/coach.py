"""AI coach: habit suggestions, motivation and progress analysis.

Every call returns an `Outcome`. When the text-generation service is
unavailable or answers with something unusable the outcome carries the fixed
fallback value and `ok=False`; nothing here raises to the caller.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any

from fncli import cli

from . import config
from .core.errors import ValidationError
from .core.models import Habit, HabitSuggestion, Outcome
from .core.types import CATEGORIES, FREQUENCIES
from .lib.converters import dict_to_suggestion
from .lib.providers import gemini

__all__ = [
    "MAX_SUGGESTIONS",
    "analyze",
    "motivate",
    "suggest_habits",
]

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5

MOTIVATION_NO_KEY = "Consistency is the bridge between goals and accomplishment."
MOTIVATION_EMPTY = "Keep going!"
MOTIVATION_ERROR = "Stay focused on your goals!"
ANALYSIS_NO_DATA = "Add some habits and track them to see AI insights!"
ANALYSIS_EMPTY = "You're making steady progress. Keep showing up!"
ANALYSIS_ERROR = "Your consistency is building the foundation for your future self."

SUGGESTION_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING"},
            "description": {"type": "STRING"},
            "frequency": {"type": "STRING", "enum": list(FREQUENCIES)},
            "targetCount": {"type": "INTEGER"},
            "category": {"type": "STRING", "enum": list(CATEGORIES)},
        },
        "required": ["title", "description", "frequency", "targetCount", "category"],
    },
}


def _generate(prompt: str, key: str, **kwargs: Any) -> str:
    return gemini.generate(
        prompt, key=key, model=config.get_model(), timeout=config.get_timeout(), **kwargs
    )


def _parse_suggestions(text: str) -> list[HabitSuggestion]:
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValidationError("suggestions response is not a list")
    suggestions: list[HabitSuggestion] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        try:
            suggestions.append(dict_to_suggestion(item))
        except ValidationError as e:
            logger.warning("dropping suggestion: %s", e)
    return suggestions[:MAX_SUGGESTIONS]


def suggest_habits(goal: str) -> Outcome[list[HabitSuggestion]]:
    goal = goal.strip()
    if not goal:
        return Outcome.fallback([], "no goal given")
    key = gemini.api_key()
    if not key:
        logger.warning("gemini api key not set, no suggestions")
        return Outcome.fallback([], "missing api key")
    try:
        text = _generate(
            f'Generate {MAX_SUGGESTIONS} structured habit suggestions based on this user goal: "{goal}".',
            key,
            system="You are an expert habit coach.",
            schema=SUGGESTION_SCHEMA,
        )
        if not text:
            return Outcome.fallback([], "empty response")
        return Outcome(_parse_suggestions(text))
    except (gemini.ProviderError, ValidationError, json.JSONDecodeError) as e:
        logger.error("suggestion request failed: %s", e)
        return Outcome.fallback([], str(e))


def motivate(habit: Habit) -> Outcome[str]:
    key = gemini.api_key()
    if not key:
        return Outcome.fallback(MOTIVATION_NO_KEY, "missing api key")
    try:
        text = _generate(
            f'Give a 1-sentence motivation for the habit: "{habit.title}". '
            f"Frequency: {habit.frequency}. Current streak: {habit.streak}.",
            key,
            max_tokens=60,
        )
    except gemini.ProviderError as e:
        logger.error("motivation request failed: %s", e)
        return Outcome.fallback(MOTIVATION_ERROR, str(e))
    if not text:
        return Outcome.fallback(MOTIVATION_EMPTY, "empty response")
    return Outcome(text)


def analyze(habits: Sequence[Habit]) -> Outcome[str]:
    if not habits:
        return Outcome.fallback(ANALYSIS_NO_DATA, "no habits")
    key = gemini.api_key()
    if not key:
        return Outcome.fallback(ANALYSIS_NO_DATA, "missing api key")
    summary = ", ".join(f"{h.title}: {h.streak} day streak" for h in habits)
    try:
        text = _generate(
            f"Analyze my progress: {summary}. Give me a 2-sentence coach's perspective.",
            key,
            max_tokens=150,
        )
    except gemini.ProviderError as e:
        logger.error("analysis request failed: %s", e)
        return Outcome.fallback(ANALYSIS_ERROR, str(e))
    if not text:
        return Outcome.fallback(ANALYSIS_EMPTY, "empty response")
    return Outcome(text)


@cli("orbit coach", name="key")
def coach_key(key: str) -> None:
    """Store the Gemini API key in the system keyring"""
    import keyring

    keyring.set_password(gemini.SERVICE, gemini.KEY_NAME, key)
    print("api key stored")


@cli("orbit coach", name="model", flags={"model": []})
def coach_model(model: str | None = None) -> None:
    """Show or set the text-generation model"""
    if model:
        config.set_model(model)
    print(config.get_model())


@cli("orbit", flags={"goal": [], "pick": ["-p", "--pick"]})
def suggest(goal: list[str], pick: int | None = None) -> None:
    """Ask the coach for habits toward a goal; `-p N` adds suggestion N"""
    from .habits import add_habit, default_store, habit_from_suggestion
    from .lib.render import render_suggestions

    outcome = suggest_habits(" ".join(goal))
    if not outcome.value:
        print(f"no suggestions ({outcome.error})" if outcome.error else "no suggestions")
        return
    if pick is None:
        print(render_suggestions(outcome.value))
        return
    if not 1 <= pick <= len(outcome.value):
        raise ValidationError(f"pick must be between 1 and {len(outcome.value)}")
    habit = add_habit(default_store(), habit_from_suggestion(outcome.value[pick - 1]))
    print(f"□ {habit.title}")


@cli("orbit", flags={"ref": []})
def motivation(ref: list[str]) -> None:
    """One line of motivation for a habit"""
    from .habits import default_store
    from .lib.resolve import resolve_habit

    habit = resolve_habit(" ".join(ref), default_store())
    print(motivate(habit).value)


@cli("orbit")
def insights() -> None:
    """Coach's take on progress across all habits"""
    from .habits import default_store

    print(analyze(default_store().load()).value)
