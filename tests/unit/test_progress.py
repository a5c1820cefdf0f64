from datetime import date

import pytest

from orbit.core.models import Progress
from orbit.progress import (
    daily_completion_rate,
    group_by_category,
    is_completed_on,
    period_progress,
    toggle_completion,
    trailing_streak,
)


def test_toggle_adds_key_and_bumps_streak(make_habit):
    h = make_habit(streak=0)
    result = toggle_completion(h, "2024-01-01")
    assert result.completed_dates == ("2024-01-01",)
    assert result.streak == 1


def test_toggle_twice_restores_dates_and_streak(make_habit):
    h = make_habit(completed_dates=["2024-01-01", "2024-01-03"], streak=2)
    once = toggle_completion(h, "2024-01-02")
    twice = toggle_completion(once, "2024-01-02")
    assert set(twice.completed_dates) == set(h.completed_dates)
    assert twice.streak == h.streak


def test_toggle_removes_only_that_key(make_habit):
    h = make_habit(completed_dates=["2024-01-01", "2024-01-02", "2024-01-03"], streak=3)
    result = toggle_completion(h, "2024-01-02")
    assert result.completed_dates == ("2024-01-01", "2024-01-03")
    assert result.streak == 2


def test_toggle_preserves_insertion_order(make_habit):
    h = make_habit(completed_dates=["2024-03-05", "2024-03-01"], streak=2)
    result = toggle_completion(h, "2024-02-01")
    assert result.completed_dates == ("2024-03-05", "2024-03-01", "2024-02-01")


def test_toggle_does_not_mutate_input(make_habit):
    h = make_habit()
    toggle_completion(h, "2024-01-01")
    assert h.completed_dates == ()
    assert h.streak == 0


def test_streak_floor_at_zero(make_habit):
    h = make_habit(completed_dates=["2024-01-01"], streak=0)
    result = toggle_completion(h, "2024-01-01")
    assert result.completed_dates == ()
    assert result.streak == 0


def test_streak_is_a_counter_not_a_recount(make_habit):
    h = make_habit(completed_dates=["2024-02-01"], streak=1)
    h = toggle_completion(h, "2024-03-10")
    assert h.streak == 2
    h = toggle_completion(h, "2024-02-01")
    assert h.streak == 1
    assert h.completed_dates == ("2024-03-10",)


def test_is_completed_on(make_habit):
    h = make_habit(completed_dates=["2024-03-10"])
    assert is_completed_on(h, date(2024, 3, 10))
    assert not is_completed_on(h, date(2024, 3, 11))


def test_daily_progress_boundary(make_habit):
    h = make_habit(frequency="daily", completed_dates=["2024-03-10"])
    assert period_progress(h, date(2024, 3, 10)) == Progress(count=1, target=1, is_goal_met=True)
    assert period_progress(h, date(2024, 3, 11)) == Progress(count=0, target=1, is_goal_met=False)


def test_daily_target_ignores_stored_count(make_habit):
    h = make_habit(frequency="daily", target_count=4, completed_dates=["2024-03-10"])
    progress = period_progress(h, date(2024, 3, 10))
    assert progress.target == 1
    assert progress.is_goal_met


def test_weekly_counts_from_monday(make_habit):
    h = make_habit(frequency="weekly", target_count=3, completed_dates=["2024-03-04", "2024-03-05"])
    progress = period_progress(h, date(2024, 3, 7))
    assert progress == Progress(count=2, target=3, is_goal_met=False)


def test_weekly_resets_next_monday(make_habit):
    h = make_habit(frequency="weekly", target_count=3, completed_dates=["2024-03-04", "2024-03-05"])
    assert period_progress(h, date(2024, 3, 11)).count == 0


def test_weekly_sunday_belongs_to_previous_monday(make_habit):
    h = make_habit(frequency="weekly", target_count=2, completed_dates=["2024-03-04", "2024-03-10"])
    progress = period_progress(h, date(2024, 3, 10))
    assert progress.count == 2
    assert progress.is_goal_met


def test_weekly_excludes_previous_sunday(make_habit):
    h = make_habit(frequency="weekly", target_count=1, completed_dates=["2024-03-03"])
    assert period_progress(h, date(2024, 3, 4)).count == 0


def test_weekly_counts_future_entries_without_upper_bound(make_habit):
    h = make_habit(frequency="weekly", target_count=2, completed_dates=["2024-03-05", "2024-03-20"])
    assert period_progress(h, date(2024, 3, 6)).count == 2


def test_weekly_bounded_variant_caps_at_sunday(make_habit):
    h = make_habit(frequency="weekly", target_count=2, completed_dates=["2024-03-05", "2024-03-20"])
    progress = period_progress(h, date(2024, 3, 6), bounded_week=True)
    assert progress == Progress(count=1, target=2, is_goal_met=False)


def test_monthly_groups_by_calendar_month(make_habit):
    h = make_habit(
        frequency="monthly",
        target_count=2,
        completed_dates=["2024-02-15", "2024-03-01", "2024-03-20"],
    )
    assert period_progress(h, date(2024, 3, 10)) == Progress(count=2, target=2, is_goal_met=True)


def test_monthly_ignores_same_month_other_year(make_habit):
    h = make_habit(frequency="monthly", target_count=1, completed_dates=["2023-03-10"])
    assert period_progress(h, date(2024, 3, 10)).count == 0


def test_progress_skips_malformed_keys(make_habit):
    h = make_habit(frequency="monthly", completed_dates=["garbage", "2024-03-02"])
    assert period_progress(h, date(2024, 3, 10)).count == 1


def test_progress_is_pure(make_habit):
    h = make_habit(frequency="weekly", target_count=2, completed_dates=["2024-03-05"], streak=1)
    first = period_progress(h, date(2024, 3, 6))
    second = period_progress(h, date(2024, 3, 6))
    assert first == second
    assert h.completed_dates == ("2024-03-05",)
    assert h.streak == 1


def test_daily_completion_rate_excludes_other_frequencies(make_habit):
    habits = [
        make_habit(frequency="daily", completed_dates=["2024-03-10"]),
        make_habit(frequency="daily"),
        make_habit(frequency="weekly", completed_dates=["2024-03-10"]),
    ]
    assert daily_completion_rate(habits, date(2024, 3, 10)) == 50


def test_daily_completion_rate_without_daily_habits(make_habit):
    assert daily_completion_rate([make_habit(frequency="weekly")], date(2024, 3, 10)) == 0
    assert daily_completion_rate([], date(2024, 3, 10)) == 0


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 8, 38), (1, 1, 100)],
)
def test_daily_completion_rate_rounds_half_up(make_habit, done, total, expected):
    habits = [
        make_habit(frequency="daily", completed_dates=["2024-03-10"] if i < done else [])
        for i in range(total)
    ]
    assert daily_completion_rate(habits, date(2024, 3, 10)) == expected


def test_group_by_category_first_occurrence_order(make_habit):
    habits = [
        make_habit(category="learning"),
        make_habit(category="health"),
        make_habit(category="learning"),
        make_habit(category="other"),
    ]
    groups = group_by_category(habits)
    assert [(g.category, g.count) for g in groups] == [("learning", 2), ("health", 1), ("other", 1)]
    assert sum(g.count for g in groups) == len(habits)


def test_group_by_category_empty():
    assert group_by_category([]) == []


def test_trailing_streak_counts_consecutive_days(make_habit):
    h = make_habit(completed_dates=["2024-03-08", "2024-03-10", "2024-03-09", "2024-03-05"])
    assert trailing_streak(h, date(2024, 3, 10)) == 3


def test_trailing_streak_allows_reference_day_open(make_habit):
    h = make_habit(completed_dates=["2024-03-08", "2024-03-09"])
    assert trailing_streak(h, date(2024, 3, 10)) == 2


def test_trailing_streak_broken(make_habit):
    h = make_habit(completed_dates=["2024-03-07", "2024-03-08"])
    assert trailing_streak(h, date(2024, 3, 10)) == 0


def test_trailing_streak_ignores_future_days(make_habit):
    h = make_habit(completed_dates=["2024-03-10", "2024-03-11"])
    assert trailing_streak(h, date(2024, 3, 10)) == 1
