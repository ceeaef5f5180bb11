"""
Unit tests for the pure statistics helpers in liftlog.services.stats.
Run: cd backend && python -m pytest tests/test_stats_engine.py -v
"""
import unittest
from datetime import date, timedelta

from liftlog.services.stats import (
    BalanceEntry,
    CalendarRow,
    CategorySet,
    DatedSet,
    ExerciseRow,
    SessionTree,
    SetRow,
    build_calendar,
    build_heatmap,
    calculate_1rm,
    compute_balance,
    compute_progress,
    compute_streak,
    extract_prs,
    month_bounds,
    previous_month,
    round_half_up,
    summarize_month,
    week_bounds,
    weekly_goal_progress,
)

TODAY = date(2024, 3, 14)  # a Thursday


def days_ago(n):
    return TODAY - timedelta(days=n)


def session(d, *sets_per_exercise):
    return SessionTree(
        date=d,
        exercises=tuple(ExerciseRow(sets=tuple(SetRow(w, r) for w, r in sets)) for sets in sets_per_exercise),
    )


# --- rounding / calendar helpers ---
class TestHelpers(unittest.TestCase):
    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(2.4), 2)
        self.assertEqual(round_half_up(12.25, 1), 12.3)

    def test_round_half_up_returns_int_for_whole_numbers(self):
        self.assertIsInstance(round_half_up(74.6), int)

    def test_month_bounds_leap_february(self):
        self.assertEqual(month_bounds(2024, 2), (date(2024, 2, 1), date(2024, 2, 29)))

    def test_previous_month_wraps_year(self):
        self.assertEqual(previous_month(2024, 1), (2023, 12))
        self.assertEqual(previous_month(2024, 7), (2024, 6))

    def test_week_bounds_monday_to_sunday(self):
        self.assertEqual(week_bounds(TODAY), (date(2024, 3, 11), date(2024, 3, 17)))
        # Sunday belongs to the week that started six days earlier
        self.assertEqual(week_bounds(date(2024, 3, 17))[0], date(2024, 3, 11))


# --- calendar ---
class TestCalendar(unittest.TestCase):
    def test_categories_first_seen_and_distinct_entries(self):
        rows = [
            CalendarRow(date(2024, 5, 2), 10, "Chest"),
            CalendarRow(date(2024, 5, 2), 11, "Chest"),
            CalendarRow(date(2024, 5, 2), 12, "Legs"),
            CalendarRow(date(2024, 5, 1), 9, None),
        ]
        days = build_calendar(rows)
        self.assertEqual([d.date for d in days], [date(2024, 5, 2)])
        self.assertEqual(days[0].categories, ["Chest", "Legs"])
        self.assertEqual(days[0].exercise_count, 3)

    def test_unresolved_category_rows_are_skipped(self):
        rows = [
            CalendarRow(date(2024, 5, 3), 20, None),
            CalendarRow(date(2024, 5, 3), 21, "Back"),
        ]
        days = build_calendar(rows)
        self.assertEqual(len(days), 1)
        self.assertEqual(days[0].categories, ["Back"])
        self.assertEqual(days[0].exercise_count, 1)


# --- streaks ---
class TestStreak(unittest.TestCase):
    def test_empty(self):
        s = compute_streak([], TODAY)
        self.assertEqual((s.current_streak, s.max_streak, s.max_streak_date), (0, 0, None))
        self.assertEqual(s.weekdays, [False] * 7)

    def test_basic_run_ending_today(self):
        s = compute_streak([TODAY, days_ago(1), days_ago(2)], TODAY)
        self.assertEqual(s.current_streak, 3)
        self.assertEqual(s.max_streak, 3)

    def test_gap_resets_current_not_max(self):
        s = compute_streak([TODAY, days_ago(5), days_ago(6), days_ago(7)], TODAY)
        self.assertEqual(s.current_streak, 1)
        self.assertEqual(s.max_streak, 3)
        self.assertEqual(s.max_streak_date, days_ago(7))

    def test_trailing_run_counts_towards_max(self):
        # one unbroken run, never followed by a gap
        s = compute_streak([days_ago(i) for i in range(10, 14)], TODAY)
        self.assertEqual(s.current_streak, 0)
        self.assertEqual(s.max_streak, 4)
        self.assertEqual(s.max_streak_date, days_ago(13))

    def test_run_ending_yesterday_is_still_current(self):
        s = compute_streak([days_ago(1), days_ago(2)], TODAY)
        self.assertEqual(s.current_streak, 2)

    def test_run_ending_two_days_ago_is_broken(self):
        s = compute_streak([days_ago(2), days_ago(3)], TODAY)
        self.assertEqual(s.current_streak, 0)
        self.assertEqual(s.max_streak, 2)

    def test_duplicate_dates_count_once(self):
        s = compute_streak([TODAY, TODAY, days_ago(1)], TODAY)
        self.assertEqual(s.current_streak, 2)

    def test_weekdays_flags_current_week(self):
        # Monday and Wednesday of this week, plus last Sunday
        s = compute_streak([date(2024, 3, 11), date(2024, 3, 13), date(2024, 3, 10)], TODAY)
        self.assertEqual(s.weekdays, [True, False, True, False, False, False, False])


# --- personal records ---
class TestPRs(unittest.TestCase):
    d1, d2 = date(2024, 1, 1), date(2024, 1, 8)

    def test_heaviest_per_exercise_sorted_desc(self):
        rows = [
            DatedSet(1, "A", 100, 5, self.d1),
            DatedSet(1, "A", 120, 3, self.d2),
            DatedSet(2, "B", 50, 10, self.d1),
        ]
        prs = extract_prs(rows, limit=3)
        self.assertEqual([(p.exercise_id, p.weight, p.date) for p in prs], [(1, 120, self.d2), (2, 50, self.d1)])

    def test_tie_keeps_earliest_date(self):
        rows = [DatedSet(1, "A", 100, 5, self.d2), DatedSet(1, "A", 100, 3, self.d1)]
        self.assertEqual(extract_prs(rows)[0].date, self.d1)

    def test_limit_and_unweighted_sets(self):
        rows = [DatedSet(i, f"E{i}", 10 * i, 5, self.d1) for i in range(1, 6)]
        rows.append(DatedSet(9, "Plank", None, None, self.d1))
        prs = extract_prs(rows, limit=2)
        self.assertEqual([p.exercise_id for p in prs], [5, 4])
        self.assertEqual(extract_prs(rows, limit=0), [])


# --- monthly summary / heatmap ---
class TestMonthly(unittest.TestCase):
    def test_volume_skips_missing_weight_or_reps(self):
        sessions = [session(date(2024, 2, 3), [(100, 5), (None, 5), (80, 0)])]
        summary = summarize_month(2024, 2, sessions, previous=[])
        self.assertEqual(summary.total_volume, 500)
        self.assertEqual(summary.total_sets, 3)
        self.assertEqual(summary.workout_days, 1)
        self.assertEqual(summary.total_days, 29)
        self.assertEqual((summary.prev_workout_days, summary.prev_total_volume), (0, 0))

    def test_previous_month_unavailable(self):
        summary = summarize_month(2024, 3, [], previous=None)
        self.assertIsNone(summary.prev_workout_days)
        self.assertIsNone(summary.prev_total_volume)

    def test_previous_month_tallied(self):
        prev = [session(date(2024, 2, 1), [(50, 10)]), session(date(2024, 2, 2), [(60, 10)])]
        summary = summarize_month(2024, 3, [], previous=prev)
        self.assertEqual(summary.prev_workout_days, 2)
        self.assertEqual(summary.prev_total_volume, 1100)

    def test_heatmap_counts_sets_and_drops_empty_days(self):
        sessions = [
            session(date(2024, 2, 5), [(100, 5), (100, 5)], [(20, 12)]),
            session(date(2024, 2, 1), [(None, None)]),
            session(date(2024, 2, 9)),
        ]
        entries = build_heatmap(sessions)
        self.assertEqual([(e.date, e.set_count) for e in entries], [(date(2024, 2, 1), 1), (date(2024, 2, 5), 3)])


# --- body-part balance ---
class TestBalance(unittest.TestCase):
    def test_percentages_and_order(self):
        rows = [CategorySet(2, "B")] + [CategorySet(1, "A")] * 3
        self.assertEqual(
            compute_balance(rows),
            [BalanceEntry(1, "A", 3, 75), BalanceEntry(2, "B", 1, 25)],
        )

    def test_unresolved_category_is_skipped(self):
        rows = [CategorySet(None, None), CategorySet(1, "A")]
        self.assertEqual(compute_balance(rows), [BalanceEntry(1, "A", 1, 100)])

    def test_equal_counts_order_by_id(self):
        rows = [CategorySet(3, "C"), CategorySet(1, "A"), CategorySet(2, "B")]
        self.assertEqual([e.category_id for e in compute_balance(rows)], [1, 2, 3])
        self.assertEqual([e.percentage for e in compute_balance(rows)], [33, 33, 33])

    def test_empty(self):
        self.assertEqual(compute_balance([]), [])


# --- strength progress ---
class TestProgress(unittest.TestCase):
    def test_1rm_formula(self):
        self.assertEqual(calculate_1rm(100, 1), 100)
        self.assertEqual(calculate_1rm(100, 0), 0)
        self.assertEqual(calculate_1rm(0, 5), 0)
        self.assertEqual(calculate_1rm(100, 10), 133)

    def test_change_between_last_two_days(self):
        rows = [DatedSet(7, "Squat", 100, 1, date(2024, 1, 1)), DatedSet(7, "Squat", 110, 1, date(2024, 1, 8))]
        p = compute_progress(7, rows)
        self.assertEqual(p.exercise_name, "Squat")
        self.assertEqual((p.current_1rm, p.previous_1rm), (110, 100))
        self.assertEqual(p.change_kg, 10)
        self.assertEqual(p.change_percent, 10.0)

    def test_best_set_of_the_day_wins(self):
        d = date(2024, 1, 1)
        rows = [DatedSet(7, "Squat", 100, 5, d), DatedSet(7, "Squat", 90, 10, d)]
        p = compute_progress(7, rows)
        self.assertEqual(len(p.data_points), 1)
        # 90 * (1 + 10/30) = 120 beats 100 * (1 + 5/30) = 116.67 -> 117
        self.assertEqual(p.data_points[0].estimated_1rm, 120)

    def test_single_point_has_no_change(self):
        p = compute_progress(7, [DatedSet(7, "Squat", 100, 1, date(2024, 1, 1))])
        self.assertIsNone(p.previous_1rm)
        self.assertIsNone(p.change_kg)
        self.assertIsNone(p.change_percent)

    def test_no_qualifying_sets(self):
        rows = [DatedSet(7, "Squat", None, 5, date(2024, 1, 1)), DatedSet(7, "Squat", 100, 0, date(2024, 1, 2))]
        self.assertIsNone(compute_progress(7, rows))

    def test_points_sorted_by_date(self):
        rows = [DatedSet(7, "Squat", 120, 1, date(2024, 2, 1)), DatedSet(7, "Squat", 100, 1, date(2024, 1, 1))]
        p = compute_progress(7, rows)
        self.assertEqual([pt.date for pt in p.data_points], [date(2024, 1, 1), date(2024, 2, 1)])
        self.assertEqual(p.current_1rm, 120)


# --- weekly goal ---
class TestWeeklyGoal(unittest.TestCase):
    def test_default_target(self):
        g = weekly_goal_progress(0, 5, 3)
        self.assertEqual((g.target_value, g.current_value, g.percentage), (5, 3, 60))

    def test_capped_at_100(self):
        self.assertEqual(weekly_goal_progress(1, 3, 5).percentage, 100)

    def test_zero_target(self):
        self.assertEqual(weekly_goal_progress(1, 0, 0).percentage, 100)


if __name__ == "__main__":
    unittest.main()
