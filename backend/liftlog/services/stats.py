"""
Workout statistics engine.

Pure functions that reduce the typed rows produced by the repositories into the
statistic shapes served by ``/stats``. Nothing in here touches the database or
the clock: callers pass ``today`` explicitly.
"""
from __future__ import annotations

import calendar
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Sequence

ONE_DAY = timedelta(days=1)


# --- typed input rows ---

@dataclass(frozen=True, slots=True)
class DatedSet:
    """One set joined to its exercise and the date of its session."""
    exercise_id: int
    exercise_name: str
    weight: float | None
    reps: int | None
    date: date


@dataclass(frozen=True, slots=True)
class SetRow:
    weight: float | None
    reps: int | None


@dataclass(frozen=True, slots=True)
class ExerciseRow:
    sets: tuple[SetRow, ...] = ()


@dataclass(frozen=True, slots=True)
class SessionTree:
    """A session with its exercises and their sets, as loaded for a month."""
    date: date
    exercises: tuple[ExerciseRow, ...] = ()


@dataclass(frozen=True, slots=True)
class CategorySet:
    # None when the exercise -> category join did not resolve
    category_id: int | None
    category_name: str | None


@dataclass(frozen=True, slots=True)
class CalendarRow:
    date: date
    entry_id: int
    category_name: str | None


# --- results ---

@dataclass(slots=True)
class CalendarDay:
    date: date
    categories: list[str]
    exercise_count: int


@dataclass(slots=True)
class StreakData:
    current_streak: int
    max_streak: int
    max_streak_date: date | None
    weekdays: list[bool] = field(default_factory=lambda: [False] * 7)


@dataclass(slots=True)
class PRRecord:
    exercise_id: int
    exercise_name: str
    weight: float
    date: date


@dataclass(slots=True)
class MonthlySummary:
    workout_days: int
    total_days: int
    total_volume: float
    total_sets: int
    prev_workout_days: int | None
    prev_total_volume: float | None


@dataclass(slots=True)
class HeatmapEntry:
    date: date
    set_count: int


@dataclass(slots=True)
class BalanceEntry:
    category_id: int
    category_name: str
    set_count: int
    percentage: int


@dataclass(slots=True)
class ProgressPoint:
    date: date
    estimated_1rm: float


@dataclass(slots=True)
class ProgressData:
    exercise_id: int
    exercise_name: str
    data_points: list[ProgressPoint]
    current_1rm: float | None
    previous_1rm: float | None
    change_kg: float | None
    change_percent: float | None


@dataclass(slots=True)
class WeeklyGoal:
    id: int
    target_value: int
    current_value: int
    percentage: int


# --- helpers ---

def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves away from -inf like the clients do (2.5 -> 3, not 2)."""
    scale = 10 ** ndigits
    rounded = math.floor(value * scale + 0.5) / scale
    return int(rounded) if ndigits == 0 else rounded


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if month == 1:
        return year - 1, 12
    return year, month - 1


def week_bounds(today: date) -> tuple[date, date]:
    """Monday and Sunday of the ISO week containing ``today``."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


# --- calendar ---

def build_calendar(rows: Iterable[CalendarRow]) -> list[CalendarDay]:
    """Per day: trained body parts (first-seen order) and number of exercises.

    Rows whose category did not resolve are skipped.
    """
    days: dict[date, CalendarDay] = {}
    entries: dict[date, set[int]] = {}
    for row in rows:
        if not row.category_name:
            continue
        day = days.setdefault(row.date, CalendarDay(date=row.date, categories=[], exercise_count=0))
        if row.category_name not in day.categories:
            day.categories.append(row.category_name)
        entries.setdefault(row.date, set()).add(row.entry_id)
    for d, ids in entries.items():
        days[d].exercise_count = len(ids)
    return [days[d] for d in sorted(days)]


# --- streaks ---

def compute_streak(dates: Iterable[date], today: date) -> StreakData:
    present = set(dates)
    if not present:
        return StreakData(current_streak=0, max_streak=0, max_streak_date=None)

    ordered = sorted(present)

    # current: only alive if the last workout was today or yesterday
    current = 0
    latest = ordered[-1]
    if latest == today or latest == today - ONE_DAY:
        day = latest
        while day in present:
            current += 1
            day -= ONE_DAY

    best, best_start = 0, None
    run, run_start = 1, ordered[0]
    for prev, cur in zip(ordered, ordered[1:]):
        if (cur - prev).days == 1:
            run += 1
            continue
        if run > best:
            best, best_start = run, run_start
        run, run_start = 1, cur
    # the last run never hits the reset branch above
    if run > best:
        best, best_start = run, run_start

    monday, _ = week_bounds(today)
    weekdays = [monday + timedelta(days=i) in present for i in range(7)]

    return StreakData(
        current_streak=current,
        max_streak=max(best, current),
        max_streak_date=best_start,
        weekdays=weekdays,
    )


# --- personal records ---

def extract_prs(rows: Iterable[DatedSet], limit: int = 3) -> list[PRRecord]:
    """Heaviest set per exercise, heaviest first.

    Ties on weight keep the earliest date.
    """
    best: dict[int, PRRecord] = {}
    for row in rows:
        if row.weight is None or row.weight <= 0:
            continue
        held = best.get(row.exercise_id)
        if held is None or row.weight > held.weight or (
            row.weight == held.weight and row.date < held.date
        ):
            best[row.exercise_id] = PRRecord(
                exercise_id=row.exercise_id,
                exercise_name=row.exercise_name,
                weight=row.weight,
                date=row.date,
            )
    if limit <= 0:
        return []
    return sorted(best.values(), key=lambda r: r.weight, reverse=True)[:limit]


# --- monthly summary / heatmap ---

def _tally(sessions: Iterable[SessionTree]) -> tuple[int, float, int]:
    days: set[date] = set()
    volume = 0.0
    sets = 0
    for session in sessions:
        days.add(session.date)
        for exercise in session.exercises:
            for s in exercise.sets:
                sets += 1
                if s.weight and s.reps:
                    volume += s.weight * s.reps
    return len(days), volume, sets


def summarize_month(
    year: int,
    month: int,
    sessions: Sequence[SessionTree],
    previous: Sequence[SessionTree] | None,
) -> MonthlySummary:
    """``previous`` is None when the previous month could not be loaded."""
    workout_days, volume, sets = _tally(sessions)
    prev_days = prev_volume = None
    if previous is not None:
        prev_days, prev_volume, _ = _tally(previous)
    return MonthlySummary(
        workout_days=workout_days,
        total_days=calendar.monthrange(year, month)[1],
        total_volume=volume,
        total_sets=sets,
        prev_workout_days=prev_days,
        prev_total_volume=prev_volume,
    )


def build_heatmap(sessions: Iterable[SessionTree]) -> list[HeatmapEntry]:
    counts: dict[date, int] = {}
    for session in sessions:
        n = sum(len(e.sets) for e in session.exercises)
        counts[session.date] = counts.get(session.date, 0) + n
    return [HeatmapEntry(date=d, set_count=n) for d, n in sorted(counts.items()) if n > 0]


# --- body-part balance ---

def compute_balance(rows: Iterable[CategorySet]) -> list[BalanceEntry]:
    names: dict[int, str] = {}
    counts: dict[int, int] = {}
    for row in rows:
        if row.category_id is None:
            continue
        names.setdefault(row.category_id, row.category_name or "")
        counts[row.category_id] = counts.get(row.category_id, 0) + 1

    total = sum(counts.values())
    entries = [
        BalanceEntry(
            category_id=cid,
            category_name=names[cid],
            set_count=n,
            percentage=round_half_up(n / total * 100) if total else 0,
        )
        for cid, n in counts.items()
    ]
    entries.sort(key=lambda e: (-e.set_count, e.category_id))
    return entries


# --- strength progress ---

def calculate_1rm(weight: float, reps: int) -> float:
    """Estimated one-rep max (Epley)."""
    if reps == 1:
        return weight
    if not reps or not weight:
        return 0
    return round_half_up(weight * (1 + reps / 30))


def compute_progress(exercise_id: int, rows: Iterable[DatedSet]) -> ProgressData | None:
    best_by_day: dict[date, float] = {}
    name = ""
    for row in rows:
        if not row.weight or not row.reps or row.weight <= 0 or row.reps <= 0:
            continue
        name = row.exercise_name
        est = calculate_1rm(row.weight, row.reps)
        if row.date not in best_by_day or best_by_day[row.date] < est:
            best_by_day[row.date] = est

    if not best_by_day:
        return None

    points = [ProgressPoint(date=d, estimated_1rm=best_by_day[d]) for d in sorted(best_by_day)]
    current = points[-1].estimated_1rm
    previous = points[-2].estimated_1rm if len(points) > 1 else None

    change_kg = change_percent = None
    if previous is not None:
        change_kg = current - previous
        change_percent = round_half_up(change_kg / previous * 100, 1) if previous > 0 else 0

    return ProgressData(
        exercise_id=exercise_id,
        exercise_name=name,
        data_points=points,
        current_1rm=current,
        previous_1rm=previous,
        change_kg=change_kg,
        change_percent=change_percent,
    )


# --- weekly goal ---

def weekly_goal_progress(goal_id: int, target_value: int, current_value: int) -> WeeklyGoal:
    if target_value > 0:
        pct = min(round_half_up(current_value / target_value * 100), 100)
    else:
        pct = 100
    return WeeklyGoal(
        id=goal_id,
        target_value=target_value,
        current_value=current_value,
        percentage=pct,
    )
