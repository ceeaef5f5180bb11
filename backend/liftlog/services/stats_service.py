from __future__ import annotations

import logging
from datetime import date

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftlog.repositories.goal_repo import GoalRepository
from liftlog.repositories.stats_repo import StatsRepository
from liftlog.services import stats
from liftlog.services.clock import local_today
from liftlog.settings import get_settings

log = logging.getLogger(__name__)


class StatsService:
    """One user's statistics: one query, then one reduction in ``stats``."""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StatsRepository(db)
        self.goals = GoalRepository(db)

    def streak(self, user_id: str, *, today: date | None = None) -> stats.StreakData:
        return stats.compute_streak(self.repo.workout_dates(user_id), today or local_today())

    def personal_records(self, user_id: str, *, limit: int = 3) -> list[stats.PRRecord]:
        return stats.extract_prs(self.repo.dated_sets(user_id), limit=limit)

    def monthly_summary(self, user_id: str, year: int, month: int) -> stats.MonthlySummary:
        start, end = stats.month_bounds(year, month)
        sessions = self.repo.session_trees(user_id, start, end)

        prev_year, prev_month = stats.previous_month(year, month)
        prev_start, prev_end = stats.month_bounds(prev_year, prev_month)
        try:
            previous = self.repo.session_trees(user_id, prev_start, prev_end)
        except SQLAlchemyError:
            # comparison figures are optional; keep the current month
            log.warning("previous month query failed for user=%s %d-%02d", user_id, prev_year, prev_month,
                        exc_info=True)
            self.db.rollback()
            previous = None

        return stats.summarize_month(year, month, sessions, previous)

    def heatmap(self, user_id: str, year: int, month: int) -> list[stats.HeatmapEntry]:
        start, end = stats.month_bounds(year, month)
        return stats.build_heatmap(self.repo.session_trees(user_id, start, end))

    def balance(self, user_id: str, *, start: date | None = None, end: date | None = None) -> list[stats.BalanceEntry]:
        return stats.compute_balance(self.repo.category_sets(user_id, start=start, end=end))

    def progress(
        self,
        user_id: str,
        exercise_id: int,
        *,
        start: date | None = None,
        end: date | None = None,
    ) -> stats.ProgressData | None:
        rows = self.repo.dated_sets(user_id, exercise_id=exercise_id, start=start, end=end, require_reps=True)
        return stats.compute_progress(exercise_id, rows)

    def user_exercises(self, user_id: str) -> list[tuple[int, str]]:
        return self.repo.user_exercises(user_id)

    def weekly_goal(self, user_id: str, *, today: date | None = None) -> stats.WeeklyGoal:
        monday, sunday = stats.week_bounds(today or local_today())
        current = len(set(self.repo.workout_dates(user_id, start=monday, end=sunday)))

        goal = self.goals.get(user_id)
        if goal is None:
            return stats.weekly_goal_progress(0, get_settings().DEFAULT_WEEKLY_TARGET, current)
        return stats.weekly_goal_progress(goal.id, goal.target_value, current)

    def save_weekly_goal(self, user_id: str, target_value: int) -> None:
        self.goals.upsert(user_id, target_value=target_value)
        log.info("weekly goal set user=%s target=%d", user_id, target_value)
