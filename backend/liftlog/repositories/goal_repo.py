from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError, OperationalError, ProgrammingError
from sqlalchemy.orm import Session

from liftlog.models import UserGoal, WEEKLY_WORKOUTS
from liftlog.repositories.base import BaseRepository

log = logging.getLogger(__name__)

UNDEFINED_TABLE = "42P01"  # postgres SQLSTATE


def is_missing_table(exc: DBAPIError) -> bool:
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNDEFINED_TABLE:
        return True
    return "no such table" in str(orig).lower()


class GoalRepository(BaseRepository[UserGoal]):
    def __init__(self, db: Session):
        super().__init__(db)

    def get(self, user_id: str, goal_type: str = WEEKLY_WORKOUTS) -> Optional[UserGoal]:
        """The stored goal, or None when there is none.

        Deployments without the ``user_goals`` table count as "no goal".
        """
        stmt = select(UserGoal).where(UserGoal.user_id == user_id, UserGoal.goal_type == goal_type)
        try:
            return self.db.execute(stmt).scalar_one_or_none()
        except (ProgrammingError, OperationalError) as exc:
            if not is_missing_table(exc):
                raise
            # postgres aborts the transaction on any error
            self.db.rollback()
            log.warning("user_goals table missing; using default goal for user=%s", user_id)
            return None

    def upsert(self, user_id: str, *, target_value: int, goal_type: str = WEEKLY_WORKOUTS) -> UserGoal:
        """Insert or replace target_value/updated_at on the (user_id, goal_type) pair."""
        now = datetime.now(timezone.utc)
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            return self._upsert_orm(user_id, target_value=target_value, goal_type=goal_type, now=now)

        stmt = insert(UserGoal).values(
            user_id=user_id,
            goal_type=goal_type,
            target_value=target_value,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[UserGoal.user_id, UserGoal.goal_type],
            set_={"target_value": stmt.excluded.target_value, "updated_at": stmt.excluded.updated_at},
        )
        self.db.execute(stmt)
        self.db.commit()
        # the upsert bypassed the identity map
        self.db.expire_all()
        return self.get(user_id, goal_type)

    def _upsert_orm(self, user_id: str, *, target_value: int, goal_type: str, now: datetime) -> UserGoal:
        goal = self.get(user_id, goal_type)
        if goal is None:
            goal = UserGoal(user_id=user_id, goal_type=goal_type)
        goal.target_value = target_value
        goal.updated_at = now
        return self.save(goal)
