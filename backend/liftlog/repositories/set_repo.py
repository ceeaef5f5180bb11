from __future__ import annotations
from typing import Optional
from sqlalchemy import select
from sqlalchemy.orm import Session
from liftlog.models import ExerciseSet, SessionExercise, WorkoutSession
from liftlog.repositories.base import BaseRepository

class SetRepository(BaseRepository[ExerciseSet]):
    def __init__(self, db: Session):
        super().__init__(db)

    def get(self, set_id: int, user_id: str) -> Optional[ExerciseSet]:
        # Ownership via set -> entry -> session -> user
        stmt = select(ExerciseSet)\
            .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .where(ExerciseSet.id == set_id, WorkoutSession.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_entry(self, entry_id: int) -> list[ExerciseSet]:
        stmt = select(ExerciseSet).where(ExerciseSet.session_exercise_id == entry_id)\
            .order_by(ExerciseSet.set_number.asc())
        return list(self.db.execute(stmt).scalars().all())

    def delete(self, s: ExerciseSet) -> tuple[int, int]:
        """Delete one set and renumber the rest; returns (entry_id, session_id)."""
        entry_id = s.session_exercise_id
        session_id = self.db.execute(
            select(SessionExercise.session_id).where(SessionExercise.id == entry_id)
        ).scalar_one()
        self.db.delete(s)
        self.db.flush()
        for idx, remaining in enumerate(self.list_by_entry(entry_id), start=1):
            remaining.set_number = idx
        self.db.commit()
        return entry_id, session_id
