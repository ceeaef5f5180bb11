"""
Read queries feeding the statistics engine.

Each method runs one query and maps the joined result onto the typed rows of
``liftlog.services.stats``; nothing here aggregates.
"""
from __future__ import annotations
from datetime import date
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload
from liftlog.models import Category, Exercise, ExerciseSet, SessionExercise, WorkoutSession
from liftlog.services.stats import CategorySet, DatedSet, ExerciseRow, SessionTree, SetRow

class StatsRepository:
    def __init__(self, db: Session):
        self.db = db

    def workout_dates(self, user_id: str, *, start: date | None = None, end: date | None = None) -> list[date]:
        stmt = select(WorkoutSession.date).where(WorkoutSession.user_id == user_id)
        if start is not None:
            stmt = stmt.where(WorkoutSession.date >= start)
        if end is not None:
            stmt = stmt.where(WorkoutSession.date <= end)
        stmt = stmt.order_by(WorkoutSession.date.desc())
        return list(self.db.execute(stmt).scalars().all())

    def dated_sets(
        self,
        user_id: str,
        *,
        exercise_id: int | None = None,
        start: date | None = None,
        end: date | None = None,
        require_reps: bool = False,
    ) -> list[DatedSet]:
        """Weighted sets (weight > 0) joined to exercise name and session date."""
        stmt = select(
                SessionExercise.exercise_id,
                Exercise.name,
                ExerciseSet.weight,
                ExerciseSet.reps,
                WorkoutSession.date,
            )\
            .select_from(ExerciseSet)\
            .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)\
            .join(Exercise, SessionExercise.exercise_id == Exercise.id)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .where(
                WorkoutSession.user_id == user_id,
                ExerciseSet.weight.is_not(None),
                ExerciseSet.weight > 0,
            )
        if require_reps:
            stmt = stmt.where(ExerciseSet.reps.is_not(None), ExerciseSet.reps > 0)
        if exercise_id is not None:
            stmt = stmt.where(SessionExercise.exercise_id == exercise_id)
        if start is not None:
            stmt = stmt.where(WorkoutSession.date >= start)
        if end is not None:
            stmt = stmt.where(WorkoutSession.date <= end)
        stmt = stmt.order_by(WorkoutSession.date.asc(), ExerciseSet.id.asc())

        return [
            DatedSet(exercise_id=ex_id, exercise_name=name, weight=weight, reps=reps, date=d)
            for ex_id, name, weight, reps, d in self.db.execute(stmt).all()
        ]

    def session_trees(self, user_id: str, start: date, end: date) -> list[SessionTree]:
        stmt = select(WorkoutSession)\
            .options(selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets))\
            .where(WorkoutSession.user_id == user_id, WorkoutSession.date >= start, WorkoutSession.date <= end)\
            .order_by(WorkoutSession.date.asc())
        sessions = self.db.execute(stmt).scalars().all()
        return [
            SessionTree(
                date=sess.date,
                exercises=tuple(
                    ExerciseRow(sets=tuple(SetRow(weight=s.weight, reps=s.reps) for s in entry.sets))
                    for entry in sess.exercises
                ),
            )
            for sess in sessions
        ]

    def category_sets(self, user_id: str, *, start: date | None = None, end: date | None = None) -> list[CategorySet]:
        stmt = select(Category.id, Category.name)\
            .select_from(ExerciseSet)\
            .join(SessionExercise, ExerciseSet.session_exercise_id == SessionExercise.id)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .outerjoin(Exercise, SessionExercise.exercise_id == Exercise.id)\
            .outerjoin(Category, Exercise.category_id == Category.id)\
            .where(WorkoutSession.user_id == user_id)
        if start is not None:
            stmt = stmt.where(WorkoutSession.date >= start)
        if end is not None:
            stmt = stmt.where(WorkoutSession.date <= end)
        return [
            CategorySet(category_id=cid, category_name=name)
            for cid, name in self.db.execute(stmt).all()
        ]

    def user_exercises(self, user_id: str) -> list[tuple[int, str]]:
        """Distinct exercises the user has logged, by name."""
        stmt = select(Exercise.id, Exercise.name)\
            .select_from(SessionExercise)\
            .join(Exercise, SessionExercise.exercise_id == Exercise.id)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .where(WorkoutSession.user_id == user_id)\
            .distinct()\
            .order_by(Exercise.name.asc(), Exercise.id.asc())
        return [(ex_id, name) for ex_id, name in self.db.execute(stmt).all()]
