from __future__ import annotations
from datetime import date
from typing import Optional, Sequence
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload
from liftlog.models import Category, Exercise, ExerciseSet, SessionExercise, WorkoutSession
from liftlog.repositories.base import BaseRepository, SetLike, numbered_sets
from liftlog.services.stats import CalendarRow

# session -> exercises -> (sets, catalog row)
_TREE = (
    selectinload(WorkoutSession.exercises).selectinload(SessionExercise.sets),
    selectinload(WorkoutSession.exercises).selectinload(SessionExercise.exercise),
)

class SessionRepository(BaseRepository[WorkoutSession]):
    def __init__(self, db: Session):
        super().__init__(db)

    # READS
    def get(self, session_id: int, user_id: str) -> Optional[WorkoutSession]:
        stmt = select(WorkoutSession).options(*_TREE)\
            .where(WorkoutSession.id == session_id, WorkoutSession.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_date(self, user_id: str, day: date) -> Optional[WorkoutSession]:
        stmt = select(WorkoutSession).options(*_TREE)\
            .where(WorkoutSession.user_id == user_id, WorkoutSession.date == day)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_entry(self, entry_id: int, user_id: str) -> Optional[SessionExercise]:
        stmt = select(SessionExercise)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .options(selectinload(SessionExercise.sets), selectinload(SessionExercise.exercise))\
            .where(SessionExercise.id == entry_id, WorkoutSession.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def find_entry(self, session_id: int, exercise_id: int) -> Optional[SessionExercise]:
        stmt = select(SessionExercise)\
            .where(SessionExercise.session_id == session_id, SessionExercise.exercise_id == exercise_id)\
            .order_by(SessionExercise.order_num.asc())\
            .limit(1)
        return self.db.execute(stmt).scalars().first()

    def exercise_ids(self, session_id: int) -> set[int]:
        stmt = select(SessionExercise.exercise_id).where(SessionExercise.session_id == session_id)
        return set(self.db.execute(stmt).scalars().all())

    def calendar_rows(self, user_id: str, start: date, end: date) -> list[CalendarRow]:
        stmt = select(WorkoutSession.date, SessionExercise.id, Category.name)\
            .select_from(WorkoutSession)\
            .join(SessionExercise, SessionExercise.session_id == WorkoutSession.id)\
            .join(Exercise, SessionExercise.exercise_id == Exercise.id)\
            .outerjoin(Category, Exercise.category_id == Category.id)\
            .where(WorkoutSession.user_id == user_id, WorkoutSession.date >= start, WorkoutSession.date <= end)\
            .order_by(WorkoutSession.date.asc(), SessionExercise.order_num.asc())
        return [
            CalendarRow(date=d, entry_id=entry_id, category_name=name)
            for d, entry_id, name in self.db.execute(stmt).all()
        ]

    def previous_record(self, user_id: str, exercise_id: int, before: date) -> Optional[SessionExercise]:
        """Latest entry of ``exercise_id`` on a day strictly before ``before``."""
        stmt = select(SessionExercise)\
            .join(WorkoutSession, SessionExercise.session_id == WorkoutSession.id)\
            .options(selectinload(SessionExercise.sets), selectinload(SessionExercise.session))\
            .where(
                WorkoutSession.user_id == user_id,
                SessionExercise.exercise_id == exercise_id,
                WorkoutSession.date < before,
            )\
            .order_by(WorkoutSession.date.desc(), SessionExercise.id.desc())\
            .limit(1)
        return self.db.execute(stmt).scalars().first()

    # WRITES
    def get_or_create(self, user_id: str, day: date) -> WorkoutSession:
        existing = self.get_by_date(user_id, day)
        if existing:
            return existing
        try:
            self.save(WorkoutSession(user_id=user_id, date=day))
        except IntegrityError:
            # lost a race against the (user_id, date) unique constraint
            self.db.rollback()
        return self.get_by_date(user_id, day)

    def update_memo(self, sess: WorkoutSession, *, memo: str | None) -> WorkoutSession:
        sess.memo = memo
        return self.save(sess)

    def add_exercise(
        self,
        sess: WorkoutSession,
        *,
        exercise_id: int,
        sets: Sequence[SetLike],
        memo: str | None = None,
    ) -> SessionExercise:
        """Add an exercise to the day, merging into an existing entry for the same exercise."""
        entry = self.find_entry(sess.id, exercise_id)
        if entry is None:
            order_num = self.next_order_num(SessionExercise.order_num, SessionExercise.session_id == sess.id)
            entry = self.add_and_refresh(
                SessionExercise(session_id=sess.id, exercise_id=exercise_id, order_num=order_num, memo=memo)
            )
        elif memo is not None:
            entry.memo = memo

        offset = len(entry.sets)
        for new in numbered_sets(ExerciseSet, sets):
            new.set_number += offset
            entry.sets.append(new)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def replace_sets(self, entry: SessionExercise, sets: Sequence[SetLike]) -> SessionExercise:
        """Delete-and-reinsert the whole set list, renumbered from 1."""
        entry.sets.clear()
        self.db.flush()
        entry.sets.extend(numbered_sets(ExerciseSet, sets))
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def update_entry_memo(self, entry: SessionExercise, *, memo: str | None) -> SessionExercise:
        entry.memo = memo
        return self.save(entry)

    def delete_entry(self, entry: SessionExercise) -> int:
        session_id = entry.session_id
        self.remove(entry)
        return session_id

    # POST-CONDITIONS (callers run these after deleting sets or entries)
    def delete_entry_if_empty(self, entry_id: int) -> bool:
        remaining = self.db.execute(
            select(func.count(ExerciseSet.id)).where(ExerciseSet.session_exercise_id == entry_id)
        ).scalar_one()
        if remaining:
            return False
        entry = self.db.get(SessionExercise, entry_id)
        if entry is None:
            return False
        self.remove(entry)
        return True

    def delete_if_empty(self, session_id: int) -> bool:
        remaining = self.db.execute(
            select(func.count(SessionExercise.id)).where(SessionExercise.session_id == session_id)
        ).scalar_one()
        if remaining:
            return False
        sess = self.db.get(WorkoutSession, session_id)
        if sess is None:
            return False
        self.remove(sess)
        return True
