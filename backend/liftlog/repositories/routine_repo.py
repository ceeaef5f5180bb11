from __future__ import annotations
from typing import Optional, Sequence
from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload
from liftlog.models import Routine, RoutineExercise, RoutineSet
from liftlog.repositories.base import BaseRepository, SetLike, numbered_sets

# routine -> exercises -> (template sets, catalog row)
_TREE = (
    selectinload(Routine.exercises).selectinload(RoutineExercise.sets),
    selectinload(Routine.exercises).selectinload(RoutineExercise.exercise),
)

class RoutineRepository(BaseRepository[Routine]):
    def __init__(self, db: Session):
        super().__init__(db)

    # READS
    def list_by_user(self, user_id: str) -> list[Routine]:
        stmt = select(Routine).options(*_TREE).where(Routine.user_id == user_id)\
            .order_by(Routine.created_at.desc(), Routine.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get(self, routine_id: int, user_id: str) -> Optional[Routine]:
        stmt = select(Routine).options(*_TREE)\
            .where(Routine.id == routine_id, Routine.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_exercise(self, user_id: str, exercise_id: int) -> list[Routine]:
        """Routines of the user that contain ``exercise_id``."""
        containing = select(RoutineExercise.routine_id).where(RoutineExercise.exercise_id == exercise_id)
        stmt = select(Routine).options(*_TREE)\
            .where(Routine.user_id == user_id, Routine.id.in_(containing))\
            .order_by(Routine.created_at.desc(), Routine.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_entry(self, entry_id: int, user_id: str) -> Optional[RoutineExercise]:
        stmt = select(RoutineExercise)\
            .join(Routine, RoutineExercise.routine_id == Routine.id)\
            .options(selectinload(RoutineExercise.sets), selectinload(RoutineExercise.exercise))\
            .where(RoutineExercise.id == entry_id, Routine.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(self, user_id: str, *, name: str, description: str | None) -> Routine:
        return self.save(Routine(user_id=user_id, name=name, description=description or None))

    def update(self, routine: Routine, **fields) -> Routine:
        """Patch name/description; ``updated_at`` is bumped by the column's onupdate."""
        for key in ("name", "description"):
            if key in fields:
                setattr(routine, key, fields[key])
        return self.save(routine)

    def delete(self, routine: Routine) -> None:
        self.remove(routine)

    def add_exercise(self, routine: Routine, *, exercise_id: int, sets: Sequence[SetLike]) -> RoutineExercise:
        order_num = self.next_order_num(RoutineExercise.order_num, RoutineExercise.routine_id == routine.id)
        entry = RoutineExercise(routine_id=routine.id, exercise_id=exercise_id, order_num=order_num)
        entry.sets = numbered_sets(RoutineSet, sets)
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def replace_sets(self, entry: RoutineExercise, sets: Sequence[SetLike]) -> RoutineExercise:
        entry.sets.clear()
        self.db.flush()
        entry.sets.extend(numbered_sets(RoutineSet, sets))
        self.db.commit()
        self.db.refresh(entry)
        return entry

    def remove_exercise(self, entry: RoutineExercise) -> None:
        self.remove(entry)

    def reorder(self, routine: Routine, ordered_ids: Sequence[int]) -> None:
        """order_num = position + 1; ids outside the routine are ignored.

        Each statement touches a disjoint row, so they go out as one batch.
        """
        for idx, entry_id in enumerate(ordered_ids, start=1):
            self.db.execute(
                update(RoutineExercise)
                .where(RoutineExercise.id == entry_id, RoutineExercise.routine_id == routine.id)
                .values(order_num=idx)
            )
        self.db.commit()
        self.db.expire_all()
