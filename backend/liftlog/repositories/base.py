# liftlog/repositories/base.py
from __future__ import annotations
from typing import Any, Generic, Iterable, Protocol, TypeVar

from sqlalchemy.orm import Session
from sqlalchemy import func, select

T = TypeVar("T")  # SQLAlchemy model type


class SetLike(Protocol):
    """Anything carrying the three set measurements (pydantic inputs, template rows)."""
    weight: float | None
    reps: int | None
    duration_seconds: int | None


class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    def __init__(self, db: Session):
        self.db = db

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity

    def save(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def remove(self, entity: Any) -> None:
        self.db.delete(entity)
        self.db.commit()

    def next_order_num(self, column, *where) -> int:
        """1 + current max of ``column`` under ``where`` (1 when empty)."""
        current = self.db.execute(select(func.max(column)).where(*where)).scalar_one()
        return (current or 0) + 1


def numbered_sets(model: type[T], sets: Iterable[SetLike], **parent: Any) -> list[T]:
    """Build set rows numbered 1..n in input order."""
    return [
        model(
            set_number=idx,
            weight=s.weight,
            reps=s.reps,
            duration_seconds=s.duration_seconds,
            **parent,
        )
        for idx, s in enumerate(sets, start=1)
    ]
