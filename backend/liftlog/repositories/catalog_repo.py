from __future__ import annotations
from typing import Optional
from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from liftlog.models import Category, Exercise
from liftlog.repositories.base import BaseRepository

def visible_to(user_id: str):
    """Catalog exercises plus the user's own custom ones."""
    return or_(Exercise.is_custom.is_(False), Exercise.created_by == user_id)

class CatalogRepository(BaseRepository[Exercise]):
    def __init__(self, db: Session):
        super().__init__(db)

    # READS
    def list_categories(self) -> list[Category]:
        stmt = select(Category).order_by(Category.sort_order.asc(), Category.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def list_exercises(self, user_id: str, *, category_id: int | None = None) -> list[Exercise]:
        stmt = select(Exercise).where(visible_to(user_id))
        if category_id is not None:
            stmt = stmt.where(Exercise.category_id == category_id)
        stmt = stmt.order_by(Exercise.name.asc(), Exercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_exercise(self, exercise_id: int, user_id: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(Exercise.id == exercise_id, visible_to(user_id))
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create_custom_exercise(self, user_id: str, *, category_id: int, name: str) -> Exercise:
        ex = Exercise(category_id=category_id, name=name, is_custom=True, created_by=user_id)
        return self.save(ex)
