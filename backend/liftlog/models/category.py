from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, String
from liftlog.db import Base

class Category(Base):
    __tablename__ = "categories"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(60), nullable=False)
    slug: Mapped[str] = mapped_column(String(60), unique=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    exercises = relationship("Exercise", back_populates="category")
