import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, DateTime, Text, func
from liftlog.db import Base

class SessionExercise(Base):
    __tablename__ = "session_exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    session_id: Mapped[int] = mapped_column(ForeignKey("workout_sessions.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id"), index=True)
    order_num: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    memo: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    session = relationship("WorkoutSession", back_populates="exercises")
    exercise = relationship("Exercise")
    sets = relationship(
        "ExerciseSet",
        back_populates="session_exercise",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.set_number",
    )
