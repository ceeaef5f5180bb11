import datetime as dt
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Integer, String, DateTime, UniqueConstraint, func
from liftlog.db import Base

WEEKLY_WORKOUTS = "weekly_workouts"

class UserGoal(Base):
    __tablename__ = "user_goals"
    __table_args__ = (UniqueConstraint("user_id", "goal_type", name="uq_user_goals_user_type"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    goal_type: Mapped[str] = mapped_column(String(40), nullable=False, default=WEEKLY_WORKOUTS)
    target_value: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
