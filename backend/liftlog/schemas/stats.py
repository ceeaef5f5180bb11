import datetime as dt
from typing import Annotated
from pydantic import BaseModel, Field

class _FromAttrs(BaseModel):
    model_config = {"from_attributes": True}

class StreakRead(_FromAttrs):
    current_streak: int
    max_streak: int
    max_streak_date: dt.date | None = None
    # Monday..Sunday of the current week
    weekdays: list[bool]

class PRRead(_FromAttrs):
    exercise_id: int
    exercise_name: str
    weight: float
    date: dt.date

class MonthlySummaryRead(_FromAttrs):
    workout_days: int
    total_days: int
    total_volume: float
    total_sets: int
    prev_workout_days: int | None = None
    prev_total_volume: float | None = None

class HeatmapRead(_FromAttrs):
    date: dt.date
    set_count: int

class BalanceRead(_FromAttrs):
    category_id: int
    category_name: str
    set_count: int
    percentage: int

class ProgressPointRead(_FromAttrs):
    date: dt.date
    estimated_1rm: float

class ProgressRead(_FromAttrs):
    exercise_id: int
    exercise_name: str
    data_points: list[ProgressPointRead]
    current_1rm: float | None = None
    previous_1rm: float | None = None
    change_kg: float | None = None
    change_percent: float | None = None

class UserExerciseRead(BaseModel):
    id: int
    name: str

class WeeklyGoalRead(_FromAttrs):
    id: int
    target_value: int
    current_value: int
    percentage: int

class WeeklyGoalUpdate(BaseModel):
    target_value: Annotated[int, Field(ge=1, le=7)]
