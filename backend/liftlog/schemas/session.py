import datetime as dt
from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints
from liftlog.schemas.catalog import ExerciseRead
from liftlog.schemas.exercise_set import SetInput, SetRead

# Memos: trimmed, up to 500 chars
MemoStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class SessionExerciseRead(BaseModel):
    id: int
    session_id: int
    exercise_id: int
    order_num: int
    memo: str | None = None
    exercise: ExerciseRead | None = None
    sets: list[SetRead] = []

    model_config = {"from_attributes": True}

class SessionRead(BaseModel):
    id: int
    user_id: str
    date: dt.date
    memo: str | None = None
    created_at: dt.datetime | None = None
    exercises: list[SessionExerciseRead] = []

    model_config = {"from_attributes": True}

class SessionExerciseCreate(BaseModel):
    exercise_id: int
    sets: list[SetInput] = Field(default_factory=list, max_length=100)
    memo: MemoStr | None = None

class MemoUpdate(BaseModel):
    memo: MemoStr | None = None

class DeleteResult(BaseModel):
    # the day's session went away with its last exercise
    session_deleted: bool = False

class CalendarDayRead(BaseModel):
    date: dt.date
    categories: list[str]
    exercise_count: int

    model_config = {"from_attributes": True}

class PreviousRecordRead(BaseModel):
    date: dt.date
    memo: str | None = None
    sets: list[SetRead] = []
