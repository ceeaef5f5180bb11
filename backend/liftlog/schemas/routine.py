import datetime as dt
from typing import Annotated
from pydantic import BaseModel, Field, StringConstraints, field_validator
from liftlog.schemas.catalog import ExerciseRead
from liftlog.schemas.exercise_set import SetInput

NameStr = Annotated[str, Field(max_length=120)]
DescriptionStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class RoutineSetRead(BaseModel):
    id: int
    set_number: int
    weight: float | None = None
    reps: int | None = None
    duration_seconds: int | None = None

    model_config = {"from_attributes": True}

class RoutineExerciseRead(BaseModel):
    id: int
    routine_id: int
    exercise_id: int
    order_num: int
    exercise: ExerciseRead | None = None
    sets: list[RoutineSetRead] = []

    model_config = {"from_attributes": True}

class RoutineRead(BaseModel):
    id: int
    user_id: str
    name: str
    description: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None
    exercises: list[RoutineExerciseRead] = []

    model_config = {"from_attributes": True}

class RoutineCreate(BaseModel):
    name: NameStr
    description: DescriptionStr | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class RoutineUpdate(BaseModel):
    name: NameStr | None = None
    description: DescriptionStr | None = None

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2

class RoutineExerciseCreate(BaseModel):
    exercise_id: int
    sets: list[SetInput] = Field(default_factory=list, max_length=100)

class ReorderRequest(BaseModel):
    ordered_ids: list[int] = Field(min_length=1)

class ApplyRoutineRequest(BaseModel):
    date: dt.date

class ApplyRoutineResult(BaseModel):
    added: int
    skipped: int
    session_id: int | None = None

    model_config = {"from_attributes": True}
