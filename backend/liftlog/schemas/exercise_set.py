from typing import Annotated
from pydantic import BaseModel, Field, model_validator

# kg, reps and seconds; None means "not recorded"
Weight = Annotated[float, Field(ge=0, le=1000)]
Reps = Annotated[int, Field(ge=0, le=1000)]
Seconds = Annotated[int, Field(ge=0, le=86400)]

class SetInput(BaseModel):
    weight: Weight | None = None
    reps: Reps | None = None
    duration_seconds: Seconds | None = None

    @model_validator(mode="after")
    def something_recorded(self):
        if self.weight is None and self.reps is None and self.duration_seconds is None:
            raise ValueError("a set needs weight, reps or duration")
        return self

class SetRead(BaseModel):
    id: int
    set_number: int
    weight: float | None = None
    reps: int | None = None
    duration_seconds: int | None = None

    model_config = {"from_attributes": True}

class SetsReplace(BaseModel):
    sets: list[SetInput] = Field(default_factory=list, max_length=100)
