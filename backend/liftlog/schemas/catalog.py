from typing import Annotated
from pydantic import BaseModel, Field, field_validator

NameStr = Annotated[str, Field(max_length=120)]

class CategoryRead(BaseModel):
    id: int
    name: str
    slug: str
    sort_order: int

    model_config = {"from_attributes": True}

class ExerciseRead(BaseModel):
    id: int
    category_id: int
    name: str
    is_custom: bool

    model_config = {"from_attributes": True}

class ExerciseCreate(BaseModel):
    category_id: int
    name: NameStr

    @field_validator("name")
    @classmethod
    def name_non_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("name cannot be blank")
        return v2
