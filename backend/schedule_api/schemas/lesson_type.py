from pydantic import BaseModel, Field, field_validator

from schedule_api.schemas.common import strip_required


class LessonTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)


class LessonTypeUpdate(LessonTypeCreate):
    id: str = Field(min_length=1, max_length=36)


class LessonTypeOut(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class LessonTypeListOut(BaseModel):
    types: list[LessonTypeOut]
