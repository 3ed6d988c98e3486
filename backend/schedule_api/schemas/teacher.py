from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schedule_api.schemas.common import strip_optional, strip_required


class TeacherCreate(BaseModel):
    surname: str = Field(min_length=1, max_length=100)
    name: str | None = Field(default=None, max_length=100)
    patronymic: str | None = Field(default=None, max_length=100)
    academic_hours: int = Field(validation_alias="aH", ge=0, le=10000)

    @field_validator("surname")
    @classmethod
    def normalize_surname(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("name", "patronymic")
    @classmethod
    def normalize_optional_parts(cls, value: str | None) -> str | None:
        return strip_optional(value)


class TeacherUpdate(TeacherCreate):
    id: str = Field(min_length=1, max_length=36)


class BurdenOut(BaseModel):
    hours: int | None
    month: date

    model_config = {"from_attributes": True}


class TeacherBrief(BaseModel):
    id: str
    surname: str
    name: str | None = None
    patronymic: str | None = None

    model_config = {"from_attributes": True}


class TeacherOut(TeacherBrief):
    academic_hours: int = Field(alias="aH")
    accumulated_hours: int = Field(alias="hH")
    burden: list[BurdenOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class TeacherDetailOut(BaseModel):
    teacher: TeacherOut


class TeacherListOut(BaseModel):
    teachers: list[TeacherOut]


class TeachersByDisciplineOut(BaseModel):
    teachers: list[TeacherOut]
    teachersFree: list[TeacherOut]
