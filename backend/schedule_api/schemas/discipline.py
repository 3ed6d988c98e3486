from pydantic import BaseModel, ConfigDict, Field, field_validator

from schedule_api.schemas.common import normalize_names, strip_required
from schedule_api.schemas.faculty import GroupOut
from schedule_api.schemas.teacher import TeacherBrief


class DisciplineCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    groups: list[str] = Field(default_factory=list, max_length=200)
    teachers: list[str] = Field(max_length=100)
    academic_hours: int = Field(validation_alias="aH", ge=0, le=10000)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("groups")
    @classmethod
    def normalize_groups(cls, value: list[str]) -> list[str]:
        return normalize_names(value)

    @field_validator("teachers")
    @classmethod
    def normalize_teachers(cls, value: list[str]) -> list[str]:
        teachers = normalize_names(value)
        if not teachers:
            raise ValueError("Дисциплина должна вести хотя бы один преподаватель")
        return teachers


class DisciplineUpdate(DisciplineCreate):
    id: str = Field(min_length=1, max_length=36)


class DisciplineBrief(BaseModel):
    id: str
    name: str

    model_config = {"from_attributes": True}


class DisciplineOut(DisciplineBrief):
    academic_hours: int = Field(alias="aH")
    groups: list[GroupOut]
    teachers: list[TeacherBrief]

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class DisciplineListOut(BaseModel):
    disciplines: list[DisciplineBrief]


class DisciplineDetailOut(BaseModel):
    discipline: DisciplineOut
