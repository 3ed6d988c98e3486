from datetime import date

from pydantic import BaseModel, Field

from schedule_api.schemas.audithoria import AudithoriaOut
from schedule_api.schemas.discipline import DisciplineBrief
from schedule_api.schemas.faculty import GroupOut
from schedule_api.schemas.lesson_type import LessonTypeOut
from schedule_api.schemas.teacher import TeacherBrief


class ScheduleItemIn(BaseModel):
    discipline: str = Field(min_length=1, max_length=36)
    teacher: str = Field(min_length=1, max_length=36)
    type: str = Field(min_length=1, max_length=36)
    audithoria: str = Field(min_length=1, max_length=36)
    number: int = Field(ge=1, le=20)


class ScheduleCreate(BaseModel):
    date: date
    group: str = Field(min_length=1, max_length=36)
    items: list[ScheduleItemIn] = Field(min_length=1, max_length=50)


class ScheduleUpdate(ScheduleCreate):
    id: str = Field(min_length=1, max_length=36)


class ScheduleItemOut(BaseModel):
    id: str
    number: int
    discipline: DisciplineBrief
    teacher: TeacherBrief
    type: LessonTypeOut
    audithoria: AudithoriaOut

    model_config = {"from_attributes": True}


class ScheduleOut(BaseModel):
    id: str
    date: date
    group: GroupOut
    items: list[ScheduleItemOut]

    model_config = {"from_attributes": True}


class ScheduleListOut(BaseModel):
    schedule: list[ScheduleOut]


class ScheduleSaved(BaseModel):
    id: str
    message: str
