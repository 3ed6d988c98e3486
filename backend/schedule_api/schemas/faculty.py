from pydantic import BaseModel, ConfigDict, Field, field_validator

from schedule_api.schemas.common import normalize_names, strip_required


class FacultyCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    groups: list[str] = Field(default_factory=list, max_length=200)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("groups")
    @classmethod
    def normalize_groups(cls, value: list[str]) -> list[str]:
        return normalize_names(value)


class FacultyUpdate(BaseModel):
    id: str = Field(min_length=1, max_length=36)
    name: str = Field(min_length=1, max_length=200)
    groups: list[str] | None = Field(default=None, max_length=200)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("groups")
    @classmethod
    def normalize_groups(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return None
        return normalize_names(value)


class FacultyResult(BaseModel):
    result: bool
    message: str


class GroupRefOut(BaseModel):
    id: str = Field(alias="_id")
    name: str

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class GroupOut(BaseModel):
    id: str
    name: str
    course: str

    model_config = {"from_attributes": True}


class CourseOut(BaseModel):
    name: str
    groups: list[GroupRefOut]


class FacultyOut(BaseModel):
    id: str = Field(alias="_id")
    name: str
    courses: list[CourseOut]

    model_config = ConfigDict(populate_by_name=True)


class FacultyListOut(BaseModel):
    facultets: list[FacultyOut]
