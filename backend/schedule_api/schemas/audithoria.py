from pydantic import BaseModel, Field, field_validator

from schedule_api.schemas.common import strip_required


class AudithoriaCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    pc: bool = False

    @field_validator("name")
    @classmethod
    def normalize_name(cls, value: str) -> str:
        return strip_required(value)


class AudithoriaUpdate(AudithoriaCreate):
    id: str = Field(min_length=1, max_length=36)


class AudithoriaOut(BaseModel):
    id: str
    name: str
    pc: bool

    model_config = {"from_attributes": True}


class AudithoriaListOut(BaseModel):
    audithories: list[AudithoriaOut]
