from pydantic import BaseModel, Field, field_validator

from schedule_api.schemas.common import strip_required


class UserCredentials(BaseModel):
    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1, max_length=128)

    @field_validator("username")
    @classmethod
    def normalize_username(cls, value: str) -> str:
        return strip_required(value)


class UserCreate(UserCredentials):
    password: str = Field(min_length=6, max_length=128)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value.strip()) < 6:
            raise ValueError("Пароль должен содержать минимум 6 символов")
        return value


class UserLogin(UserCredentials):
    pass


class UserOut(BaseModel):
    id: str
    username: str
    roles: list[str]

    model_config = {"from_attributes": True}


class Token(BaseModel):
    token: str


class RoleCreate(BaseModel):
    value: str = Field(min_length=1, max_length=50)

    @field_validator("value")
    @classmethod
    def normalize_value(cls, value: str) -> str:
        return strip_required(value).upper()


class RoleOut(BaseModel):
    value: str

    model_config = {"from_attributes": True}
