import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from schedule_api.db.base import Base


class LessonType(Base):
    __tablename__ = "lesson_types"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
