import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, DateTime, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from schedule_api.db.base import Base


class EntityKind(str, Enum):
    user = "user"
    role = "role"
    faculty = "faculty"
    discipline = "discipline"
    teacher = "teacher"
    lesson_type = "type"
    audithoria = "audithoria"
    schedule = "schedule"


class ActivityLog(Base):
    """One successful write made through the API; ``actor_id`` is None for self-registration."""

    __tablename__ = "activity_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    actor_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    entity: Mapped[EntityKind] = mapped_column(
        SAEnum(
            EntityKind,
            name="entity_kind",
            native_enum=False,
            length=20,
            values_callable=lambda kinds: [kind.value for kind in kinds],
        ),
        nullable=False,
        index=True,
    )
    entity_id: Mapped[str] = mapped_column(String(36), nullable=False)
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    details: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
