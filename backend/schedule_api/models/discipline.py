import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from schedule_api.db.base import Base
from schedule_api.models.faculty import Group
from schedule_api.models.teacher import Teacher

discipline_groups = Table(
    "discipline_groups",
    Base.metadata,
    Column("discipline_id", String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), primary_key=True),
    Column("group_id", String(36), ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
)

discipline_teachers = Table(
    "discipline_teachers",
    Base.metadata,
    Column("discipline_id", String(36), ForeignKey("disciplines.id", ondelete="CASCADE"), primary_key=True),
    Column("teacher_id", String(36), ForeignKey("teachers.id", ondelete="CASCADE"), primary_key=True),
)


class Discipline(Base):
    __tablename__ = "disciplines"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(200), unique=True, index=True, nullable=False)
    academic_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    groups: Mapped[list[Group]] = relationship(secondary=discipline_groups, order_by=Group.name)
    teachers: Mapped[list[Teacher]] = relationship(
        secondary=discipline_teachers,
        back_populates="disciplines",
        order_by=Teacher.surname,
    )
