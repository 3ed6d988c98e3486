import uuid
import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from schedule_api.db.base import Base
from schedule_api.models.audithoria import Audithoria
from schedule_api.models.discipline import Discipline
from schedule_api.models.faculty import Group
from schedule_api.models.lesson_type import LessonType
from schedule_api.models.teacher import Teacher


class ScheduleEntry(Base):
    __tablename__ = "schedule_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    group_id: Mapped[str] = mapped_column(String(36), ForeignKey("groups.id"), nullable=False, index=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    group: Mapped[Group] = relationship()
    items: Mapped[list["ScheduleItem"]] = relationship(
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="ScheduleItem.position",
    )


class ScheduleItem(Base):
    __tablename__ = "schedule_items"
    # The entry date is copied onto every item so the store itself rejects
    # double-booking a teacher or an audithoria for one lesson slot.
    __table_args__ = (
        UniqueConstraint("date", "number", "teacher_id", name="uq_schedule_items_teacher_slot"),
        UniqueConstraint("date", "number", "audithoria_id", name="uq_schedule_items_audithoria_slot"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    entry_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schedule_entries.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    discipline_id: Mapped[str] = mapped_column(String(36), ForeignKey("disciplines.id"), nullable=False)
    teacher_id: Mapped[str] = mapped_column(String(36), ForeignKey("teachers.id"), nullable=False, index=True)
    type_id: Mapped[str] = mapped_column(String(36), ForeignKey("lesson_types.id"), nullable=False)
    audithoria_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("audithories.id"), nullable=False, index=True
    )

    entry: Mapped[ScheduleEntry] = relationship(back_populates="items")
    discipline: Mapped[Discipline] = relationship()
    teacher: Mapped[Teacher] = relationship()
    type: Mapped[LessonType] = relationship()
    audithoria: Mapped[Audithoria] = relationship()
