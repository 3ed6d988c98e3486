import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from schedule_api.db.base import Base


class Teacher(Base):
    __tablename__ = "teachers"
    __table_args__ = (UniqueConstraint("surname", "name", "patronymic", name="uq_teachers_full_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    surname: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    patronymic: Mapped[str | None] = mapped_column(String(100), nullable=True)
    academic_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    accumulated_hours: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())

    burden: Mapped[list["TeacherBurden"]] = relationship(
        back_populates="teacher",
        cascade="all, delete-orphan",
        order_by="TeacherBurden.month",
    )
    disciplines: Mapped[list["Discipline"]] = relationship(  # noqa: F821
        secondary="discipline_teachers",
        back_populates="teachers",
    )


class TeacherBurden(Base):
    __tablename__ = "teacher_burdens"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    teacher_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # First day of the calendar month the hours belong to.
    month: Mapped[date] = mapped_column(Date, nullable=False)
    hours: Mapped[int | None] = mapped_column(Integer, nullable=True)

    teacher: Mapped[Teacher] = relationship(back_populates="burden")
