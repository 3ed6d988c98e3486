"""Typed data access for every collection.

Handlers receive repositories through ``schedule_api.api.deps.get_repository``.
All repositories of one request share the request's session, so a handler
commits once through any of them.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Generic, TypeVar

from sqlalchemy import and_, exists, func, or_, select
from sqlalchemy.orm import Session, selectinload

from schedule_api.models.activity_log import ActivityLog, EntityKind
from schedule_api.models.audithoria import Audithoria
from schedule_api.models.discipline import Discipline, discipline_groups, discipline_teachers
from schedule_api.models.faculty import Faculty, Group
from schedule_api.models.lesson_type import LessonType
from schedule_api.models.schedule import ScheduleEntry, ScheduleItem
from schedule_api.models.teacher import Teacher
from schedule_api.models.user import Role, User

ModelT = TypeVar("ModelT")


@dataclass(frozen=True)
class ScheduleFilter:
    date: date | None = None
    teacher_id: str | None = None
    group_id: str | None = None


@dataclass(frozen=True)
class DisciplineFilter:
    name: str | None = None
    group_id: str | None = None


@dataclass(frozen=True)
class SlotBooking:
    """One proposed lesson: the slot it occupies and who/where it uses."""

    number: int
    teacher_id: str
    audithoria_id: str


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: Session) -> None:
        self.db = db

    def get(self, entity_id: str) -> ModelT | None:
        return self.db.get(self.model, entity_id)

    def find_one(self, **filters: Any) -> ModelT | None:
        return self.db.execute(select(self.model).filter_by(**filters).limit(1)).scalars().first()

    def find_all(self, *criteria: Any) -> list[ModelT]:
        return list(self.db.execute(select(self.model).where(*criteria)).scalars())

    def add(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()


class RoleRepository(Repository[Role]):
    model = Role

    def values(self) -> set[str]:
        return set(self.db.execute(select(Role.value)).scalars())


class UserRepository(Repository[User]):
    model = User

    def find_by_username(self, username: str) -> User | None:
        return self.find_one(username=username)


class FacultyRepository(Repository[Faculty]):
    model = Faculty

    def find_by_name(self, name: str, exclude_id: str | None = None) -> Faculty | None:
        statement = select(Faculty).where(Faculty.name == name)
        if exclude_id is not None:
            statement = statement.where(Faculty.id != exclude_id)
        return self.db.execute(statement).scalars().first()

    def list_with_groups(self, faculty_id: str | None = None) -> list[Faculty]:
        statement = select(Faculty).options(selectinload(Faculty.groups)).order_by(Faculty.name)
        if faculty_id is not None:
            statement = statement.where(Faculty.id == faculty_id)
        return list(self.db.execute(statement).scalars())


class GroupRepository(Repository[Group]):
    model = Group

    def find_by_name(self, name: str) -> Group | None:
        return self.find_one(name=name)

    def find_by_names(self, names: Iterable[str]) -> list[Group]:
        names = list(names)
        if not names:
            return []
        return list(self.db.execute(select(Group).where(Group.name.in_(names))).scalars())


class TeacherRepository(Repository[Teacher]):
    model = Teacher

    def find_by_surname(self, surname: str) -> Teacher | None:
        statement = select(Teacher).where(Teacher.surname == surname).order_by(Teacher.created_at)
        return self.db.execute(statement).scalars().first()

    def find_by_full_name(
        self,
        surname: str,
        name: str | None,
        patronymic: str | None,
        exclude_id: str | None = None,
    ) -> Teacher | None:
        # NULL never equals NULL in SQL, so absent name parts are matched with IS NULL.
        statement = select(Teacher).where(
            Teacher.surname == surname,
            Teacher.name.is_(None) if name is None else Teacher.name == name,
            Teacher.patronymic.is_(None) if patronymic is None else Teacher.patronymic == patronymic,
        )
        if exclude_id is not None:
            statement = statement.where(Teacher.id != exclude_id)
        return self.db.execute(statement).scalars().first()

    def list_all(self) -> list[Teacher]:
        statement = select(Teacher).options(selectinload(Teacher.burden)).order_by(Teacher.surname)
        return list(self.db.execute(statement).scalars())

    def is_scheduled(self, teacher_id: str) -> bool:
        return bool(self.db.execute(select(exists().where(ScheduleItem.teacher_id == teacher_id))).scalar())

    def sole_teacher_of(self, teacher_id: str) -> list[Discipline]:
        """Disciplines whose only teacher is ``teacher_id``."""
        members = discipline_teachers.alias("members")
        teacher_count = (
            select(func.count())
            .select_from(members)
            .where(members.c.discipline_id == Discipline.id)
            .correlate(Discipline)
            .scalar_subquery()
        )
        statement = (
            select(Discipline)
            .join(discipline_teachers, discipline_teachers.c.discipline_id == Discipline.id)
            .where(discipline_teachers.c.teacher_id == teacher_id, teacher_count == 1)
            .order_by(Discipline.name)
        )
        return list(self.db.execute(statement).scalars())


class DisciplineRepository(Repository[Discipline]):
    model = Discipline

    def find_by_name(self, name: str, exclude_id: str | None = None) -> Discipline | None:
        statement = select(Discipline).where(Discipline.name == name)
        if exclude_id is not None:
            statement = statement.where(Discipline.id != exclude_id)
        return self.db.execute(statement).scalars().first()

    def find(self, criteria: DisciplineFilter | None = None) -> list[Discipline]:
        criteria = criteria or DisciplineFilter()
        statement = select(Discipline).order_by(Discipline.name)
        if criteria.name is not None:
            statement = statement.where(Discipline.name == criteria.name)
        if criteria.group_id is not None:
            statement = statement.join(
                discipline_groups, discipline_groups.c.discipline_id == Discipline.id
            ).where(discipline_groups.c.group_id == criteria.group_id)
        return list(self.db.execute(statement).scalars())

    def is_scheduled(self, discipline_id: str) -> bool:
        return bool(
            self.db.execute(select(exists().where(ScheduleItem.discipline_id == discipline_id))).scalar()
        )


class AudithoriaRepository(Repository[Audithoria]):
    model = Audithoria

    def find_by_name(self, name: str, exclude_id: str | None = None) -> Audithoria | None:
        statement = select(Audithoria).where(Audithoria.name == name)
        if exclude_id is not None:
            statement = statement.where(Audithoria.id != exclude_id)
        return self.db.execute(statement).scalars().first()

    def list_all(self) -> list[Audithoria]:
        return list(self.db.execute(select(Audithoria).order_by(Audithoria.name)).scalars())

    def is_scheduled(self, audithoria_id: str) -> bool:
        return bool(
            self.db.execute(select(exists().where(ScheduleItem.audithoria_id == audithoria_id))).scalar()
        )


class LessonTypeRepository(Repository[LessonType]):
    model = LessonType

    def find_by_name(self, name: str, exclude_id: str | None = None) -> LessonType | None:
        statement = select(LessonType).where(LessonType.name == name)
        if exclude_id is not None:
            statement = statement.where(LessonType.id != exclude_id)
        return self.db.execute(statement).scalars().first()

    def list_all(self) -> list[LessonType]:
        return list(self.db.execute(select(LessonType).order_by(LessonType.name)).scalars())

    def is_scheduled(self, type_id: str) -> bool:
        return bool(self.db.execute(select(exists().where(ScheduleItem.type_id == type_id))).scalar())


class ScheduleRepository(Repository[ScheduleEntry]):
    model = ScheduleEntry

    def find(self, criteria: ScheduleFilter | None = None) -> list[ScheduleEntry]:
        criteria = criteria or ScheduleFilter()
        statement = (
            select(ScheduleEntry)
            .options(
                selectinload(ScheduleEntry.group),
                selectinload(ScheduleEntry.items).selectinload(ScheduleItem.discipline),
                selectinload(ScheduleEntry.items).selectinload(ScheduleItem.teacher),
                selectinload(ScheduleEntry.items).selectinload(ScheduleItem.type),
                selectinload(ScheduleEntry.items).selectinload(ScheduleItem.audithoria),
            )
            .order_by(ScheduleEntry.date, ScheduleEntry.created_at)
        )
        if criteria.date is not None:
            statement = statement.where(ScheduleEntry.date == criteria.date)
        if criteria.group_id is not None:
            statement = statement.where(ScheduleEntry.group_id == criteria.group_id)
        if criteria.teacher_id is not None:
            statement = statement.where(
                ScheduleEntry.items.any(ScheduleItem.teacher_id == criteria.teacher_id)
            )
        return list(self.db.execute(statement).scalars())

    def find_conflicting_items(
        self,
        entry_date: date,
        bookings: Sequence[SlotBooking],
        exclude_entry_id: str | None = None,
    ) -> list[ScheduleItem]:
        """Stored items on ``entry_date`` that take the slot of a booking with
        the same teacher or the same audithoria."""
        if not bookings:
            return []
        slot_clauses = [
            and_(
                ScheduleItem.number == booking.number,
                or_(
                    ScheduleItem.teacher_id == booking.teacher_id,
                    ScheduleItem.audithoria_id == booking.audithoria_id,
                ),
            )
            for booking in bookings
        ]
        statement = (
            select(ScheduleItem)
            .join(ScheduleEntry, ScheduleItem.entry_id == ScheduleEntry.id)
            .where(ScheduleEntry.date == entry_date, or_(*slot_clauses))
            .order_by(ScheduleItem.number)
        )
        if exclude_entry_id is not None:
            statement = statement.where(ScheduleEntry.id != exclude_entry_id)
        return list(self.db.execute(statement).scalars())


class ActivityLogRepository(Repository[ActivityLog]):
    model = ActivityLog

    def latest(
        self,
        limit: int = 500,
        entity: EntityKind | None = None,
        entity_id: str | None = None,
    ) -> list[ActivityLog]:
        statement = select(ActivityLog).order_by(ActivityLog.created_at.desc()).limit(limit)
        if entity is not None:
            statement = statement.where(ActivityLog.entity == entity)
        if entity_id is not None:
            statement = statement.where(ActivityLog.entity_id == entity_id)
        return list(self.db.execute(statement).scalars())

