from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from schedule_api.core.config import get_settings
from schedule_api.core.exceptions import ValidationError
from schedule_api.db.repositories import GroupRepository, Repository, TeacherRepository
from schedule_api.models.faculty import Group
from schedule_api.models.teacher import Teacher
from schedule_api.services.groups import parse_course

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


def resolve_or_create(
    repository: Repository[ModelT],
    lookup: Callable[[], ModelT | None],
    factory: Callable[[], ModelT],
) -> tuple[str, bool]:
    """Return ``(id, created)`` of the record found by ``lookup``, adding the
    one built by ``factory`` when nothing matches."""
    existing = lookup()
    if existing is not None:
        return existing.id, False  # type: ignore[attr-defined]
    entity = repository.add(factory())
    logger.debug("Created %s %s", type(entity).__name__, entity.id)  # type: ignore[attr-defined]
    return entity.id, True  # type: ignore[attr-defined]


def resolve_or_create_group(groups: GroupRepository, name: str, faculty_id: str | None = None) -> str:
    marker = get_settings().group_course_marker
    course = parse_course(name, marker)
    if course is None:
        raise ValidationError(
            f'Некорректное название группы: {name}. Название группы должно содержать "{marker}"',
            errors=[{"field": "groups", "message": name}],
        )

    def build() -> Group:
        return Group(name=name, course=course, faculty_id=faculty_id)

    group_id, _ = resolve_or_create(groups, lambda: groups.find_by_name(name), build)
    return group_id


def resolve_or_create_teacher(teachers: TeacherRepository, surname: str) -> str:
    def build() -> Teacher:
        return Teacher(surname=surname, academic_hours=0, accumulated_hours=0)

    teacher_id, _ = resolve_or_create(teachers, lambda: teachers.find_by_surname(surname), build)
    return teacher_id
