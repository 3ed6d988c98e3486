from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from typing import Any, TypeVar

from schedule_api.models.teacher import Teacher, TeacherBurden

TeacherT = TypeVar("TeacherT")


def month_start(value: date) -> date:
    return value.replace(day=1)


def same_month(first: date, second: date) -> bool:
    return first.year == second.year and first.month == second.month


def is_available_for_month(teacher: Any, target: date) -> bool:
    """A teacher is free for a month without burden hours recorded for it."""
    for entry in teacher.burden or []:
        if entry.month is None or not same_month(entry.month, target):
            continue
        if entry.hours:
            return False
    return True


def filter_available_teachers(teachers: Iterable[TeacherT], target: date) -> list[TeacherT]:
    return [teacher for teacher in teachers if is_available_for_month(teacher, target)]


def load_ratio(teacher: Any) -> float:
    accumulated = teacher.accumulated_hours or 0
    if accumulated <= 0:
        return float("inf")
    return (teacher.academic_hours or 0) / accumulated


def sort_by_load(teachers: Iterable[TeacherT]) -> list[TeacherT]:
    """Least loaded first: descending allocated/accumulated ratio, stable."""
    return sorted(teachers, key=load_ratio, reverse=True)


def apply_teacher_load(
    teachers: Mapping[str, Teacher],
    teacher_ids: Sequence[str],
    lesson_date: date,
    hours_per_lesson: int,
) -> dict[str, int]:
    """Add ``hours_per_lesson`` per occurrence of a teacher in ``teacher_ids``
    to its accumulated hours and to its burden for the lesson month.

    Returns the hours added per teacher id.
    """
    added: dict[str, int] = {}
    for teacher_id, occurrences in Counter(teacher_ids).items():
        teacher = teachers[teacher_id]
        hours = hours_per_lesson * occurrences
        teacher.accumulated_hours = (teacher.accumulated_hours or 0) + hours

        entry = next(
            (item for item in teacher.burden if item.month is not None and same_month(item.month, lesson_date)),
            None,
        )
        if entry is None:
            teacher.burden.append(TeacherBurden(month=month_start(lesson_date), hours=hours))
        else:
            entry.hours = (entry.hours or 0) + hours
        added[teacher_id] = hours
    return added
