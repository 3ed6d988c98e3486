from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from datetime import date

from schedule_api.core.exceptions import ScheduleConflictError, ValidationError
from schedule_api.db.repositories import ScheduleRepository, SlotBooking
from schedule_api.models.discipline import Discipline
from schedule_api.models.schedule import ScheduleItem

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "Учитель или аудитория уже заняты на этот урок в указанную дату"


def ensure_teachers_teach_disciplines(
    pairs: Sequence[tuple[str, str]],
    disciplines: Mapping[str, Discipline],
) -> None:
    """Every ``(discipline_id, teacher_id)`` pair must name a teacher of that discipline."""
    for discipline_id, teacher_id in pairs:
        discipline = disciplines[discipline_id]
        if teacher_id not in {teacher.id for teacher in discipline.teachers}:
            raise ValidationError(
                f"Учитель с ID {teacher_id} не ведет дисциплину с ID {discipline_id}",
                errors=[{"field": "items", "teacher": teacher_id, "discipline": discipline_id}],
            )


def submission_conflicts(bookings: Sequence[SlotBooking]) -> list[dict]:
    """Pairs of bookings inside one submission that double-book a slot."""
    conflicts: list[dict] = []
    for i, first in enumerate(bookings):
        for j in range(i + 1, len(bookings)):
            second = bookings[j]
            if first.number != second.number:
                continue
            if first.teacher_id == second.teacher_id:
                conflicts.append(
                    {"number": first.number, "reason": "teacher", "teacher": first.teacher_id, "items": [i, j]}
                )
            elif first.audithoria_id == second.audithoria_id:
                conflicts.append(
                    {"number": first.number, "reason": "audithoria", "audithoria": first.audithoria_id, "items": [i, j]}
                )
    return conflicts


def describe_stored_conflicts(items: Sequence[ScheduleItem], bookings: Sequence[SlotBooking]) -> list[dict]:
    conflicts: list[dict] = []
    for item in items:
        for booking in bookings:
            if item.number != booking.number:
                continue
            if item.teacher_id == booking.teacher_id:
                conflicts.append(
                    {"number": item.number, "reason": "teacher", "teacher": item.teacher_id, "schedule": item.entry_id}
                )
            elif item.audithoria_id == booking.audithoria_id:
                conflicts.append(
                    {
                        "number": item.number,
                        "reason": "audithoria",
                        "audithoria": item.audithoria_id,
                        "schedule": item.entry_id,
                    }
                )
    return conflicts


class ScheduleConflictChecker:
    """Rejects a proposed day schedule that would double-book a teacher or an audithoria."""

    def __init__(self, schedules: ScheduleRepository):
        self.schedules = schedules

    def check(
        self,
        entry_date: date,
        bookings: Sequence[SlotBooking],
        exclude_entry_id: str | None = None,
    ) -> None:
        conflicts = submission_conflicts(bookings)
        if not conflicts:
            stored = self.schedules.find_conflicting_items(entry_date, bookings, exclude_entry_id)
            conflicts = describe_stored_conflicts(stored, bookings)
        if conflicts:
            logger.info("Schedule for %s rejected: %d slot conflict(s)", entry_date.isoformat(), len(conflicts))
            raise ScheduleConflictError(SLOT_TAKEN_MESSAGE, conflicts)
