from datetime import date
from types import SimpleNamespace

import pytest

from schedule_api.core.exceptions import ScheduleConflictError, ValidationError
from schedule_api.db.repositories import SlotBooking
from schedule_api.services.conflict_service import (
    ScheduleConflictChecker,
    describe_stored_conflicts,
    ensure_teachers_teach_disciplines,
    submission_conflicts,
)


class StubSchedules:
    def __init__(self, stored):
        self.stored = stored
        self.calls = []

    def find_conflicting_items(self, entry_date, bookings, exclude_entry_id=None):
        self.calls.append((entry_date, list(bookings), exclude_entry_id))
        return [
            item
            for item in self.stored
            if item.entry_id != exclude_entry_id
            and any(
                item.number == booking.number
                and (item.teacher_id == booking.teacher_id or item.audithoria_id == booking.audithoria_id)
                for booking in bookings
            )
        ]


def stored_item(entry_id="s1", number=1, teacher_id="t1", audithoria_id="r1"):
    return SimpleNamespace(entry_id=entry_id, number=number, teacher_id=teacher_id, audithoria_id=audithoria_id)


def test_same_teacher_in_one_slot_conflicts_even_with_different_rooms():
    bookings = [SlotBooking(1, "t1", "r1"), SlotBooking(1, "t1", "r2")]
    assert submission_conflicts(bookings) == [{"number": 1, "reason": "teacher", "teacher": "t1", "items": [0, 1]}]


def test_same_room_in_one_slot_conflicts():
    bookings = [SlotBooking(2, "t1", "r1"), SlotBooking(2, "t2", "r1")]
    assert submission_conflicts(bookings)[0]["reason"] == "audithoria"


def test_different_slots_do_not_conflict():
    bookings = [SlotBooking(1, "t1", "r1"), SlotBooking(2, "t1", "r1")]
    assert submission_conflicts(bookings) == []


def test_stored_conflicts_name_the_blocking_schedule():
    conflicts = describe_stored_conflicts([stored_item(entry_id="s9")], [SlotBooking(1, "t2", "r1")])
    assert conflicts == [{"number": 1, "reason": "audithoria", "audithoria": "r1", "schedule": "s9"}]


def test_checker_rejects_stored_overlap():
    schedules = StubSchedules([stored_item()])
    checker = ScheduleConflictChecker(schedules)

    with pytest.raises(ScheduleConflictError) as excinfo:
        checker.check(date(2024, 3, 5), [SlotBooking(1, "t1", "r7")])

    assert excinfo.value.status_code == 400
    assert excinfo.value.errors[0]["reason"] == "teacher"


def test_checker_accepts_free_slots_and_skips_the_edited_entry():
    schedules = StubSchedules([stored_item(entry_id="s1")])
    checker = ScheduleConflictChecker(schedules)

    checker.check(date(2024, 3, 5), [SlotBooking(2, "t1", "r1")])
    checker.check(date(2024, 3, 5), [SlotBooking(1, "t1", "r1")], exclude_entry_id="s1")

    assert schedules.calls[1][2] == "s1"


def test_checker_does_not_query_when_submission_conflicts():
    schedules = StubSchedules([])
    with pytest.raises(ScheduleConflictError):
        ScheduleConflictChecker(schedules).check(
            date(2024, 3, 5), [SlotBooking(1, "t1", "r1"), SlotBooking(1, "t1", "r2")]
        )
    assert schedules.calls == []


def test_teacher_must_teach_the_discipline():
    discipline = SimpleNamespace(id="d1", teachers=[SimpleNamespace(id="t1")])

    ensure_teachers_teach_disciplines([("d1", "t1")], {"d1": discipline})
    with pytest.raises(ValidationError) as excinfo:
        ensure_teachers_teach_disciplines([("d1", "t2")], {"d1": discipline})

    assert excinfo.value.message == "Учитель с ID t2 не ведет дисциплину с ID d1"
