import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schedule_api.api.deps import get_db, require_admin, require_reader
from schedule_api.core.config import get_settings
from schedule_api.core.exceptions import ResourceNotFoundError, ScheduleConflictError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import (
    AudithoriaRepository,
    DisciplineRepository,
    GroupRepository,
    LessonTypeRepository,
    ScheduleFilter,
    ScheduleRepository,
    SlotBooking,
    TeacherRepository,
)
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.discipline import Discipline
from schedule_api.models.schedule import ScheduleEntry, ScheduleItem
from schedule_api.models.teacher import Teacher
from schedule_api.schemas.common import MessageOut
from schedule_api.schemas.schedule import ScheduleCreate, ScheduleListOut, ScheduleSaved, ScheduleUpdate
from schedule_api.services.audit import log_activity
from schedule_api.services.conflict_service import (
    SLOT_TAKEN_MESSAGE,
    ScheduleConflictChecker,
    ensure_teachers_teach_disciplines,
)
from schedule_api.services.export import XLSX_MEDIA_TYPE, build_schedule_workbook
from schedule_api.services.workload import apply_teacher_load

router = APIRouter()
logger = logging.getLogger(__name__)


@dataclass
class ScheduleRepositories:
    schedules: ScheduleRepository
    groups: GroupRepository
    disciplines: DisciplineRepository
    teachers: TeacherRepository
    types: LessonTypeRepository
    audithories: AudithoriaRepository


def get_schedule_repositories(db: Session = Depends(get_db)) -> ScheduleRepositories:
    return ScheduleRepositories(
        schedules=ScheduleRepository(db),
        groups=GroupRepository(db),
        disciplines=DisciplineRepository(db),
        teachers=TeacherRepository(db),
        types=LessonTypeRepository(db),
        audithories=AudithoriaRepository(db),
    )


@dataclass
class ResolvedItems:
    disciplines: dict[str, Discipline]
    teachers: dict[str, Teacher]
    bookings: list[SlotBooking]


def resolve_items(payload: ScheduleCreate, repos: ScheduleRepositories) -> ResolvedItems:
    """Load everything the submission references and verify teacher/discipline pairs."""
    if repos.groups.get(payload.group) is None:
        raise ResourceNotFoundError(f"Группа с id {payload.group} не найдена")

    disciplines: dict[str, Discipline] = {}
    teachers: dict[str, Teacher] = {}
    for item in payload.items:
        if item.discipline not in disciplines:
            discipline = repos.disciplines.get(item.discipline)
            if discipline is None:
                raise ResourceNotFoundError(f"Дисциплина с id {item.discipline} не найдена")
            disciplines[item.discipline] = discipline
        if item.teacher not in teachers:
            teacher = repos.teachers.get(item.teacher)
            if teacher is None:
                raise ResourceNotFoundError(f"Преподаватель с id {item.teacher} не найден")
            teachers[item.teacher] = teacher
        if repos.types.get(item.type) is None:
            raise ResourceNotFoundError(f"Тип с id {item.type} не найден")
        if repos.audithories.get(item.audithoria) is None:
            raise ResourceNotFoundError(f"Аудитория с id {item.audithoria} не найдена")

    ensure_teachers_teach_disciplines([(item.discipline, item.teacher) for item in payload.items], disciplines)
    bookings = [
        SlotBooking(number=item.number, teacher_id=item.teacher, audithoria_id=item.audithoria)
        for item in payload.items
    ]
    return ResolvedItems(disciplines=disciplines, teachers=teachers, bookings=bookings)


def build_items(payload: ScheduleCreate) -> list[ScheduleItem]:
    return [
        ScheduleItem(
            position=position,
            date=payload.date,
            number=item.number,
            discipline_id=item.discipline,
            teacher_id=item.teacher,
            type_id=item.type,
            audithoria_id=item.audithoria,
        )
        for position, item in enumerate(payload.items)
    ]


@contextmanager
def slot_constraints(repos: ScheduleRepositories) -> Iterator[None]:
    # A concurrent submission can pass the check first; the unique slot
    # constraints then reject this one at flush or commit time.
    try:
        yield
    except IntegrityError as exc:
        repos.schedules.rollback()
        logger.info("Schedule write rejected by slot constraints: %s", exc.orig)
        raise ScheduleConflictError(SLOT_TAKEN_MESSAGE) from exc


@router.post("/add", response_model=ScheduleSaved)
def create_schedule(
    payload: ScheduleCreate,
    current_user: CurrentUser = Depends(require_admin),
    repos: ScheduleRepositories = Depends(get_schedule_repositories),
) -> ScheduleSaved:
    resolved = resolve_items(payload, repos)
    ScheduleConflictChecker(repos.schedules).check(payload.date, resolved.bookings)

    with slot_constraints(repos):
        entry = repos.schedules.add(
            ScheduleEntry(date=payload.date, group_id=payload.group, items=build_items(payload))
        )
        added_hours = apply_teacher_load(
            resolved.teachers,
            [item.teacher for item in payload.items],
            payload.date,
            get_settings().lesson_academic_hours,
        )
        log_activity(
            repos.schedules.db,
            user=current_user,
            entity=EntityKind.schedule,
            action="created",
            entity_id=entry.id,
            details={"date": payload.date.isoformat(), "items": len(payload.items), "hours": added_hours},
        )
        entry_id = entry.id
        repos.schedules.commit()
    return ScheduleSaved(id=entry_id, message="Расписание успешно создано")


@router.get("/get", response_model=ScheduleListOut)
def list_schedule(
    on_date: date | None = Query(default=None, alias="date"),
    teacher: str | None = Query(default=None, min_length=1),
    group: str | None = Query(default=None, min_length=1),
    current_user: CurrentUser = Depends(require_reader),
    repos: ScheduleRepositories = Depends(get_schedule_repositories),
) -> ScheduleListOut:
    entries = repos.schedules.find(ScheduleFilter(date=on_date, teacher_id=teacher, group_id=group))
    if not entries:
        raise ResourceNotFoundError("Расписание не найдено")
    return ScheduleListOut(schedule=entries)


@router.get("/getExcel")
def export_schedule(
    on_date: date | None = Query(default=None, alias="date"),
    teacher: str | None = Query(default=None, min_length=1),
    group: str | None = Query(default=None, min_length=1),
    current_user: CurrentUser = Depends(require_reader),
    repos: ScheduleRepositories = Depends(get_schedule_repositories),
) -> StreamingResponse:
    entries = repos.schedules.find(ScheduleFilter(date=on_date, teacher_id=teacher, group_id=group))
    if not entries:
        raise ResourceNotFoundError("Расписание не найдено")
    filename = f"schedule_{on_date.isoformat()}.xlsx" if on_date else "schedule.xlsx"
    return StreamingResponse(
        build_schedule_workbook(entries),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/edit", response_model=ScheduleSaved)
def update_schedule(
    payload: ScheduleUpdate,
    current_user: CurrentUser = Depends(require_admin),
    repos: ScheduleRepositories = Depends(get_schedule_repositories),
) -> ScheduleSaved:
    entry = repos.schedules.get(payload.id)
    if entry is None:
        raise ResourceNotFoundError(f"Расписание с id {payload.id} не найдено")
    resolved = resolve_items(payload, repos)
    ScheduleConflictChecker(repos.schedules).check(payload.date, resolved.bookings, exclude_entry_id=entry.id)

    with slot_constraints(repos):
        # Old rows go first so the slot constraints never see both versions.
        entry.items.clear()
        repos.schedules.db.flush()
        entry.date = payload.date
        entry.group_id = payload.group
        entry.items = build_items(payload)
        log_activity(
            repos.schedules.db,
            user=current_user,
            entity=EntityKind.schedule,
            action="updated",
            entity_id=payload.id,
            details={"date": payload.date.isoformat(), "items": len(payload.items)},
        )
        repos.schedules.commit()
    return ScheduleSaved(id=payload.id, message="Расписание успешно отредактировано")


@router.delete("/delete", response_model=MessageOut)
def delete_schedule(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    repos: ScheduleRepositories = Depends(get_schedule_repositories),
) -> MessageOut:
    entry = repos.schedules.get(id)
    if entry is None:
        raise ResourceNotFoundError(f"Расписание с id {id} не найдено")
    log_activity(repos.schedules.db, user=current_user, entity=EntityKind.schedule, action="deleted", entity_id=id)
    repos.schedules.delete(entry)
    repos.schedules.commit()
    return MessageOut(message="Расписание удалено")
