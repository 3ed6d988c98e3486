from datetime import date

from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.exceptions import ConflictError, ResourceNotFoundError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import DisciplineRepository, TeacherRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.teacher import Teacher
from schedule_api.schemas.common import MessageOut
from schedule_api.schemas.teacher import (
    TeacherCreate,
    TeacherDetailOut,
    TeacherListOut,
    TeachersByDisciplineOut,
    TeacherUpdate,
)
from schedule_api.services.audit import log_activity
from schedule_api.services.workload import filter_available_teachers, sort_by_load

router = APIRouter()

teachers_repository = get_repository(TeacherRepository)
disciplines_repository = get_repository(DisciplineRepository)


def full_name(surname: str, name: str | None, patronymic: str | None) -> str:
    return " ".join(part for part in (surname, name, patronymic) if part)


@router.post("/add", response_model=MessageOut)
def create_teacher(
    payload: TeacherCreate,
    current_user: CurrentUser = Depends(require_admin),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> MessageOut:
    label = full_name(payload.surname, payload.name, payload.patronymic)
    if teachers.find_by_full_name(payload.surname, payload.name, payload.patronymic) is not None:
        raise ConflictError(f"Преподаватель {label} уже существует")
    teacher = teachers.add(
        Teacher(
            surname=payload.surname,
            name=payload.name,
            patronymic=payload.patronymic,
            academic_hours=payload.academic_hours,
            accumulated_hours=0,
        )
    )
    log_activity(teachers.db, user=current_user, entity=EntityKind.teacher, action="created", entity_id=teacher.id)
    teachers.commit()
    return MessageOut(message=f"Преподаватель {label} успешно создан")


@router.get("/get", response_model=TeacherDetailOut | TeacherListOut)
def get_teachers(
    id: str | None = Query(default=None, min_length=1),
    current_user: CurrentUser = Depends(require_reader),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> TeacherDetailOut | TeacherListOut:
    if id is None:
        return TeacherListOut(teachers=teachers.list_all())
    teacher = teachers.get(id)
    if teacher is None:
        raise ResourceNotFoundError(f"Преподаватель с id {id} не найден")
    return TeacherDetailOut(teacher=teacher)


@router.get("/getTeacherByDiscipline", response_model=TeachersByDisciplineOut)
def get_teachers_by_discipline(
    id: str = Query(..., min_length=1, description="Discipline id"),
    on_date: date = Query(..., alias="date", description="Any day of the month to check"),
    current_user: CurrentUser = Depends(require_reader),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
) -> TeachersByDisciplineOut:
    discipline = disciplines.get(id)
    if discipline is None:
        raise ResourceNotFoundError(f"Дисциплина с id {id} не найдена")
    ranked = sort_by_load(discipline.teachers)
    return TeachersByDisciplineOut(teachers=ranked, teachersFree=filter_available_teachers(ranked, on_date))


@router.post("/edit", response_model=MessageOut)
def update_teacher(
    payload: TeacherUpdate,
    current_user: CurrentUser = Depends(require_admin),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> MessageOut:
    teacher = teachers.get(payload.id)
    if teacher is None:
        raise ResourceNotFoundError(f"Преподаватель с id {payload.id} не найден")
    label = full_name(payload.surname, payload.name, payload.patronymic)
    duplicate = teachers.find_by_full_name(
        payload.surname, payload.name, payload.patronymic, exclude_id=teacher.id
    )
    if duplicate is not None:
        raise ConflictError(f"Преподаватель {label} уже существует")

    # Full overwrite: omitted name parts are cleared.
    teacher.surname = payload.surname
    teacher.name = payload.name
    teacher.patronymic = payload.patronymic
    teacher.academic_hours = payload.academic_hours
    log_activity(teachers.db, user=current_user, entity=EntityKind.teacher, action="updated", entity_id=teacher.id)
    teachers.commit()
    return MessageOut(message=f"Преподаватель {label} успешно отредактирован")


@router.delete("/delete", response_model=MessageOut)
def delete_teacher(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> MessageOut:
    teacher = teachers.get(id)
    if teacher is None:
        raise ResourceNotFoundError(f"Преподаватель с id {id} не найден")
    label = full_name(teacher.surname, teacher.name, teacher.patronymic)
    if teachers.is_scheduled(teacher.id):
        raise ConflictError(f"Преподаватель {label} используется в расписании")
    sole = teachers.sole_teacher_of(teacher.id)
    if sole:
        names = ", ".join(discipline.name for discipline in sole)
        raise ConflictError(f"Преподаватель {label} единственный у дисциплин: {names}")
    log_activity(teachers.db, user=current_user, entity=EntityKind.teacher, action="deleted", entity_id=id)
    teachers.delete(teacher)
    teachers.commit()
    return MessageOut(message=f"Преподаватель {label} удален")
