from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.exceptions import ConflictError, ResourceNotFoundError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import (
    DisciplineFilter,
    DisciplineRepository,
    GroupRepository,
    TeacherRepository,
)
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.discipline import Discipline
from schedule_api.schemas.common import MessageOut
from schedule_api.schemas.discipline import (
    DisciplineCreate,
    DisciplineDetailOut,
    DisciplineListOut,
    DisciplineUpdate,
)
from schedule_api.services.audit import log_activity
from schedule_api.services.resolve import resolve_or_create_group, resolve_or_create_teacher

router = APIRouter()

disciplines_repository = get_repository(DisciplineRepository)
groups_repository = get_repository(GroupRepository)
teachers_repository = get_repository(TeacherRepository)


def assign_members(
    discipline: Discipline,
    payload: DisciplineCreate,
    groups: GroupRepository,
    teachers: TeacherRepository,
) -> None:
    group_ids = [resolve_or_create_group(groups, name) for name in payload.groups]
    teacher_ids = [resolve_or_create_teacher(teachers, surname) for surname in payload.teachers]
    discipline.groups = [groups.get(group_id) for group_id in group_ids]
    discipline.teachers = [teachers.get(teacher_id) for teacher_id in dict.fromkeys(teacher_ids)]


@router.post("/add", response_model=MessageOut)
def create_discipline(
    payload: DisciplineCreate,
    current_user: CurrentUser = Depends(require_admin),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
    groups: GroupRepository = Depends(groups_repository),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> MessageOut:
    if disciplines.find_by_name(payload.name) is not None:
        raise ConflictError(f"Дисциплина |{payload.name}| уже существует", status_code=400)

    discipline = Discipline(name=payload.name, academic_hours=payload.academic_hours)
    assign_members(discipline, payload, groups, teachers)
    disciplines.add(discipline)
    log_activity(
        disciplines.db,
        user=current_user,
        entity=EntityKind.discipline,
        action="created",
        entity_id=discipline.id,
        details={"groups": payload.groups, "teachers": payload.teachers},
    )
    disciplines.commit()
    return MessageOut(message=f"Дисциплина |{payload.name}| была успешно создана.")


@router.get("/get", response_model=DisciplineListOut)
def list_disciplines(
    current_user: CurrentUser = Depends(require_reader),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
) -> DisciplineListOut:
    return DisciplineListOut(disciplines=disciplines.find())


@router.get("/getByName", response_model=DisciplineDetailOut)
def get_discipline_by_name(
    name: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_reader),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
) -> DisciplineDetailOut:
    discipline = disciplines.find_by_name(name.strip())
    if discipline is None:
        raise ResourceNotFoundError("Дисциплины с данным названием не существует")
    return DisciplineDetailOut(discipline=discipline)


@router.get("/getByGroup", response_model=DisciplineListOut)
def get_disciplines_by_group(
    name: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_reader),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
    groups: GroupRepository = Depends(groups_repository),
) -> DisciplineListOut:
    group = groups.find_by_name(name.strip())
    if group is None:
        raise ResourceNotFoundError("Группы с данным названием не существует")
    return DisciplineListOut(disciplines=disciplines.find(DisciplineFilter(group_id=group.id)))


@router.put("/edit", response_model=MessageOut)
def update_discipline(
    payload: DisciplineUpdate,
    current_user: CurrentUser = Depends(require_admin),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
    groups: GroupRepository = Depends(groups_repository),
    teachers: TeacherRepository = Depends(teachers_repository),
) -> MessageOut:
    discipline = disciplines.get(payload.id)
    if discipline is None:
        raise ResourceNotFoundError(f"Дисциплина с id {payload.id} не найдена")
    if disciplines.find_by_name(payload.name, exclude_id=discipline.id) is not None:
        raise ConflictError(f"Дисциплина |{payload.name}| уже существует", status_code=400)

    discipline.name = payload.name
    discipline.academic_hours = payload.academic_hours
    assign_members(discipline, payload, groups, teachers)
    log_activity(
        disciplines.db,
        user=current_user,
        entity=EntityKind.discipline,
        action="updated",
        entity_id=discipline.id,
        details={"groups": payload.groups, "teachers": payload.teachers},
    )
    disciplines.commit()
    return MessageOut(message=f"Дисциплина |{payload.name}| успешно отредактирована")


@router.delete("/delete", response_model=MessageOut)
def delete_discipline(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    disciplines: DisciplineRepository = Depends(disciplines_repository),
) -> MessageOut:
    discipline = disciplines.get(id)
    if discipline is None:
        raise ResourceNotFoundError(f"Дисциплина с id {id} не найдена")
    if disciplines.is_scheduled(discipline.id):
        raise ConflictError(f"Дисциплина |{discipline.name}| используется в расписании")
    name = discipline.name
    log_activity(disciplines.db, user=current_user, entity=EntityKind.discipline, action="deleted", entity_id=id)
    disciplines.delete(discipline)
    disciplines.commit()
    return MessageOut(message=f"Дисциплина |{name}| удалена")
