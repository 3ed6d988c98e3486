from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.exceptions import ConflictError, ResourceNotFoundError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import LessonTypeRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.lesson_type import LessonType
from schedule_api.schemas.common import MessageOut
from schedule_api.schemas.lesson_type import LessonTypeCreate, LessonTypeListOut, LessonTypeUpdate
from schedule_api.services.audit import log_activity

router = APIRouter()

types_repository = get_repository(LessonTypeRepository)


@router.post("/add", response_model=MessageOut)
def create_type(
    payload: LessonTypeCreate,
    current_user: CurrentUser = Depends(require_admin),
    types: LessonTypeRepository = Depends(types_repository),
) -> MessageOut:
    if types.find_by_name(payload.name) is not None:
        raise ConflictError(f"Тип {payload.name} уже существует")
    lesson_type = types.add(LessonType(name=payload.name))
    log_activity(types.db, user=current_user, entity=EntityKind.lesson_type, action="created", entity_id=lesson_type.id)
    types.commit()
    return MessageOut(message=f"Тип {payload.name} успешно создан")


@router.get("/get", response_model=LessonTypeListOut)
def list_types(
    current_user: CurrentUser = Depends(require_reader),
    types: LessonTypeRepository = Depends(types_repository),
) -> LessonTypeListOut:
    items = types.list_all()
    if not items:
        raise ResourceNotFoundError("Нет доступных типов")
    return LessonTypeListOut(types=items)


@router.post("/edit", response_model=MessageOut)
def update_type(
    payload: LessonTypeUpdate,
    current_user: CurrentUser = Depends(require_admin),
    types: LessonTypeRepository = Depends(types_repository),
) -> MessageOut:
    lesson_type = types.get(payload.id)
    if lesson_type is None:
        raise ResourceNotFoundError(f"Тип с id {payload.id} не найден")
    if types.find_by_name(payload.name, exclude_id=lesson_type.id) is not None:
        raise ConflictError(f"Тип {payload.name} уже существует")
    lesson_type.name = payload.name
    log_activity(types.db, user=current_user, entity=EntityKind.lesson_type, action="updated", entity_id=lesson_type.id)
    types.commit()
    return MessageOut(message=f"Тип с id {payload.id} успешно отредактирован")


@router.delete("/delete", response_model=MessageOut)
def delete_type(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    types: LessonTypeRepository = Depends(types_repository),
) -> MessageOut:
    lesson_type = types.get(id)
    if lesson_type is None:
        raise ResourceNotFoundError("Тип не найден")
    if types.is_scheduled(lesson_type.id):
        raise ConflictError(f"Тип {lesson_type.name} используется в расписании")
    log_activity(types.db, user=current_user, entity=EntityKind.lesson_type, action="deleted", entity_id=id)
    types.delete(lesson_type)
    types.commit()
    return MessageOut(message="Тип успешно удален")
