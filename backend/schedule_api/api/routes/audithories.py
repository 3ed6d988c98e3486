from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.exceptions import ConflictError, ResourceNotFoundError
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import AudithoriaRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.audithoria import Audithoria
from schedule_api.schemas.audithoria import AudithoriaCreate, AudithoriaListOut, AudithoriaUpdate
from schedule_api.schemas.common import MessageOut
from schedule_api.services.audit import log_activity

router = APIRouter()

audithories_repository = get_repository(AudithoriaRepository)


@router.post("/add", response_model=MessageOut)
def create_audithoria(
    payload: AudithoriaCreate,
    current_user: CurrentUser = Depends(require_admin),
    audithories: AudithoriaRepository = Depends(audithories_repository),
) -> MessageOut:
    if audithories.find_by_name(payload.name) is not None:
        raise ConflictError(f"Аудитория {payload.name} уже существует")
    audithoria = audithories.add(Audithoria(name=payload.name, pc=payload.pc))
    log_activity(
        audithories.db,
        user=current_user,
        entity=EntityKind.audithoria,
        action="created",
        entity_id=audithoria.id,
        details={"pc": payload.pc},
    )
    audithories.commit()
    return MessageOut(message=f"Аудитория {payload.name} успешно создана")


@router.get("/get", response_model=AudithoriaListOut)
def list_audithories(
    current_user: CurrentUser = Depends(require_reader),
    audithories: AudithoriaRepository = Depends(audithories_repository),
) -> AudithoriaListOut:
    items = audithories.list_all()
    if not items:
        raise ResourceNotFoundError("Нет доступных аудиторий")
    return AudithoriaListOut(audithories=items)


@router.post("/edit", response_model=MessageOut)
def update_audithoria(
    payload: AudithoriaUpdate,
    current_user: CurrentUser = Depends(require_admin),
    audithories: AudithoriaRepository = Depends(audithories_repository),
) -> MessageOut:
    audithoria = audithories.get(payload.id)
    if audithoria is None:
        raise ResourceNotFoundError(f"Аудитория с id {payload.id} не найдена")
    if audithories.find_by_name(payload.name, exclude_id=audithoria.id) is not None:
        raise ConflictError(f"Аудитория {payload.name} уже существует")
    audithoria.name = payload.name
    audithoria.pc = payload.pc
    log_activity(
        audithories.db,
        user=current_user,
        entity=EntityKind.audithoria,
        action="updated",
        entity_id=audithoria.id,
    )
    audithories.commit()
    return MessageOut(message=f"Аудитория с id {payload.id} успешно отредактирована")


@router.delete("/delete", response_model=MessageOut)
def delete_audithoria(
    id: str = Query(..., min_length=1),
    current_user: CurrentUser = Depends(require_admin),
    audithories: AudithoriaRepository = Depends(audithories_repository),
) -> MessageOut:
    audithoria = audithories.get(id)
    if audithoria is None:
        raise ResourceNotFoundError("Аудитория не найдена")
    if audithories.is_scheduled(audithoria.id):
        raise ConflictError(f"Аудитория {audithoria.name} используется в расписании")
    log_activity(audithories.db, user=current_user, entity=EntityKind.audithoria, action="deleted", entity_id=id)
    audithories.delete(audithoria)
    audithories.commit()
    return MessageOut(message="Аудитория успешно удалена")
