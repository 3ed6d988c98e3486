from fastapi import APIRouter, Depends, Query

from schedule_api.api.deps import get_repository, require_admin
from schedule_api.core.security import CurrentUser
from schedule_api.db.repositories import ActivityLogRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.schemas.activity import ActivityLogListOut

router = APIRouter()


@router.get("/activity/logs", response_model=ActivityLogListOut)
def list_activity_logs(
    entity: EntityKind | None = Query(default=None),
    entity_id: str | None = Query(default=None, min_length=1),
    limit: int = Query(default=500, ge=1, le=500),
    current_user: CurrentUser = Depends(require_admin),
    logs: ActivityLogRepository = Depends(get_repository(ActivityLogRepository)),
) -> ActivityLogListOut:
    return ActivityLogListOut(logs=logs.latest(limit=limit, entity=entity, entity_id=entity_id))
