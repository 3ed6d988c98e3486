from datetime import datetime

from pydantic import BaseModel

from schedule_api.models.activity_log import EntityKind


class ActivityEntryOut(BaseModel):
    entity: EntityKind
    entity_id: str
    action: str
    actor_id: str | None
    details: dict
    created_at: datetime

    model_config = {"from_attributes": True}


class ActivityLogListOut(BaseModel):
    logs: list[ActivityEntryOut]
