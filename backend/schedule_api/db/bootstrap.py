from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from schedule_api.db.base import Base
from schedule_api.db.session import engine
from schedule_api.models.user import Role, UserRole

logger = logging.getLogger(__name__)


def seed_default_roles(db: Session) -> list[str]:
    existing = set(db.execute(select(Role.value)).scalars())
    created: list[str] = []
    for role in UserRole:
        if role.value in existing:
            continue
        db.add(Role(value=role.value))
        created.append(role.value)
    if created:
        db.commit()
        logger.info("Seeded roles: %s", ", ".join(created))
    return created


def ensure_runtime_schema() -> None:
    try:
        # Alembic owns the schema in deployed databases; this only fills gaps.
        Base.metadata.create_all(bind=engine)
        with Session(engine) as db:
            seed_default_roles(db)
    except Exception as exc:  # pragma: no cover - runtime environment dependent
        logger.exception("Runtime schema bootstrap failed")
        raise RuntimeError("Runtime schema bootstrap failed") from exc
