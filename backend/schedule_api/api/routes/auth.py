import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError

from schedule_api.api.deps import get_repository, require_admin, require_reader
from schedule_api.core.config import get_settings
from schedule_api.core.exceptions import ConflictError, ValidationError
from schedule_api.core.security import CurrentUser, create_access_token, get_password_hash, verify_password
from schedule_api.db.repositories import RoleRepository, UserRepository
from schedule_api.models.activity_log import EntityKind
from schedule_api.models.user import Role, User
from schedule_api.schemas.common import MessageOut
from schedule_api.schemas.user import RoleCreate, RoleOut, Token, UserCreate, UserLogin, UserOut
from schedule_api.services.audit import log_activity

router = APIRouter()
logger = logging.getLogger(__name__)

users_repository = get_repository(UserRepository)
roles_repository = get_repository(RoleRepository)


def ensure_role(roles: RoleRepository, value: str) -> Role:
    role = roles.find_one(value=value)
    if role is None:
        role = roles.add(Role(value=value))
    return role


@router.post("/registration", response_model=MessageOut)
def registration(
    payload: UserCreate,
    users: UserRepository = Depends(users_repository),
    roles: RoleRepository = Depends(roles_repository),
) -> MessageOut:
    if users.find_by_username(payload.username) is not None:
        raise ConflictError("Пользователь с таким именем уже существует", status_code=400)

    # The default role is a product decision kept in settings; see registration_default_role.
    role = ensure_role(roles, get_settings().registration_default_role)
    user = users.add(
        User(
            username=payload.username,
            hashed_password=get_password_hash(payload.password),
            roles=[role.value],
        )
    )
    log_activity(users.db, user=None, entity=EntityKind.user, action="registered", entity_id=user.id)
    try:
        users.commit()
    except IntegrityError as exc:
        users.rollback()
        raise ConflictError("Пользователь с таким именем уже существует", status_code=400) from exc
    logger.info("Registered user %s with roles %s", user.username, user.roles)
    return MessageOut(message=f"Пользователь {user.username} успешно зарегистрирован")


@router.post("/login", response_model=Token)
def login(payload: UserLogin, users: UserRepository = Depends(users_repository)) -> Token:
    user = users.find_by_username(payload.username)
    if user is None:
        logger.warning("Login attempt for unknown user %s", payload.username)
        raise ValidationError(f"Пользователь {payload.username} не существует")
    if not verify_password(payload.password, user.hashed_password):
        logger.warning("Wrong password for user %s", payload.username)
        raise ValidationError("Введен неверный пароль")
    return Token(token=create_access_token(user.id, list(user.roles or [])))


@router.get("/users", response_model=list[UserOut])
def list_users(
    current_user: CurrentUser = Depends(require_admin),
    users: UserRepository = Depends(users_repository),
) -> list[UserOut]:
    return sorted(users.find_all(), key=lambda user: user.username)


@router.get("/check")
def check_token(current_user: CurrentUser = Depends(require_reader)) -> dict:
    return {"status": "Ok"}


@router.get("/roles", response_model=list[RoleOut])
def list_roles(
    current_user: CurrentUser = Depends(require_admin),
    roles: RoleRepository = Depends(roles_repository),
) -> list[RoleOut]:
    return sorted(roles.find_all(), key=lambda role: role.value)


@router.post("/roles", response_model=MessageOut)
def create_role(
    payload: RoleCreate,
    current_user: CurrentUser = Depends(require_admin),
    roles: RoleRepository = Depends(roles_repository),
) -> MessageOut:
    if payload.value in roles.values():
        raise ConflictError(f"Роль {payload.value} уже существует")
    role = roles.add(Role(value=payload.value))
    log_activity(roles.db, user=current_user, entity=EntityKind.role, action="created", entity_id=role.id)
    roles.commit()
    return MessageOut(message=f"Роль {payload.value} успешно создана")
