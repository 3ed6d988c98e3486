from collections.abc import Callable, Generator, Iterable
from typing import TypeVar

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from schedule_api.core.exceptions import AuthError
from schedule_api.core.security import CurrentUser, decode_token
from schedule_api.db.repositories import Repository
from schedule_api.db.session import SessionLocal
from schedule_api.models.user import UserRole

# Missing credentials are reported by get_current_user with the API's own 403 body.
security = HTTPBearer(auto_error=False)

RepositoryT = TypeVar("RepositoryT", bound=Repository)

NOT_AUTHORIZED_MESSAGE = "Пользователь не авторизован"


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repository(repository_cls: type[RepositoryT]) -> Callable[[Session], RepositoryT]:
    def build(db: Session = Depends(get_db)) -> RepositoryT:
        return repository_cls(db)

    return build


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise AuthError(NOT_AUTHORIZED_MESSAGE)
    try:
        payload = decode_token(credentials.credentials)
    except JWTError as exc:
        raise AuthError(NOT_AUTHORIZED_MESSAGE) from exc

    user_id = payload.get("id")
    roles = payload.get("roles")
    if not isinstance(user_id, str) or not isinstance(roles, list):
        raise AuthError(NOT_AUTHORIZED_MESSAGE)
    return CurrentUser(id=user_id, roles=tuple(str(role) for role in roles))


def require_roles(*roles: UserRole | str) -> Callable[[CurrentUser], CurrentUser]:
    allowed_roles: Iterable[str] = {role.value if isinstance(role, UserRole) else role for role in roles}

    def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not current_user.has_any_role(allowed_roles):
            raise AuthError("У вас нет доступа")
        return current_user

    return role_checker


require_admin = require_roles(UserRole.admin)
require_reader = require_roles(UserRole.user, UserRole.admin)
