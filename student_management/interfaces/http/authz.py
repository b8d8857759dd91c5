from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from ...domain.entities import Principal
from ...infrastructure.db import get_db
from ...infrastructure.repositories import UserRepository
from ...infrastructure.security import read_subject
from .errors import unwrap

# auto_error=False: без заголовка отвечаем 401, а не 403
bearer = HTTPBearer(auto_error=False)


def resolve_principal(creds: HTTPAuthorizationCredentials | None, db: Session) -> Principal | None:
    """Ноль или один принципал по bearer-токену."""
    if creds is None or creds.scheme.lower() != "bearer":
        return None
    try:
        email = read_subject(creds.credentials)
    except JWTError:
        return None
    # сбой хранилища здесь 500, а не 401
    user = unwrap(UserRepository(db).get_by_email(email))
    if user is None:
        return None
    return Principal(id=user.id, email=user.email, name=user.name, role=user.role)


def get_current_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> Principal:
    # роли не проверяем: любой вошедший пользователь читает и пишет всё
    principal = resolve_principal(creds, db)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return principal
