from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session
import structlog

from ....application.use_cases.authenticate_user import AuthenticateUser
from ....config import settings
from ....domain.entities import Principal
from ....domain.results import StoreFailure
from ....infrastructure.db import get_db
from ....infrastructure.rate_limit import limiter
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher, issue_access_token
from ..authz import get_current_principal
from ..errors import INTERNAL_ERROR
from ..schemas import LoginReq, PrincipalResp, TokenResp

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = structlog.get_logger(__name__)

@router.post("/login", response_model=TokenResp)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginReq, db: Session = Depends(get_db)):
    uc = AuthenticateUser(repo=UserRepository(db), hasher=PasswordHasher())
    try:
        user = uc.execute(payload.email, payload.password)
    except ValueError as e:
        logger.info("login_failed", email=payload.email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StoreFailure as e:
        logger.error("login_store_failure", kind=e.error.kind.value, detail=e.error.detail)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)
    # роль кладём в токен, хотя проверки по ней нет
    token = issue_access_token(user)
    return TokenResp(access_token=token)


@router.get("/me", response_model=PrincipalResp)
def me(principal: Principal = Depends(get_current_principal)):
    return PrincipalResp(id=principal.id, email=principal.email, name=principal.name, role=principal.role)
