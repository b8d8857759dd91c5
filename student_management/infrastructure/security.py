from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from ..config import settings
from ..domain.entities import User

pwd = CryptContext(
    schemes=["bcrypt_sha256"],
    deprecated="auto",
    bcrypt_sha256__rounds=settings.BCRYPT_ROUNDS,
    bcrypt_sha256__truncate_error=False,
)


class PasswordHasher:
    def hash(self, plain: str) -> str: return pwd.hash(plain)
    def verify(self, plain: str, hashed: str) -> bool: return pwd.verify(plain, hashed)


def issue_access_token(user: User, minutes: int | None = None) -> str:
    """Токен входа: email в sub, имя и роль для клиента."""
    issued = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=minutes or settings.ACCESS_TOKEN_MINUTES)
    claims = {
        "sub": user.email,
        "name": user.name,
        "role": user.role,
        "iat": issued,
        "exp": issued + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def read_subject(token: str) -> str:
    # ExpiredSignatureError тоже наследник JWTError
    claims = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    email = claims.get("sub")
    if not email:
        raise JWTError("No subject")
    return email
