from dataclasses import dataclass
from enum import Enum


class EnrollmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DROPPED = "dropped"


@dataclass(frozen=True)
class User:
    id: int | None
    email: str
    name: str
    role: str = "user"


@dataclass(frozen=True)
class Principal:
    """Аутентифицированный пользователь текущего запроса."""
    id: int
    email: str
    name: str
    role: str
