from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StoreError:
    kind: ErrorKind
    detail: str = ""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Результат операции с хранилищем: либо value, либо error."""
    value: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, detail: str = "") -> "Result[T]":
        return cls(error=StoreError(kind=kind, detail=detail))


class StoreFailure(Exception):
    """Хранилище не ответило: это не ошибка пользователя."""

    def __init__(self, error: StoreError):
        super().__init__(f"{error.kind.value}: {error.detail}")
        self.error = error
