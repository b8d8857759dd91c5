from fastapi import HTTPException, status
import structlog

from ...domain.results import ErrorKind, Result

logger = structlog.get_logger(__name__)

INTERNAL_ERROR = "Internal server error"


def unwrap(result: Result, conflict: str | None = None, not_found: dict[str, str] | None = None):
    """Достаёт value из Result или кидает HTTPException по виду ошибки."""
    if result.ok:
        return result.value
    error = result.error
    logger.error("request_failed", kind=error.kind.value, detail=error.detail)
    if error.kind is ErrorKind.CONFLICT and conflict:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=conflict)
    if error.kind is ErrorKind.NOT_FOUND and not_found:
        message = not_found.get(error.detail)
        if message:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=message)
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=INTERNAL_ERROR)
