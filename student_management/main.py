import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from .infrastructure.db import engine, SessionLocal
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.rate_limit import limiter
from .infrastructure.seed import seed_database
from .interfaces.http.errors import INTERNAL_ERROR
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import courses as courses_router
from .interfaces.http.routers import dashboard as dashboard_router
from .interfaces.http.routers import enrollments as enrollments_router
from .interfaces.http.routers import students as students_router
from .config import settings

# Настройка структурированного логирования
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Student Management Service", version="0.1.0")
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

def observe_request(method: str, path: str, status_code: int, start_time: float):
    duration = time.time() - start_time

    # Метрики
    http_requests_total.labels(method=method, endpoint=path, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=path).observe(duration)

    # Логирование
    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )


# Добавляем middleware для правильной кодировки и метрик
@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    try:
        response = await call_next(request)
    except Exception:
        # ответ 500 соберёт обработчик ошибок, запрос всё равно учитываем
        observe_request(method, path, 500, start_time)
        raise

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    observe_request(method, path, response.status_code, start_time)
    return response


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("unhandled_error", method=request.method, path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": INTERNAL_ERROR})


@app.on_event("startup")
def on_startup():
    logger.info("Starting student management service", version="0.1.0")
    Base.metadata.create_all(bind=engine)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established")

    if settings.SEED_ON_STARTUP:
        db = SessionLocal()
        try:
            seed_database(db)
        finally:
            db.close()


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(students_router.router)
app.include_router(courses_router.router)
app.include_router(enrollments_router.router)
app.include_router(dashboard_router.router)
