import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from .application.identity import seed_default_accounts
from .application.repositories import UserRepository
from .application.use_cases.register_user import RegisterUser
from .config import settings
from .domain.errors import RecordsError
from .infrastructure.backends import KeyValueBackend
from .infrastructure.kv_store import SqlKeyValueStore, get_kv_store
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds
)
from .infrastructure.repositories import KvCredentialRepository
from .infrastructure.security import PasswordHasher
from .interfaces.http.errors import records_error_handler
from .interfaces.http.rate_limit import limiter
from .interfaces.http.routers import adaptations as adaptations_router
from .interfaces.http.routers import auth as auth_router
from .interfaces.http.routers import reports as reports_router
from .interfaces.http.routers import students as students_router

VERSION = "0.1.0"

log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Adaptation Records Service", version=VERSION)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(RecordsError, records_error_handler)
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def add_charset_header(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    response = await call_next(request)
    # label with the route template, not the raw path
    route = request.scope.get("route")
    endpoint = getattr(route, "path", "unmatched")

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    duration = time.time() - start_time
    status_code = response.status_code
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )

    return response


@app.on_event("startup")
def on_startup():
    logger.info("Starting adaptation records service", version=VERSION, kv_store=settings.KV_STORE)
    store = get_kv_store()
    if isinstance(store, SqlKeyValueStore):
        store.create_schema()

    if settings.SEED_DEFAULT_USERS:
        register = RegisterUser(
            users=UserRepository(KeyValueBackend(store)),
            credentials=KvCredentialRepository(store),
            hasher=PasswordHasher(),
        )
        seed_default_accounts(register)
    logger.info("Key-value store ready")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(auth_router.router)
app.include_router(students_router.router)
app.include_router(adaptations_router.router)
app.include_router(reports_router.router)
