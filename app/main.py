import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.api.exceptions import (
    authentication_error_handler,
    fingerprint_missing_error_handler,
    generic_exception_handler,
    request_validation_error_handler,
    session_hijacked_error_handler,
)
from app.api.middleware.security import (
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
)
from app.api.routes import health, sessions
from app.core.config import get_settings
from app.core.exceptions import (
    AuthenticationError,
    FingerprintMissingError,
    SessionHijackedError,
)
from app.infrastructure.redis.connection import close_redis, get_redis

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting session guard...")
    if await get_redis() is None:
        # Binds are skipped and verifications fail closed until Redis is back
        logger.error("Binding store unavailable at startup")

    yield

    logger.info("Shutting down session guard...")
    await close_redis()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Fingerprint-bound session hijack detection",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)

app.include_router(health.router)
app.include_router(sessions.router)

app.add_exception_handler(AuthenticationError, authentication_error_handler)
app.add_exception_handler(SessionHijackedError, session_hijacked_error_handler)
app.add_exception_handler(FingerprintMissingError, fingerprint_missing_error_handler)
app.add_exception_handler(
    RequestValidationError, request_validation_error_handler
)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
    }
