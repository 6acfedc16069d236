import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from experiencias_api.api.deps import engine
from experiencias_api.api.routers.health import router as health_router
from experiencias_api.api.routers.professors import router as professors_router
from experiencias_api.api.routers.reservation_groups import router as reservation_groups_router
from experiencias_api.api.routers.reservations import router as reservations_router
from experiencias_api.config import get_settings
from experiencias_api.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from experiencias_api.infrastructure.db.tables import metadata

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.use_in_memory:
        # Tables for dev/demo; production schemas are migrated separately
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="Experiencias API",
    version="0.1.0",
    lifespan=lifespan
)


def _domain_error_response(status_code: int, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _domain_error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _domain_error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning(
        "Workflow conflict",
        extra={"path": request.url.path, "code": exc.code, "detail": exc.message},
    )
    return _domain_error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(reservation_groups_router, prefix="/api/v1", tags=["Reservation groups"])
app.include_router(reservations_router, prefix="/api/v1", tags=["Reservations"])
app.include_router(professors_router, prefix="/api/v1", tags=["Professors"])
