from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException

from app.api.routes import (
    courses,
    enrollments,
    exams,
    health,
    learning_preferences,
    recommendations,
    rooms,
    schedule,
    scheduler,
    study_resources,
    users,
)
from app.core.config import get_settings
from app.core.exceptions import AppError
from app.core.middleware import RequestLoggingMiddleware, RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from app.db.bootstrap import ensure_schema
from app.schemas.common import failure

settings = get_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    ensure_schema()
    logger.info("%s started (%s)", settings.project_name, settings.environment)
    yield


def error_response(status_code: int, message: str, details: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=failure(message, details))


async def app_error_handler(request: Request, exc: AppError):
    return error_response(exc.status_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: HTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    response = error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(part) for part in error["loc"][1:]), "message": error["msg"]}
        for error in exc.errors()
    ]
    first = errors[0] if errors else None
    message = f"{first['field']}: {first['message']}" if first and first["field"] else "Invalid request"
    return error_response(400, message, {"errors": errors})


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Unhandled unique constraint violation on %s %s", request.method, request.url.path)
    return error_response(409, "Resource already exists with the same unique fields")


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
app.add_middleware(SecurityHeadersMiddleware, settings=settings)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["users"])
app.include_router(courses.router, prefix=f"{settings.api_prefix}/courses", tags=["courses"])
app.include_router(rooms.router, prefix=f"{settings.api_prefix}/rooms", tags=["rooms"])
app.include_router(exams.router, prefix=f"{settings.api_prefix}/exams", tags=["exams"])
app.include_router(scheduler.router, prefix=f"{settings.api_prefix}/scheduler", tags=["scheduler"])
app.include_router(schedule.router, prefix=f"{settings.api_prefix}/schedule", tags=["schedule"])
app.include_router(enrollments.router, prefix=f"{settings.api_prefix}/enrollments", tags=["enrollments"])
app.include_router(
    study_resources.router, prefix=f"{settings.api_prefix}/study-resources", tags=["study-resources"]
)
app.include_router(recommendations.router, prefix=f"{settings.api_prefix}/recommendations", tags=["recommendations"])
app.include_router(
    learning_preferences.router,
    prefix=f"{settings.api_prefix}/learning-preferences",
    tags=["learning-preferences"],
)
