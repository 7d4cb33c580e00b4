import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from timekeeper.config import settings
from timekeeper.core.errors import ApiError, InternalError
from timekeeper.database.base import Base
from timekeeper.database.session import dispose_engine, engine
from timekeeper.models import project, task, time_entry, user  # noqa: F401
from timekeeper.routes import health, projects, tasks, time_entries, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Timekeeper API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
def create_tables():
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


@app.on_event("shutdown")
def close_pool():
    dispose_engine()


def _format_validation_messages(exc: RequestValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        parts = [str(v) for v in err.get("loc", ()) if v not in ("body", "query", "path")]
        field = ".".join(parts) or "request"
        kind = err.get("type", "")
        text = str(err.get("msg", "Invalid value"))

        if kind == "missing":
            messages.append(f"{field} is required")
        elif kind == "value_error":
            # custom validators already phrase a full sentence
            messages.append(text.removeprefix("Value error, "))
        else:
            messages.append(f"{field}: {text}")

    # first occurrence wins
    return list(dict.fromkeys(messages))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = _format_validation_messages(exc)
    error = messages[0] if len(messages) == 1 else "Validation failed"
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": error,
            "errors": messages,
        },
    )


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    error = InternalError("Database error", f"Failed to process {request.method} {request.url.path}")
    return JSONResponse(status_code=error.status_code, content=error.to_content())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError(str(exc) or exc.__class__.__name__, "Unexpected server error")
    return JSONResponse(status_code=error.status_code, content=error.to_content())


app.include_router(users.router)
app.include_router(projects.router)
app.include_router(tasks.router)
app.include_router(time_entries.router)
app.include_router(health.router)
