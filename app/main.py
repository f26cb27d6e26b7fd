"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from app.api.routes import router as api_router
from app.core.config import settings
from app.core.database import verify_connection
from app.core.errors import AppError, Unauthenticated, to_app_error
from app.repositories.errors import StorageError
from app.services.uploads import UPLOAD_URL_PREFIX, ImageStorage

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Fail fast when the database is unreachable; make sure upload directories exist."""
    try:
        verify_connection()
    except SQLAlchemyError:
        logger.critical("Database is unreachable; refusing to start")
        raise
    ImageStorage(settings.UPLOAD_DIR, settings.UPLOAD_MAX_BYTES).ensure_dirs()
    logger.info("SOCIAL SH API started", extra={"environment": settings.APP_ENV})
    yield


app = FastAPI(
    title="SOCIAL SH API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(err: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(err, Unauthenticated) else None
    return JSONResponse(status_code=err.status_code, content={"detail": err.message}, headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(_request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(StorageError)
async def storage_error_handler(_request: Request, exc: StorageError) -> JSONResponse:
    return error_response(to_app_error(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON and schema violations are client errors: 400 with the first problem."""
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        msg = first.get("msg", "invalid value")
        message = f"{loc}: {msg}" if loc else msg
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": message})


app.include_router(api_router, prefix=settings.API_PREFIX)
app.mount(
    UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "SOCIAL SH API"}
