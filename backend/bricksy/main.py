"""
FastAPI entrypoint for the Bricksy backend application.
"""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from bricksy.core.config import settings
from bricksy.core.errors import AppError, InternalError, ValidationError
from bricksy.core.log import setup_logging
from bricksy.db.session import close_db, init_db
from bricksy.api.router import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db(settings.database_url)
    logger.info(f"{settings.APP_NAME} backend started")
    try:
        yield
    finally:
        close_db()


app = FastAPI(
    title="Bricksy API",
    description="Backend API for real-estate crowd investing",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials="*" not in settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError):
    if isinstance(exc, InternalError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    # Bodies that are not JSON objects or carry non-string fields
    logger.info(f"Rejected malformed body on {request.url.path}: {len(exc.errors())} error(s)")
    error = ValidationError("Request body is missing or malformed")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# Include API routes
app.include_router(api_router, prefix="/api")
