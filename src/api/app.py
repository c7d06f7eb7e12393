from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
from .middleware.logging import RequestLoggingMiddleware
from .observability import configure_logging, init_sentry
import logging

logger = logging.getLogger(__name__)


def error_envelope(code: str, message: str) -> dict:
    return {"success": False, "message": message, "code": code}


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = error_envelope(exc.base_error.code, exc.base_error.message)
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code} {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(exc.base_error.code, exc.public_message),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Only field locations: the rejected input may contain passwords
    locations = [error.get("loc") for error in exc.errors()]
    logger.warning(f"Request validation failed on {request.url.path}: {locations}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_envelope("VALIDATION_ERROR", "Invalid request parameters"),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_envelope(
            "INTERNAL_ERROR", "Internal server error, please try again later"
        ),
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)
    init_sentry(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if ApplicationConfig.DB_AUTO_CREATE:
            from src.depends import engine

            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables ensured")
        yield

    app = FastAPI(title="Fleet Admin Password Reset API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.add_middleware(RequestLoggingMiddleware)

    from src.api.routes import auth, health_check, session

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=ApplicationConfig.API_PREFIX)
    app.include_router(session.router, prefix=ApplicationConfig.API_PREFIX)

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
