import logging
from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from jobly.core.config import Settings, settings
from jobly.core.database import init_db
from jobly.core.deps import get_principal
from jobly.core.logging_config import setup_logging
from jobly.core.security import TokenAuthenticator
from jobly.api.endpoints import companies, health, jobs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Jobly API...")
    init_db()
    logger.info("Database models registered")

    yield

    logger.info("Shutting down Jobly API...")


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Schema violations are bad requests (400), listed one message per error."""
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append(f"{location}: {error['msg']}" if location else error["msg"])

    logger.info(f"Rejected {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


def create_app(app_settings: Settings) -> FastAPI:
    """
    Build the application.

    The JWT secret travels from app_settings into the TokenAuthenticator
    stored on app.state; the auth dependencies read it from there.
    """
    application = FastAPI(
        title=app_settings.PROJECT_NAME,
        version="1.0.0",
        description="Companies and jobs, with admin-gated writes",
        lifespan=lifespan,
        # Every request is decoded for a principal, guarded or not
        dependencies=[Depends(get_principal)],
    )

    application.state.authenticator = TokenAuthenticator(
        secret_key=app_settings.SECRET_KEY,
        algorithm=app_settings.ALGORITHM,
        expire_minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    application.include_router(health.router)
    application.include_router(companies.router, prefix=app_settings.API_V1_STR)
    application.include_router(jobs.router, prefix=app_settings.API_V1_STR)

    @application.get("/")
    async def root():
        """Root endpoint - API health check"""
        return {
            "message": "Jobly API",
            "version": "1.0.0",
            "status": "healthy"
        }

    return application


setup_logging(log_level=settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
