"""
RecoveryTrack - Main FastAPI Application
"""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from .config import settings
from .api import auth_router, logs_router, recovery_plan_router, coach_router, messages_router
from .core.logging_config import setup_logging
from .middleware import RequestLoggingMiddleware
from .storage import LocalStorage, init_record_store, init_user_storage

logger = logging.getLogger(__name__)


def _plan_service_configured() -> bool:
    return bool(settings.llm_api_key or settings.gemini_api_key)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    setup_logging(settings)

    storage = LocalStorage(settings.local_storage_path)
    init_user_storage(storage)
    init_record_store(storage)
    logger.info("Storage initialized")

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Storage path: {settings.local_storage_path}")
    logger.info(f"LLM provider: {settings.llm_provider} (configured: {_plan_service_configured()})")
    logger.info(f"Debug mode: {settings.debug}")
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Athlete recovery tracking: daily reflections, AI recovery plans and health scores",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if settings.log_api_requests:
    app.add_middleware(RequestLoggingMiddleware)

app.include_router(auth_router)
app.include_router(logs_router)
app.include_router(recovery_plan_router)
app.include_router(coach_router)
app.include_router(messages_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Liveness plus whether recovery plans can be generated."""
    return {
        "status": "healthy",
        "storage": settings.storage_type,
        "recovery_plans": "enabled" if _plan_service_configured() else "disabled",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "recoverytrack.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
