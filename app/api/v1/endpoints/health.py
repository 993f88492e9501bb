"""Health check endpoints."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.infra.database import db_manager

router = APIRouter()


@router.get("/health")
async def health_check() -> JSONResponse:
    """Report service and database status. 503 when the database is down."""
    database_ok = await db_manager.health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if database_ok else "degraded",
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "database": "ok" if database_ok else "unavailable",
        },
    )
