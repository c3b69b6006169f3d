"""Health and readiness check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from config import settings
from routes.deps import get_data_service
from services.data_service import PRIMARY, DataService

router = APIRouter()


@router.get("/ready")
async def ready() -> dict:
    """Lightweight readiness check — no external calls."""
    return {"status": "ok", "service": "sheet-data-api", "commit": settings.git_sha}


@router.get("/api/health")
async def health(service: DataService = Depends(get_data_service)) -> dict:
    """Cache introspection. Never triggers a fetch."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cache": service.status(PRIMARY),
        "datasets": {key: service.status(key) for key in service.sources},
    }
