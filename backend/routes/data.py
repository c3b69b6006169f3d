"""Primary sheet routes: records, fields, single-column projection, refresh."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from routes.deps import get_data_service
from services.data_service import PRIMARY, DataService

router = APIRouter(prefix="/api")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/data")
async def get_data(service: DataService = Depends(get_data_service)) -> dict:
    """All records; timestamp is when the cached copy was fetched."""
    dataset = await service.get_data(PRIMARY)
    return {
        "success": True,
        "timestamp": dataset.fetched_at.isoformat(),
        "total_records": dataset.total_records,
        "fields": list(dataset.headers),
        "data": dataset.records_as_dicts(),
    }


@router.get("/fields")
async def get_fields(service: DataService = Depends(get_data_service)) -> dict:
    dataset = await service.get_data(PRIMARY)
    return {"success": True, "timestamp": _now(), "fields": list(dataset.headers)}


@router.get("/data/{field}")
async def get_field_values(field: str, service: DataService = Depends(get_data_service)) -> dict:
    values = await service.get_field(PRIMARY, field)
    return {
        "success": True,
        "timestamp": _now(),
        "field": field,
        "values": values,
        "total_values": len(values),
    }


@router.post("/refresh")
async def refresh(service: DataService = Depends(get_data_service)) -> dict:
    dataset = await service.refresh(PRIMARY)
    return {
        "success": True,
        "message": "Cache refreshed successfully",
        "timestamp": dataset.fetched_at.isoformat(),
    }
