"""Ad cards built from the secondary sheet."""

from fastapi import APIRouter, Depends

from routes.deps import get_data_service
from services.ads import format_ads
from services.data_service import ADS, DataService

router = APIRouter(prefix="/api")


@router.get("/ads")
async def get_ads(service: DataService = Depends(get_data_service)) -> list[dict]:
    dataset = await service.get_data(ADS)
    return format_ads(dataset)
