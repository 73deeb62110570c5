"""
City Metrics API

Composite city health index and dashboard KPIs.
"""

from typing import List

from fastapi import APIRouter, Depends

from api.dependencies import get_city_data_service
from models.schemas import CityHealthIndex, KPIRecord
from services.city_data_service import CityDataService

router = APIRouter(tags=["metrics"])


@router.get("/city-health", response_model=CityHealthIndex)
async def city_health(service: CityDataService = Depends(get_city_data_service)) -> CityHealthIndex:
    """Composite city health index."""
    return await service.compute_index()


@router.get("/kpis", response_model=List[KPIRecord])
async def dashboard_kpis(service: CityDataService = Depends(get_city_data_service)) -> List[KPIRecord]:
    """The five dashboard KPI cards, in display order."""
    return await service.compute_kpis()
