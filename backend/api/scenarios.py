"""
Scenario simulation API.
"""

from fastapi import APIRouter, Depends
import structlog

from api.dependencies import get_city_data_service
from models.schemas import ScenarioImpact, ScenarioParameters
from services.city_data_service import CityDataService

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/scenarios", tags=["scenarios"])


@router.post("/simulate", response_model=ScenarioImpact)
async def simulate_scenario(
    params: ScenarioParameters,
    service: CityDataService = Depends(get_city_data_service),
) -> ScenarioImpact:
    """Project a what-if scenario onto the current city state."""
    logger.info("Scenario requested", **params.model_dump(mode="json"))
    return service.simulate(params)
