"""
Shared FastAPI dependencies.
"""

from functools import lru_cache

from services.city_data_service import CityDataService
from services.data_source_registry import DataSourceRegistry


@lru_cache()
def get_city_data_service() -> CityDataService:
    """Process-wide city data service."""
    return CityDataService()


@lru_cache()
def get_data_source_registry() -> DataSourceRegistry:
    """Process-wide data source registry."""
    return DataSourceRegistry()
