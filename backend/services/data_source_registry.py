"""
Data source registry for the City Operations Engine.

Loads the allow-listed data sources from YAML so that every dashboard
figure can be labelled as live, modelled or hybrid.
"""

from typing import Dict, List, Optional

import structlog
import yaml

from core.config import get_settings
from models.schemas import DataSource, DataSourcesConfig, DataSourceType
from services.error_handler import get_error_handler

logger = structlog.get_logger(__name__)

SOURCE_BADGES: Dict[DataSourceType, str] = {
    DataSourceType.REAL: "Live Data",
    DataSourceType.MODEL: "Model-Derived",
    DataSourceType.HYBRID: "Hybrid",
}

_errors = get_error_handler("data_sources")


def get_source_badge(source_type: DataSourceType) -> str:
    """Display label for a source type."""
    return SOURCE_BADGES[DataSourceType(source_type)]


@_errors.wrap_operation("load_data_sources", error_code="INVALID_INPUT")
def _read_config(path: str) -> DataSourcesConfig:
    with open(path, 'r') as f:
        config_data = yaml.safe_load(f) or {}
    return DataSourcesConfig(**config_data)


class DataSourceRegistry:
    """Read-only view over the configured data sources."""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or get_settings().DATA_SOURCES_CONFIG_PATH
        config = _read_config(self.config_path)
        if config is None:
            logger.error("Data source registry unavailable", path=self.config_path)
            config = DataSourcesConfig(sources=[])
        self._sources: List[DataSource] = list(config.sources)
        logger.info("Loaded data source registry", sources=len(self._sources))

    @property
    def sources(self) -> List[DataSource]:
        return list(self._sources)

    def get(self, source_id: str) -> Optional[DataSource]:
        return next((s for s in self._sources if s.id == source_id), None)

    def for_module(self, module: str) -> List[DataSource]:
        """Sources feeding a dashboard module, e.g. ``"Dashboard"``."""
        return [s for s in self._sources if module in s.modules]
