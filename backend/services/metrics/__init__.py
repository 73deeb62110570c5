"""
Metrics Services Module

Aggregations over the domain snapshots: composite city health index,
dashboard KPIs and per-domain summaries.
"""

from .city_health_calculator import COMPONENT_WEIGHTS, compute_city_health_index, score_overall
from .domain_summaries import (
    build_zone_overview, overview_records, summarize_power, summarize_traffic, summarize_water
)
from .kpi_summarizer import build_dashboard_kpis

__all__ = [
    "COMPONENT_WEIGHTS",
    "build_dashboard_kpis",
    "build_zone_overview",
    "compute_city_health_index",
    "overview_records",
    "score_overall",
    "summarize_power",
    "summarize_traffic",
    "summarize_water",
]
