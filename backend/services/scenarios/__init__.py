"""
Scenario services for what-if impact projection.

All services are designed to be stateless for scalability.
"""

from .impact_calculator import simulate_scenario
from .scenario_service import ScenarioService

__all__ = ["ScenarioService", "simulate_scenario"]
