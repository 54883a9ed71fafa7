"""
Planner for generating day-by-day itineraries.

Renders the planning prompt, calls the generation service, and parses
the raw response into a validated TripPlan.
"""

from journeyx.planner.graph.build import create_planner_graph, ItineraryGenerator
from journeyx.planner.response_parser import parse_trip_plan_response, strip_code_fences
from journeyx.planner.schemas import PlannerState

__all__ = [
    "create_planner_graph",
    "ItineraryGenerator",
    "parse_trip_plan_response",
    "strip_code_fences",
    "PlannerState",
]
