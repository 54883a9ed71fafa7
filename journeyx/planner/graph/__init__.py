"""Graph construction and configuration for the planner."""

from journeyx.planner.graph.build import create_planner_graph, ItineraryGenerator
from journeyx.planner.graph.config import PlannerGraphConfig

__all__ = ["create_planner_graph", "ItineraryGenerator", "PlannerGraphConfig"]
