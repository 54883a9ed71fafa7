"""
JourneyX planning package.

This package contains:
- shared/: Common infrastructure (config, errors, contracts, LLM client, logging)
- validation/: Schema validation of generated trip plans
- planner/: Prompt building, response parsing and the generation graph
- transform/: Map markers and export-book views of a plan
- session/: Planning session state machine, history store and HTTP API
- sync/: Travel book sync gateway and document sinks
"""

from journeyx.planner import ItineraryGenerator, parse_trip_plan_response
from journeyx.session import PlanningSession

__all__ = ["ItineraryGenerator", "PlanningSession", "parse_trip_plan_response"]
