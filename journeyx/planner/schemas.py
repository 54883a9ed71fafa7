"""
Schemas for the planner graph.

Defines the state that flows through the generate -> parse workflow.
"""

from typing import List, Optional, TypedDict

from journeyx.shared.contracts import GroundingChunk, TripPlan, TripRequest


class PlannerState(TypedDict):
    """
    State schema for the planner graph.

    Inputs are the request and optional adjustment feedback; each node
    fills in one more slot on the way to a validated plan.
    """

    # Inputs
    request: TripRequest
    adjustments: Optional[str]
    session_id: Optional[str]

    # Populated by generate_node
    prompt: Optional[str]
    raw_response: Optional[str]
    grounding_chunks: List[GroundingChunk]

    # Populated by parse_node
    plan: Optional[TripPlan]
