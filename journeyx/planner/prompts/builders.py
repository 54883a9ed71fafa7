"""
Prompt builders for the planner.

These functions construct the prompt sent to the generation service from
a trip request and optional adjustment feedback.
"""

from typing import Optional

from journeyx.planner.prompts.templates import PlannerPromptConfig
from journeyx.shared.contracts import TripRequest


def build_planner_prompt(
    request: TripRequest,
    adjustments: Optional[str] = None,
) -> str:
    """
    Build the full planning prompt.

    Args:
        request: The trip request for the current session
        adjustments: Feedback on a previous plan, appended as extra context

    Returns:
        Prompt string embedding every request field and the output contract
    """
    config = PlannerPromptConfig(
        destination=request.destination,
        start_date=request.start_date,
        end_date=request.end_date,
        members=request.party,
        must_visit=request.must_visit,
        accommodation=request.accommodation,
        preferences=request.preferences,
        adjustments=adjustments,
    )
    return config.render()
