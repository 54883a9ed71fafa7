"""
Planner nodes for the LangGraph workflow.

generate_node renders the prompt and calls the model; parse_node turns
the raw text into a validated TripPlan. Parser and validator errors are
raised out of the graph unchanged so callers can tell them apart.
"""

import logging
from typing import Any, Awaitable, Callable, Dict

from journeyx.planner.prompts import build_planner_prompt
from journeyx.planner.response_parser import parse_trip_plan_response
from journeyx.planner.schemas import PlannerState
from journeyx.shared.llm import GenerationResult


logger = logging.getLogger(__name__)

LLMCall = Callable[[str], Awaitable[GenerationResult]]


def make_generate_node(llm_call: LLMCall):
    """Bind a generation backend into a graph node."""

    async def generate_node(state: PlannerState) -> Dict[str, Any]:
        session_id = state.get("session_id") or "unknown"
        is_adjustment = bool(state.get("adjustments"))
        _log = f"[session={session_id}] [graph=planner] [node=generate] "

        request = state["request"]
        prompt = build_planner_prompt(request, state.get("adjustments"))

        logger.info(
            f"{_log}Calling model | destination={request.destination}, "
            f"dates={request.start_date}..{request.end_date}, "
            f"adjustment={is_adjustment}, prompt_chars={len(prompt)}"
        )

        result = await llm_call(prompt)

        logger.info(
            f"{_log}Model returned | response_chars={len(result.text)}, "
            f"citations={len(result.grounding_chunks)}"
        )

        return {
            "prompt": prompt,
            "raw_response": result.text,
            "grounding_chunks": list(result.grounding_chunks),
        }

    return generate_node


def parse_node(state: PlannerState) -> Dict[str, Any]:
    """
    Parse and validate the raw model response.

    Args:
        state: Planner state with raw_response populated

    Returns:
        Dictionary with the validated plan
    """
    session_id = state.get("session_id") or "unknown"
    _log = f"[session={session_id}] [graph=planner] [node=parse] "

    plan = parse_trip_plan_response(state.get("raw_response") or "")

    total_activities = sum(len(d.activities) for d in plan.days)
    logger.info(
        f"{_log}Plan validated | title={plan.trip_title}, days={len(plan.days)}, "
        f"activities={total_activities}, vibe={plan.visual_vibe}"
    )

    return {"plan": plan}
