"""
Graph construction for the planner.

Builds and compiles the LangGraph workflow for itinerary generation and
wraps it in a callable the planning session can await.
"""

import logging
from typing import Optional

from langgraph.graph import StateGraph, END

from journeyx.planner.graph.config import PlannerGraphConfig, DEFAULT_CONFIG
from journeyx.planner.nodes.planner import LLMCall, make_generate_node, parse_node
from journeyx.planner.schemas import PlannerState
from journeyx.shared.contracts import ItineraryResponse, TripRequest
from journeyx.shared.llm import call_llm


logger = logging.getLogger(__name__)


def create_planner_graph(llm_call: LLMCall):
    """
    Create and compile the LangGraph workflow for planning.

    The graph structure is:
        Entry -> generate -> parse -> END

    Args:
        llm_call: Async callable that sends a prompt and returns raw text

    Returns:
        Compiled LangGraph application ready for execution.
    """
    graph = StateGraph(PlannerState)

    graph.add_node("generate", make_generate_node(llm_call))
    graph.add_node("parse", parse_node)

    graph.set_entry_point("generate")
    graph.add_edge("generate", "parse")
    graph.add_edge("parse", END)

    return graph.compile()


class ItineraryGenerator:
    """
    Runs the planner graph for one request.

    Instances are the generation dependency handed to PlanningSession:
    ``await generator(request, adjustments)`` returns a validated
    ItineraryResponse or raises the parser, validator or transport error.
    """

    def __init__(
        self,
        llm_call: Optional[LLMCall] = None,
        config: Optional[PlannerGraphConfig] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        if llm_call is None:
            model = self.config.model

            async def llm_call(prompt: str):
                return await call_llm(prompt, model=model)

        self._graph = create_planner_graph(llm_call)

    async def __call__(
        self,
        request: TripRequest,
        adjustments: Optional[str] = None,
        session_id: Optional[str] = None,
    ) -> ItineraryResponse:
        initial_state: PlannerState = {
            "request": request,
            "adjustments": adjustments,
            "session_id": session_id,
            "prompt": None,
            "raw_response": None,
            "grounding_chunks": [],
            "plan": None,
        }
        final_state = await self._graph.ainvoke(
            initial_state,
            {"recursion_limit": self.config.recursion_limit},
        )
        return ItineraryResponse(
            plan=final_state["plan"],
            grounding_chunks=final_state.get("grounding_chunks") or [],
        )
