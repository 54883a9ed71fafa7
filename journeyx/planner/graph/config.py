"""
Graph configuration for the planner.

Centralizes configuration options for the planner LangGraph workflow.
"""

from dataclasses import dataclass, field

from journeyx.shared import config as settings


@dataclass
class PlannerGraphConfig:
    """
    Configuration for the planner graph.

    Attributes:
        recursion_limit: Maximum number of graph steps
        model: LLM model used for generation
    """

    recursion_limit: int = 10
    model: str = field(default_factory=lambda: settings.LLM_MODEL)


# Default configuration instance
DEFAULT_CONFIG = PlannerGraphConfig()
