"""Prompt templates and builders for itinerary generation."""

from journeyx.planner.prompts.builders import build_planner_prompt
from journeyx.planner.prompts.templates import (
    OUTPUT_SHAPE,
    PLANNER_PROMPT_TEMPLATE,
    PlannerPromptConfig,
)

__all__ = [
    "build_planner_prompt",
    "OUTPUT_SHAPE",
    "PLANNER_PROMPT_TEMPLATE",
    "PlannerPromptConfig",
]
