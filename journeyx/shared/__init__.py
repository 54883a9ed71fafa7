"""
Shared infrastructure for the planning pipeline.

Modules:
- config: Environment-driven settings
- errors: Exception taxonomy
- contracts: Trip plan, request and travel book models
- llm: OpenAI client for generation
- logging: Structured JSON logging
- schemas: Common base models
"""

from journeyx.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "setup_logging",
    "log_state_transition",
]
