"""Logging configuration and utilities."""

from journeyx.shared.logging.config import (
    setup_logging,
    log_state_transition,
    StructuredFormatter,
)

__all__ = [
    "setup_logging",
    "log_state_transition",
    "StructuredFormatter",
]
