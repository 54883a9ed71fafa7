"""Structural validation of generated trip plans."""

from journeyx.validation.schema import (
    VALIDATION_ERROR_PREFIX,
    collect_violations,
    dump_trip_plan,
    validate_trip_plan,
)

__all__ = [
    "VALIDATION_ERROR_PREFIX",
    "collect_violations",
    "dump_trip_plan",
    "validate_trip_plan",
]
