"""
Schema validation for generated itineraries.

Turns an arbitrary parsed value into a TripPlan, or raises a single
SchemaValidationError listing every violation found across all days and
activities.
"""

import logging
from typing import Any, List, Tuple

from pydantic import ValidationError

from journeyx.shared.contracts import TripPlan
from journeyx.shared.errors import SchemaValidationError


logger = logging.getLogger(__name__)

VALIDATION_ERROR_PREFIX = "行程資料格式驗證失敗："


def _format_path(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "(root)"


def collect_violations(error: ValidationError) -> List[Tuple[str, str]]:
    """
    Flatten a pydantic ValidationError into (path, reason) pairs.

    Paths use the camelCase wire names with list indices, for example
    ``days.0.activities.2.type``.
    """
    return [(_format_path(issue["loc"]), issue["msg"]) for issue in error.errors()]


def validate_trip_plan(candidate: Any) -> TripPlan:
    """
    Validate a candidate value against the TripPlan schema.

    Args:
        candidate: Any value, typically the result of json.loads

    Returns:
        A fully validated TripPlan

    Raises:
        SchemaValidationError: With every violation aggregated into one message
    """
    try:
        # Wire keys only; snake_case attribute names are not accepted as input
        return TripPlan.model_validate(candidate, by_alias=True, by_name=False)
    except ValidationError as e:
        violations = collect_violations(e)
        message = "; ".join(f"{path} {reason}" for path, reason in violations)
        logger.debug("Trip plan rejected with %d violation(s)", len(violations))
        raise SchemaValidationError(
            f"{VALIDATION_ERROR_PREFIX}{message}", violations=violations
        ) from e


def dump_trip_plan(plan: TripPlan) -> dict:
    """
    Serialize a TripPlan back to its wire shape.

    Absent optional fields are omitted, so the output validates again
    to an equal plan.
    """
    return plan.to_wire()
