"""
Response parser for the planner.

Handles extraction of the JSON payload from raw model text, including
markdown code fences and stray backticks, then hands the parsed value to
the schema validator.

Content is never corrected here: coordinates, day order and missing
fields are the model's responsibility. Only the shape is checked.
"""

import json
import logging
import re
from typing import Any

from journeyx.shared.contracts import TripPlan
from journeyx.shared.errors import MalformedResponseError
from journeyx.validation import validate_trip_plan


logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r"```(?:json)?", re.IGNORECASE)


def strip_code_fences(raw_response: str) -> str:
    """
    Remove markdown delimiters the model commonly wraps JSON in.

    Handles:
    - ```json ... ``` and bare ``` ... ``` fences, anywhere in the text
    - Leading/trailing whitespace
    - Stray single backticks left at either end

    Args:
        raw_response: Raw model response string

    Returns:
        Cleaned text ready for JSON parsing
    """
    content = CODE_FENCE_PATTERN.sub("", raw_response).strip()
    return content.strip("`").strip()


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON, even though json.loads accepts them
    raise ValueError(f"non-finite number {name} is not valid JSON")


def parse_json_payload(raw_response: str) -> Any:
    """
    Parse the cleaned model text into a generic value.

    Raises:
        MalformedResponseError: If the text is empty or not valid JSON
    """
    content = strip_code_fences(raw_response or "")
    if not content:
        raise MalformedResponseError("模型回應為空，無法解析行程資料。", raw_text=raw_response or "")

    try:
        return json.loads(content, parse_constant=_reject_constant)
    except ValueError as e:
        logger.warning("Model response is not valid JSON: %s", e)
        raise MalformedResponseError(
            f"模型回應不是有效的 JSON：{e}", raw_text=raw_response
        ) from e


def parse_trip_plan_response(raw_response: str) -> TripPlan:
    """
    Parse raw model text into a validated TripPlan.

    Args:
        raw_response: Raw model response string

    Returns:
        Validated TripPlan

    Raises:
        MalformedResponseError: The text is not JSON at all
        SchemaValidationError: The JSON does not match the TripPlan shape
    """
    payload = parse_json_payload(raw_response)
    return validate_trip_plan(payload)
