"""Parsing and validation of LLM itinerary output"""
import json
import logging
import re
from typing import Any, List
from pydantic import ValidationError

from ..schemas.response import DayPlan

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


class ItineraryParseError(Exception):
    """Raised when LLM output is not a valid itinerary"""


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` or ```json fence, if present"""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text, count=1)
        text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def _check_structure(itinerary: List[Any]) -> None:
    """Check required day and activity fields, naming the offending day"""
    for day in itinerary:
        day_number = day.get("day") if isinstance(day, dict) else None

        if (
            not isinstance(day, dict)
            or not day_number
            or not day.get("theme")
            or not isinstance(day.get("activities"), list)
        ):
            raise ValueError(f"Invalid day structure for day {day_number or 'unknown'}")

        for activity in day["activities"]:
            if (
                not isinstance(activity, dict)
                or not activity.get("time")
                or not activity.get("description")
                or not activity.get("location")
            ):
                raise ValueError(f"Invalid activity structure in day {day_number}")


def _to_day_plans(itinerary: List[dict]) -> List[DayPlan]:
    """Validate each day with Pydantic and reject repeated day numbers"""
    plans = []
    seen = set()

    for day in itinerary:
        try:
            plan = DayPlan.model_validate(day)
        except ValidationError as e:
            raise ValueError(
                f"Invalid day structure for day {day['day']}: {e.error_count()} field error(s)"
            ) from e

        if plan.day in seen:
            raise ValueError(f"Duplicate day {plan.day} in itinerary")
        seen.add(plan.day)
        plans.append(plan)

    return plans


def parse_itinerary_response(raw_text: str) -> List[DayPlan]:
    """
    Turn raw LLM text into validated day plans

    Steps: strip whitespace and code fences, decode JSON, check the
    itinerary structure, then validate each day against the DayPlan schema.

    Args:
        raw_text: Text content returned by the completion API

    Returns:
        Day plans in the order the model returned them

    Raises:
        ItineraryParseError: If the text is not JSON or does not match the schema
    """
    try:
        parsed = json.loads(strip_code_fence(raw_text))

        if not isinstance(parsed, dict) or not isinstance(parsed.get("itinerary"), list):
            raise ValueError("Invalid itinerary structure: missing itinerary array")

        _check_structure(parsed["itinerary"])
        return _to_day_plans(parsed["itinerary"])

    except (ValueError, RecursionError) as e:
        # json.JSONDecodeError is a ValueError; deeply nested input raises RecursionError
        logger.error(f"JSON parsing error: {e}")
        logger.error(f"Raw LLM response: {raw_text[:1000]}")
        raise ItineraryParseError(f"Failed to parse itinerary: {e}") from e
