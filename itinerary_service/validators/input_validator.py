"""Input validation for itinerary creation requests"""
import math
from typing import Any, List
from ..config import settings


def validate_destination(destination: Any) -> List[str]:
    """
    Validate destination field

    Args:
        destination: Raw destination value from the request body

    Returns:
        List of violations (empty if valid)
    """
    errors = []

    if not destination or not isinstance(destination, str):
        errors.append("destination must be a non-empty string")

    if isinstance(destination, str) and destination and \
            len(destination.strip()) < settings.min_destination_length:
        errors.append(
            f"destination must be at least {settings.min_destination_length} characters long"
        )

    return errors


def validate_duration_days(duration_days: Any) -> List[str]:
    """
    Validate durationDays field

    Booleans are rejected even though Python treats them as integers.

    Args:
        duration_days: Raw durationDays value from the request body

    Returns:
        List of violations (empty if valid)
    """
    is_number = isinstance(duration_days, (int, float)) and not isinstance(duration_days, bool)

    # Large ints cannot be converted to float, so only floats are checked for inf/nan
    if not is_number or (isinstance(duration_days, float) and not math.isfinite(duration_days)):
        return ["durationDays must be a valid number"]

    if duration_days < settings.min_trip_days or duration_days > settings.max_trip_days:
        return [
            f"durationDays must be between {settings.min_trip_days} and {settings.max_trip_days}"
        ]

    if duration_days != int(duration_days):
        return ["durationDays must be a whole number"]

    return []


def validate_create_request(data: Any) -> List[str]:
    """
    Validate an itinerary creation request body

    Every rule is checked; all violations are returned together.

    Args:
        data: Decoded JSON body (anything that is not an object has no fields)

    Returns:
        List of human-readable violations (empty if valid)
    """
    if not isinstance(data, dict):
        data = {}

    return (
        validate_destination(data.get("destination"))
        + validate_duration_days(data.get("durationDays"))
    )
