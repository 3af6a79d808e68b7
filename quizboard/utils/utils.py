import math

UNKNOWN = "Unknown"
UNKNOWN_SUBJECT = "Unknown Subject"
UNKNOWN_TEACHER = "Unknown Teacher"
UNKNOWN_QUIZ = "Unknown Quiz"
NOT_ASSIGNED = "Not Assigned"
SYSTEM_TEACHER = "System Teacher"
GENERAL_FEEDBACK = "General Feedback"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up, so 12.5 -> 13 and 74.5 -> 75."""
    return int(math.floor(value + 0.5))


def as_number(value) -> float:
    """Coerce a possibly missing or malformed numeric field to a float, zero on failure."""
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number
