import logging
import math
from typing import Any

logger = logging.getLogger(__name__)


def is_finite_number(value: Any) -> bool:
    """True for real ints/floats that are not NaN/inf. Booleans are rejected."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float)) and math.isfinite(value)


def clamp_number(value: Any, fallback: float, minimum: float, maximum: float) -> float:
    """Coerce value into [minimum, maximum], using fallback when it is not a finite number.

    Args:
        value: Untrusted value (typically read from a stored JSON blob)
        fallback: Used when value is missing or non-finite
        minimum: Lower bound (inclusive)
        maximum: Upper bound (inclusive)

    Returns:
        A float within [minimum, maximum]
    """
    n = value if is_finite_number(value) else fallback
    return float(min(maximum, max(minimum, n)))


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (Python's round() is banker's rounding)."""
    return int(math.floor(value + 0.5))


def clamp_score(value: Any) -> int:
    """Round and clip a score into [0, 100]. Non-finite input becomes 0."""
    if not is_finite_number(value):
        logger.error(f"Non-finite score {value!r}, clipping to 0")
        return 0
    return max(0, min(100, round_half_up(value)))
