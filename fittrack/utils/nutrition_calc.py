import math

NUTRIENT_FIELDS = ("calories", "protein", "carbs", "fat")


def round_half_up(value: float) -> int:
    """
    Rounds .5 away from zero for positives and toward zero for negatives,
    matching the figures the dashboard has always shown.
    Python's round() uses banker's rounding, which would turn 2.5 into 2.
    Examples:
        2.5 -> 3
        -2.5 -> -2
        1765.695 -> 1766
    """
    return int(math.floor(value + 0.5))


def read_nutrient(item, field: str) -> float:
    """
    Reads a numeric field from a dict, ORM row or pydantic model.
    Missing or None values count as 0.
    """
    if item is None:
        return 0.0
    if isinstance(item, dict):
        value = item.get(field)
    else:
        value = getattr(item, field, None)

    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is 0 or missing."""
    if not denominator:
        return 0.0
    return numerator / denominator
