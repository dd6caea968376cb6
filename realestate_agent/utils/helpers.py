"""Helper utilities for parsing and valuation."""

import math

TRUTHY_FLAGS = ("yes", "y", "true")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties going towards positive infinity."""
    return int(math.floor(value + 0.5))


def normalize_city(city: str | None) -> str:
    """Trim and lowercase a city name. None becomes an empty string."""
    if not city:
        return ""
    return city.strip().lower()


def parse_flag(text: str | None) -> bool:
    """Parse a yes/no style flag. Anything unrecognised is False."""
    if not text:
        return False
    return text.strip().lower() in TRUTHY_FLAGS
