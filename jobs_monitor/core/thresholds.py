"""Time unit resolution for age thresholds."""

from typing import Tuple

TIME_UNITS = {
    'seconds': (1, 's'),
    'minutes': (60, 'm'),
    'hours': (3600, 'h'),
    'days': (86400, 'd'),
}


def resolve_time_unit(time_unit: str) -> Tuple[int, str]:
    """Resolve a time unit name to its multiplier and abbreviation.

    Args:
        time_unit: One of seconds, minutes, hours or days.

    Returns:
        Tuple of (seconds per unit, unit abbreviation).

    Raises:
        ValueError: If the time unit is not recognized.
    """
    try:
        return TIME_UNITS[time_unit]
    except KeyError:
        raise ValueError(f"Unknown time unit: {time_unit}")


def age_in_units(age_seconds: int, multiplier: int) -> int:
    """Convert an age in seconds to whole units, truncating toward zero."""
    units = abs(age_seconds) // multiplier
    return -units if age_seconds < 0 else units
