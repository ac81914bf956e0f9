"""Configuration validation for job status checks."""

import re
from typing import Any, Dict

from ..core.thresholds import TIME_UNITS

NON_NEGATIVE_INTEGER = re.compile(r'[0-9]+')


class UsageError(ValueError):
    """Raised when the check is invoked with an invalid configuration."""


class ConfigValidator:
    """Validates raw check options before any filesystem access."""

    def validate(self, options: Dict[str, Any]) -> None:
        """Validate raw option values.

        Checks run in a fixed order and the first violation is reported.

        Args:
            options: Option values with defaults already applied.

        Raises:
            UsageError: If the configuration is invalid.
        """
        if not options.get('directories'):
            raise UsageError("No directory provided.")

        if not self._is_non_negative_integer(options.get('warning')):
            raise UsageError("Warning time must be a non-negative integer.")

        if not self._is_non_negative_integer(options.get('critical')):
            raise UsageError("Critical time must be a non-negative integer.")

        if options.get('time_unit') not in TIME_UNITS:
            raise UsageError(f"Time unit must be one of {', '.join(TIME_UNITS)}.")

        if int(options['warning']) >= int(options['critical']):
            raise UsageError("Critical time must be greater than warning time.")

        pattern = options.get('pattern')
        if pattern is not None:
            try:
                re.compile(pattern)
            except re.error as e:
                raise UsageError(f"Invalid pattern: {e}")

    def _is_non_negative_integer(self, value: Any) -> bool:
        return isinstance(value, str) and NON_NEGATIVE_INTEGER.fullmatch(value) is not None
