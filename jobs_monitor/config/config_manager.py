"""Configuration management for the job status check."""

import re
from typing import Any, Dict, Optional

from .config_validator import ConfigValidator
from ..core.models import CheckConfiguration


class ConfigManager:
    """Builds a validated check configuration from command line options."""

    DEFAULTS = {
        'warning': '26',
        'critical': '52',
        'time_unit': 'hours',
        'verbose': False,
        'pattern': None,
    }

    def __init__(self):
        self.options: Dict[str, Any] = {}
        self.validator = ConfigValidator()

    def build(self, directories=(), warning: Optional[str] = None, critical: Optional[str] = None,
              time_unit: Optional[str] = None, verbose: bool = False,
              pattern: Optional[str] = None, excludes=()) -> CheckConfiguration:
        """Validate options and build the check configuration.

        Args:
            directories: Directories to check, in order.
            warning: Warning threshold as given on the command line.
            critical: Critical threshold as given on the command line.
            time_unit: Threshold unit name.
            verbose: Report every evaluated target.
            pattern: Regular expression the last line of each file must contain.
            excludes: Basenames to skip.

        Returns:
            Frozen CheckConfiguration.

        Raises:
            UsageError: If the options are invalid.
        """
        self.options = {
            'directories': list(directories),
            'warning': warning,
            'critical': critical,
            'time_unit': time_unit,
            'verbose': verbose,
            'pattern': pattern,
            'excludes': list(excludes),
        }
        self._set_defaults()

        self.validator.validate(self.options)

        pattern = self.options['pattern']
        return CheckConfiguration(
            directories=tuple(self.options['directories']),
            warning=int(self.options['warning']),
            critical=int(self.options['critical']),
            time_unit=self.options['time_unit'],
            verbose=bool(self.options['verbose']),
            content_pattern=re.compile(pattern) if pattern is not None else None,
            excluded_names=frozenset(self.options['excludes'])
        )

    def _set_defaults(self):
        """Fill in defaults for options that were not given."""
        for key, value in self.DEFAULTS.items():
            if self.options.get(key) is None:
                self.options[key] = value
