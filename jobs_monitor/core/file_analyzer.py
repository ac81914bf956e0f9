"""Age and content evaluation of scan candidates."""

import logging
from re import Pattern
from typing import NamedTuple, Optional

from .filesystem import LocalFilesystem
from .models import CheckConfiguration, DirectoryEntry, EvaluatedTarget, Status
from .thresholds import age_in_units

PERFORMANCE_DELIMITER = '|'


class LastLine(NamedTuple):
    matched: bool
    performance: Optional[str]


def parse_last_line(line: Optional[str], pattern: Pattern) -> LastLine:
    """Check the last line of a job output against a pattern.

    The pattern is searched anywhere in the line. Text after the first
    ``|`` is the performance data segment, with all whitespace removed.

    Args:
        line: Last line of the file, or None for an empty file.
        pattern: Compiled content pattern.

    Returns:
        LastLine with the match result and the optional performance segment.
    """
    if line is None:
        return LastLine(matched=False, performance=None)

    matched = pattern.search(line) is not None

    performance = None
    if PERFORMANCE_DELIMITER in line:
        segment = ''.join(line.split(PERFORMANCE_DELIMITER, 1)[1].split())
        performance = segment or None

    return LastLine(matched=matched, performance=performance)


class FileAnalyzer:
    """Classifies candidates by age and optionally validates content."""

    def __init__(self, config: CheckConfiguration, filesystem: Optional[LocalFilesystem] = None):
        """Initialize file analyzer.

        Args:
            config: Validated check configuration.
            filesystem: Filesystem access layer, a LocalFilesystem by default.
        """
        self.config = config
        self.filesystem = filesystem or LocalFilesystem()
        self.logger = logging.getLogger(__name__)

    def classify_age(self, age_seconds: int) -> Status:
        """Classify an age against the exclusive warning and critical thresholds."""
        if age_seconds > self.config.critical_seconds:
            return Status.CRITICAL
        if age_seconds > self.config.warning_seconds:
            return Status.WARNING
        return Status.OK

    def evaluate(self, candidate: DirectoryEntry, directory: str, now: int) -> EvaluatedTarget:
        """Evaluate a single candidate.

        Args:
            candidate: Entry produced by the directory scanner.
            directory: Configured directory the candidate belongs to.
            now: Current time in epoch seconds.

        Returns:
            EvaluatedTarget with classification, messages and performance tag.
        """
        age_seconds = now - candidate.mtime
        classification = self.classify_age(age_seconds)
        messages = []

        if classification != Status.OK or self.config.verbose:
            units = age_in_units(age_seconds, self.config.multiplier)
            messages.append(f"{candidate.path}: {units}{self.config.unit_abbreviation}")

        content_invalid = False
        performance_tag = None
        if self.config.content_pattern is not None and candidate.is_file:
            try:
                line = self.filesystem.read_last_line(candidate.path)
            except OSError as e:
                self.logger.warning(f"Cannot read {candidate.path}: {e}")
                content_invalid = True
                messages.append(f"{candidate.path}: Unable to read content")
            else:
                last_line = parse_last_line(line, self.config.content_pattern)
                if not last_line.matched:
                    content_invalid = True
                    messages.append(f"{candidate.path}: Bad Content")
                if last_line.performance:
                    performance_tag = f"{directory}_{last_line.performance}"

        self.logger.debug(f"{candidate.path}: age {age_seconds}s, {classification.name}"
                          f"{', bad content' if content_invalid else ''}")

        return EvaluatedTarget(
            path=candidate.path,
            age_seconds=age_seconds,
            classification=classification,
            content_invalid=content_invalid,
            performance_tag=performance_tag,
            messages=tuple(messages)
        )
