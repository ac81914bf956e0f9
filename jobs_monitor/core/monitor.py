"""Main job status monitoring class."""

import logging
from functools import reduce
from typing import Iterable, List, Optional

from .file_analyzer import FileAnalyzer
from .filesystem import LocalFilesystem
from .models import AggregateResult, CheckConfiguration, DirectoryResult, Status
from .scanner import DirectoryScanner


def escalate(current: Status, incoming: Status) -> Status:
    """Combine two statuses. OK -> WARNING -> CRITICAL, never backwards."""
    if current == Status.CRITICAL:
        return current
    if current == Status.WARNING:
        return Status.CRITICAL if incoming == Status.CRITICAL else current
    if current == Status.OK:
        return incoming
    return current


def fold_statuses(statuses: Iterable[Status]) -> Status:
    """Reduce any number of statuses to one, starting from OK."""
    return reduce(escalate, statuses, Status.OK)


def aggregate(results: Iterable[DirectoryResult]) -> AggregateResult:
    """Fold per-directory results into the overall check result.

    Args:
        results: Directory results in configured order.

    Returns:
        AggregateResult with overall status, counters, messages and
        performance data.
    """
    statuses = []
    messages = []
    performance = []
    checked = 0
    skipped = 0

    for result in results:
        if result.error is not None:
            statuses.append(Status.CRITICAL)
            messages.append(result.error)
            continue

        for target in result.targets:
            checked += 1
            statuses.append(target.status)
            messages.extend(target.messages)
            if target.performance_tag:
                performance.append(target.performance_tag)

        skipped += result.skipped_count
        for failure in result.failures:
            statuses.append(Status.CRITICAL)
            messages.append(failure)

    return AggregateResult(
        overall_status=fold_statuses(statuses),
        checked_count=checked,
        skipped_count=skipped,
        message_lines=tuple(messages),
        performance_data=tuple(performance)
    )


class JobStatusMonitor:
    """Main job status check coordinator."""

    def __init__(self, config: CheckConfiguration, filesystem: Optional[LocalFilesystem] = None):
        """Initialize job status monitor.

        Args:
            config: Validated check configuration.
            filesystem: Filesystem access layer, a LocalFilesystem by default.
        """
        self.config = config
        self.filesystem = filesystem or LocalFilesystem()
        self.scanner = DirectoryScanner(self.filesystem)
        self.analyzer = FileAnalyzer(config, self.filesystem)
        self.logger = logging.getLogger(__name__)

    def check_directory(self, directory: str, now: int) -> DirectoryResult:
        """Scan and evaluate a single directory."""
        scan = self.scanner.scan(directory, self.config.excluded_names)
        if scan.error is not None:
            return DirectoryResult(directory=directory, error=scan.error)

        targets = tuple(self.analyzer.evaluate(candidate, directory, now)
                        for candidate in scan.candidates)

        return DirectoryResult(
            directory=directory,
            targets=targets,
            skipped_count=scan.skipped_count,
            failures=scan.failures
        )

    def check_all_directories(self, now: Optional[int] = None) -> List[DirectoryResult]:
        """Check every configured directory in order.

        Args:
            now: Evaluation time in epoch seconds, the current time by default.

        Returns:
            List of DirectoryResult, one per configured directory.
        """
        if now is None:
            now = self.filesystem.now()

        self.logger.info(f"Checking {len(self.config.directories)} directories")
        return [self.check_directory(directory, now) for directory in self.config.directories]

    def run(self, now: Optional[int] = None) -> AggregateResult:
        """Run the full check and return the folded result."""
        result = aggregate(self.check_all_directories(now))
        self.logger.info(f"Check finished: {result.overall_status.name}, "
                         f"{result.checked_count} checked, {result.skipped_count} skipped")
        return result
