"""Data models for job status monitoring."""

from dataclasses import dataclass, field
from enum import IntEnum
from re import Pattern
from typing import FrozenSet, Optional, Tuple

from .thresholds import resolve_time_unit


class Status(IntEnum):
    """Nagios plugin states. The value is the process exit code."""
    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


@dataclass(frozen=True)
class CheckConfiguration:
    """Validated configuration for a single check run."""
    directories: Tuple[str, ...]
    warning: int
    critical: int
    time_unit: str = 'hours'
    verbose: bool = False
    content_pattern: Optional[Pattern] = None
    excluded_names: FrozenSet[str] = frozenset()

    @property
    def multiplier(self) -> int:
        return resolve_time_unit(self.time_unit)[0]

    @property
    def unit_abbreviation(self) -> str:
        return resolve_time_unit(self.time_unit)[1]

    @property
    def warning_seconds(self) -> int:
        return self.warning * self.multiplier

    @property
    def critical_seconds(self) -> int:
        return self.critical * self.multiplier


@dataclass(frozen=True)
class DirectoryEntry:
    """A file or directory found while listing a target directory."""
    path: str
    name: str
    mtime: Optional[int]
    is_file: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class EvaluatedTarget:
    """Outcome of evaluating one file, or an empty directory itself."""
    path: str
    age_seconds: int
    classification: Status
    content_invalid: bool = False
    performance_tag: Optional[str] = None
    messages: Tuple[str, ...] = ()

    @property
    def status(self) -> Status:
        if self.content_invalid:
            return Status.CRITICAL
        return self.classification


@dataclass(frozen=True)
class DirectoryResult:
    """Everything found in one configured directory."""
    directory: str
    targets: Tuple[EvaluatedTarget, ...] = ()
    skipped_count: int = 0
    failures: Tuple[str, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class AggregateResult:
    """Folded result of a whole check run."""
    overall_status: Status
    checked_count: int
    skipped_count: int
    message_lines: Tuple[str, ...] = field(default_factory=tuple)
    performance_data: Tuple[str, ...] = field(default_factory=tuple)
