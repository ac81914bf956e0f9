"""Core monitoring functionality."""

from .monitor import JobStatusMonitor, escalate
from .scanner import DirectoryScanner
from .file_analyzer import FileAnalyzer, parse_last_line
from .filesystem import LocalFilesystem, DirectoryAccessError
from .kafka_isr import KafkaIsrChecker
from .models import Status, CheckConfiguration, EvaluatedTarget, AggregateResult

__all__ = ["JobStatusMonitor", "escalate", "DirectoryScanner", "FileAnalyzer", "parse_last_line",
           "LocalFilesystem", "DirectoryAccessError", "KafkaIsrChecker", "Status",
           "CheckConfiguration", "EvaluatedTarget", "AggregateResult"]
