"""
Jobs Status Monitor - Nagios-style checks for batch jobs and Kafka.

This package provides monitoring plugins that inspect job output directories
and Kafka partition replication, printing a single status line and exiting
with the Nagios plugin exit code.
"""

__version__ = "1.0.0"

from .core.monitor import JobStatusMonitor
from .core.scanner import DirectoryScanner
from .core.kafka_isr import KafkaIsrChecker

__all__ = ["JobStatusMonitor", "DirectoryScanner", "KafkaIsrChecker"]
