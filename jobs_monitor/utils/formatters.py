"""Formatting utilities for plugin output lines."""

from typing import Sequence

from ..core.kafka_isr import IsrResult
from ..core.models import AggregateResult, CheckConfiguration, Status

REPORTABLE_STATUSES = (Status.OK, Status.WARNING, Status.CRITICAL)


def reportable_status(status) -> Status:
    """Map anything other than OK, WARNING or CRITICAL to UNKNOWN.

    Args:
        status: Status reached by aggregation.

    Returns:
        The status to print and exit with.
    """
    if status in REPORTABLE_STATUSES:
        return Status(status)
    return Status.UNKNOWN


def format_plugin_output(status: Status, messages: Sequence[str], summary: str,
                         performance: Sequence[str] = ()) -> str:
    """Assemble a Nagios plugin line.

    Args:
        status: Status word to lead with.
        messages: Segments joined by spaces after the status word.
        summary: Parenthesised counters, without the parentheses.
        performance: Performance data items placed after ``|``.

    Returns:
        Single line of plugin output.
    """
    line = status.name
    if messages:
        line += f": {' '.join(messages)}"
    line += f" ({summary})"
    if performance:
        line += f" | {' '.join(performance)}"
    return line


def format_status_line(result: AggregateResult, config: CheckConfiguration) -> str:
    """Format the directory check result for the monitoring system."""
    abbreviation = config.unit_abbreviation
    summary = (f"{result.checked_count} checked, {result.skipped_count} skipped, "
               f"{config.warning}{abbreviation} warn, {config.critical}{abbreviation} crit")
    return format_plugin_output(
        reportable_status(result.overall_status),
        result.message_lines,
        summary,
        result.performance_data
    )


def format_isr_line(result: IsrResult, verbose: bool = False) -> str:
    """Format a Kafka ISR result for the monitoring system.

    Args:
        result: Outcome of the ISR check.
        verbose: List every partition, not only under-replicated ones.

    Returns:
        Single line of plugin output.
    """
    shown = result.partitions if verbose else result.under_replicated
    messages = [f"{p.topic}:{p.partition} isr {','.join(p.isr)}/{','.join(p.replicas)}"
                for p in shown]
    summary = f"{len(result.partitions)} partitions checked, {len(result.under_replicated)} under-replicated"
    performance = [f"under_replicated={len(result.under_replicated)}",
                   f"partitions={len(result.partitions)}"]
    return format_plugin_output(result.status, messages, summary, performance)
