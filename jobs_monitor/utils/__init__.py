"""Utility modules for job status monitoring."""

from .formatters import format_isr_line, format_plugin_output, format_status_line, reportable_status

__all__ = ["format_isr_line", "format_plugin_output", "format_status_line", "reportable_status"]
