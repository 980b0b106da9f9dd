"""Reporting module for TactSpectre."""

from tactspectre.reporting.formatters import (
    Formatter,
    JSONFormatter,
    MarkdownFormatter,
    TextFormatter,
    format_outcomes,
    format_report,
)

__all__ = [
    "Formatter",
    "TextFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "format_report",
    "format_outcomes",
]
