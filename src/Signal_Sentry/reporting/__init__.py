"""Reporting module: alert message formatting and terminal output.

Re-exports all public functions so consumers can import directly:
    from Signal_Sentry.reporting import build_alert_message, render_scan_summary
"""

from Signal_Sentry.reporting.formatters import (
    build_alert_message,
    format_alert_description,
    format_alert_title,
    format_indicator,
    format_score,
)
from Signal_Sentry.reporting.terminal import render_indicators, render_ledger, render_scan_summary

__all__ = [
    # Formatters
    "build_alert_message",
    "format_alert_description",
    "format_alert_title",
    "format_indicator",
    "format_score",
    # Terminal
    "render_indicators",
    "render_ledger",
    "render_scan_summary",
]
