"""Findings report loading."""

from .sarif import (
    MalformedReportError,
    ReportError,
    ReportNotFoundError,
    load_sarif_report,
    parse_sarif,
)

__all__ = [
    "MalformedReportError",
    "ReportError",
    "ReportNotFoundError",
    "load_sarif_report",
    "parse_sarif",
]
