"""Load the SARIF report written by gitpwned.

Only the first run is read. Results keep their report order, which is the
order comments are posted and summary rows are rendered in.
"""

from __future__ import annotations

import json
from pathlib import Path

from gitpwned_action.domain.finding import Finding


class ReportError(Exception):
    """Raised when the findings report cannot be used."""

    pass


class ReportNotFoundError(ReportError):
    """Raised when the report file does not exist."""

    pass


class MalformedReportError(ReportError):
    """Raised when the report is not valid JSON or lacks required fields."""

    pass


def _require(data: object, path: list[str | int], index: int) -> object:
    """Walk a key/index path, raising MalformedReportError on the first gap."""
    current = data
    for step in path:
        try:
            current = current[step]  # type: ignore[index]
        except (KeyError, IndexError, TypeError):
            dotted = ".".join(str(p) for p in path)
            raise MalformedReportError(f"result [{index}] is missing {dotted}")
    if current is None or current == "":
        dotted = ".".join(str(p) for p in path)
        raise MalformedReportError(f"result [{index}] has empty {dotted}")
    return current


def finding_from_result(result: dict, index: int = 0) -> Finding:
    """Parse one SARIF result into a Finding.

    Args:
        result: One entry of runs[0].results
        index: Position in the report, used in error messages

    Raises:
        MalformedReportError: If a required field is missing
    """
    location = ["locations", 0, "physicalLocation"]
    start_line = _require(result, [*location, "region", "startLine"], index)
    if not isinstance(start_line, int) or isinstance(start_line, bool) or start_line < 1:
        raise MalformedReportError(f"result [{index}] has invalid startLine [{start_line}]")

    return Finding(
        rule_id=str(_require(result, ["ruleId"], index)),
        commit_sha=str(_require(result, ["partialFingerprints", "commitSha"], index)),
        file_path=str(_require(result, [*location, "artifactLocation", "uri"], index)),
        start_line=start_line,
        author=str(_require(result, ["partialFingerprints", "author"], index)),
        date=str(_require(result, ["partialFingerprints", "date"], index)),
        email=str(_require(result, ["partialFingerprints", "email"], index)),
    )


def parse_sarif(data: dict) -> list[Finding]:
    """Parse an already loaded SARIF document.

    Raises:
        MalformedReportError: If the document shape is wrong
    """
    try:
        results = data["runs"][0]["results"]
    except (KeyError, IndexError, TypeError):
        raise MalformedReportError("report has no runs[0].results")
    if results is None:
        return []
    if not isinstance(results, list):
        raise MalformedReportError("runs[0].results is not a list")
    return [finding_from_result(result, i) for i, result in enumerate(results)]


def load_sarif_report(path: str | Path) -> list[Finding]:
    """Load and parse a gitpwned SARIF report.

    Args:
        path: Path to the report file

    Returns:
        Findings in report order

    Raises:
        ReportNotFoundError: If the file doesn't exist
        MalformedReportError: If the file isn't a usable report
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ReportNotFoundError(f"Report file not found: {path}")
    except json.JSONDecodeError as e:
        raise MalformedReportError(f"Report {path} is not valid JSON: {e}")
    return parse_sarif(data)
