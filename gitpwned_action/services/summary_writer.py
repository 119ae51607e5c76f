"""Job summary rendering.

Writes one heading (and, when secrets were found, a findings table) to
GITHUB_STEP_SUMMARY. The summary is only ever appended to.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from pathlib import Path
from typing import Sequence

from gitpwned_action.domain.finding import Finding, ScanExitCode
from gitpwned_action.infrastructure.github.output import write_github_step_summary

TABLE_COLUMNS = [
    "Rule ID",
    "Commit",
    "Secret URL",
    "Start Line",
    "Author",
    "Date",
    "Email",
    "File",
]


def _link(url: str, text: str) -> str:
    return f'<a href="{escape(url)}">{escape(text)}</a>'


def _row(cells: Sequence[str], tag: str = "td") -> str:
    return "<tr>" + "".join(f"<{tag}>{cell}</{tag}>" for cell in cells) + "</tr>"


def render_findings_table(findings: Sequence[Finding], repo_url: str) -> str:
    """Render findings as an HTML table, one row per finding in report order."""
    rows = [_row([escape(c) for c in TABLE_COLUMNS], tag="th")]
    for finding in findings:
        commit_url = f"{repo_url}/commit/{finding.commit_sha}"
        file_url = f"{repo_url}/blob/{finding.commit_sha}/{finding.file_path}"
        secret_url = f"{file_url}#L{finding.start_line}"
        rows.append(
            _row(
                [
                    escape(finding.rule_id),
                    _link(commit_url, finding.short_sha),
                    _link(secret_url, "View Secret"),
                    str(finding.start_line),
                    escape(finding.author),
                    escape(finding.date),
                    escape(finding.email),
                    _link(file_url, finding.file_path),
                ]
            )
        )
    return "<table>" + "".join(rows) + "</table>\n"


def render_summary(exit_code: int, findings: Sequence[Finding], repo_url: str) -> str:
    """Render the job summary for a scanner exit status.

    Args:
        exit_code: Raw scanner exit status
        findings: Parsed findings (only used for FINDINGS_DETECTED)
        repo_url: Repository HTML URL for links

    Returns:
        Summary content ready to append
    """
    if exit_code == ScanExitCode.FINDINGS_DETECTED:
        return "<h1>🛑 Gitpwned detected secrets 🛑</h1>\n" + render_findings_table(
            findings, repo_url
        )
    if exit_code == ScanExitCode.CLEAN:
        return "<h1>No leaks detected ✅</h1>\n"
    if exit_code == ScanExitCode.SCAN_ERROR:
        return f"<h1>❌ Gitpwned exited with error. Exit code [{exit_code}]</h1>\n"
    return f"<h1>❌ Gitpwned exited with unexpected exit code [{exit_code}]</h1>\n"


@dataclass
class SummaryWriter:
    """Appends the scan summary to the job summary file."""

    summary_path: Path | None

    def write(self, exit_code: int, findings: Sequence[Finding], repo_url: str) -> bool:
        """Append the summary for a scan.

        Returns:
            True if the summary was written
        """
        return write_github_step_summary(
            self.summary_path, render_summary(exit_code, findings, repo_url.rstrip("/"))
        )
