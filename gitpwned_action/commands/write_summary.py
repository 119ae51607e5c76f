"""Write job summary command."""

from __future__ import annotations

import sys
from pathlib import Path

from gitpwned_action.domain.finding import ScanExitCode
from gitpwned_action.infrastructure import ReportError, load_sarif_report
from gitpwned_action.services import SummaryWriter, render_summary


def cmd_write_summary(
    exit_code: int,
    repo_url: str,
    report_path: str,
    summary_path: str | None,
) -> int:
    """Render the summary for a finished scan.

    Without a summary file the rendered content is printed instead.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    findings = []
    if exit_code == ScanExitCode.FINDINGS_DETECTED:
        try:
            findings = load_sarif_report(report_path)
        except ReportError as e:
            print(str(e), file=sys.stderr)
            return 1

    if summary_path is None:
        print(render_summary(exit_code, findings, repo_url.rstrip("/")))
        return 0

    writer = SummaryWriter(summary_path=Path(summary_path))
    return 0 if writer.write(exit_code, findings, repo_url) else 1
