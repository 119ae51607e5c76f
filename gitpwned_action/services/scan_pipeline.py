"""Scan orchestration.

Sequences range selection, scanning and reporting for one event and maps
the scanner's exit status to the process exit code.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from gitpwned_action.domain.config import ActionConfig, ConfigurationError
from gitpwned_action.domain.event import EventPayload, EventType
from gitpwned_action.domain.finding import ScanExitCode, ScanResult
from gitpwned_action.domain.outcome import CollaboratorError
from gitpwned_action.infrastructure.github.output import log_error, log_warning
from gitpwned_action.infrastructure.report.sarif import ReportError, load_sarif_report
from gitpwned_action.infrastructure.scanner.installer import InstallError
from gitpwned_action.infrastructure.scanner.runner import shell_exit_status
from gitpwned_action.services.comment_publisher import CommentPublisher
from gitpwned_action.services.range_selector import NoCommitsToScan, RangeSelector
from gitpwned_action.services.scan_service import ScanInvocation, ScanService
from gitpwned_action.services.summary_writer import SummaryWriter

# Fatal conditions that end the run with exit code 1 from any state
FATAL_ERRORS = (ConfigurationError, CollaboratorError, InstallError)


class PipelineState(Enum):
    """Where a pipeline run currently is."""

    IDLE = "idle"
    RANGE_SELECTED = "range-selected"
    SCANNED = "scanned"
    REPORTED = "reported"
    DONE = "done"
    FATAL = "fatal"


def final_exit_code(scan_exit_code: int) -> int:
    """Map the scanner exit status to the process exit code.

    Findings fail the job so merges are blocked; unexpected statuses are
    passed through so CI shows the real failure.
    """
    scan_exit_code = shell_exit_status(scan_exit_code)
    if scan_exit_code == ScanExitCode.CLEAN:
        print("✅ No leaks detected")
        return 0
    if scan_exit_code == ScanExitCode.FINDINGS_DETECTED:
        log_warning("🛑 Leaks detected, see job summary for details")
        return 1
    log_error(f"ERROR: Unexpected exit code [{scan_exit_code}]")
    return scan_exit_code


@dataclass
class ScanPipeline:
    """Runs one scan for one event.

    The scan service is built lazily through scan_service_factory so the
    scanner is only installed once there is something to scan.
    """

    config: ActionConfig
    range_selector: RangeSelector
    scan_service_factory: Callable[[], ScanService]
    comment_publisher: CommentPublisher | None = None
    summary_writer: SummaryWriter | None = None
    state: PipelineState = PipelineState.IDLE

    # ============================================================
    # Public API
    # ============================================================

    def run(self, event: EventPayload) -> int:
        """Scan and report for an event.

        Args:
            event: Parsed, supported event payload

        Returns:
            Process exit code
        """
        self.state = PipelineState.IDLE
        print(f"event type: {event.event_type.value}")
        try:
            return self._run(event)
        except FATAL_ERRORS as e:
            self.state = PipelineState.FATAL
            log_error(f"🛑 {e}")
            return 1

    # ============================================================
    # Private Helpers
    # ============================================================

    def _run(self, event: EventPayload) -> int:
        try:
            scan_range = self.range_selector.select(event)
        except NoCommitsToScan as e:
            print(str(e))
            self.state = PipelineState.DONE
            return 0
        self.state = PipelineState.RANGE_SELECTED

        invocation = self.scan_service_factory().scan(scan_range, event.event_type)
        self.state = PipelineState.SCANNED

        self._report(invocation, event)
        self.state = PipelineState.REPORTED

        exit_code = final_exit_code(invocation.exit_code)
        self.state = PipelineState.DONE
        return exit_code

    def _report(self, invocation: ScanInvocation, event: EventPayload) -> ScanResult | None:
        """Publish comments and write the summary, each independently."""
        wants_comments = (
            event.event_type is EventType.PULL_REQUEST
            and self.comment_publisher is not None
            and event.pull_request_number is not None
        )
        if event.event_type is EventType.PULL_REQUEST and not self.config.enable_comments:
            print("skipping comments")
            wants_comments = False

        result = ScanResult(exit_code=invocation.exit_code)
        if invocation.exit_code == ScanExitCode.FINDINGS_DETECTED:
            try:
                findings = load_sarif_report(invocation.report_path)
            except ReportError as e:
                log_error(
                    f"Could not read findings report: {e}. "
                    "Findings are still available in the uploaded report artifact."
                )
                return None
            result = ScanResult(exit_code=invocation.exit_code, findings=tuple(findings))

            if wants_comments:
                self._publish_comments(result, event.pull_request_number)

        if self.config.enable_summary and self.summary_writer is not None:
            self._write_summary(result, event.repository.html_url)

        return result

    def _publish_comments(self, result: ScanResult, pr_number: int) -> None:
        try:
            self.comment_publisher.publish(result.findings, pr_number)
        except Exception as e:
            log_warning(f"Publishing review comments failed: {e}")

    def _write_summary(self, result: ScanResult, repo_url: str) -> None:
        try:
            self.summary_writer.write(result.exit_code, result.findings, repo_url)
        except Exception as e:
            log_warning(f"Writing job summary failed: {e}")
