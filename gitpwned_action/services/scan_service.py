"""Scanner invocation service.

Builds the gitpwned command line for a commit range, runs it, records the
exit status as a step output and optionally uploads the report artifact.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from gitpwned_action.domain.event import EventType, ScanRange
from gitpwned_action.infrastructure.github.artifact import ArtifactUploader
from gitpwned_action.infrastructure.github.output import log_warning, write_github_output
from gitpwned_action.infrastructure.scanner.runner import ScannerRunner

ARTIFACT_NAME = "gitpwned-results.sarif"


def build_log_opts(scan_range: ScanRange | None, event_type: EventType) -> str | None:
    """Build the --log-opts value selecting which commits are scanned.

    A single pushed commit is scanned on its own. Otherwise the range walks
    first-parent, non-merge history from just after base up to and including
    head. Without a range the scanner's default history is used.
    """
    if scan_range is None or not event_type.has_explicit_range:
        return None
    if event_type is EventType.PUSH and scan_range.is_single_commit:
        return "-1"
    return f"--no-merges --first-parent {scan_range.base_ref}^..{scan_range.head_ref}"


def build_scan_args(
    scan_range: ScanRange | None,
    event_type: EventType,
    report_path: Path,
) -> list[str]:
    """Build the full gitpwned argument list (without the binary)."""
    args = [
        "detect",
        "--redact",
        "-v",
        "--exit-code=2",
        "--report-format=sarif",
        f"--report-path={report_path}",
        "--log-level=debug",
    ]
    log_opts = build_log_opts(scan_range, event_type)
    if log_opts is not None:
        args.append(f"--log-opts={log_opts}")
    return args


@dataclass(frozen=True)
class ScanInvocation:
    """Exit status of a scanner run and where its report was written."""

    exit_code: int
    report_path: Path


@dataclass
class ScanService:
    """Runs the scanner against a commit range.

    Uses a ScannerRunner for the process and ArtifactUploader for the
    report (dependency injection).
    """

    runner: ScannerRunner
    uploader: ArtifactUploader | None
    report_path: Path
    enable_upload_artifact: bool = True
    output_path: Path | None = None

    def scan(self, scan_range: ScanRange | None, event_type: EventType) -> ScanInvocation:
        """Run gitpwned.

        Args:
            scan_range: Commits to scan, None for the scanner's default history
            event_type: Triggering event

        Returns:
            ScanInvocation with the raw exit status
        """
        args = build_scan_args(scan_range, event_type, self.report_path)
        exit_code = self.runner.run(args)
        write_github_output(self.output_path, "exit-code", str(exit_code))

        if self.enable_upload_artifact and self.uploader is not None:
            self._upload_report()

        return ScanInvocation(exit_code=exit_code, report_path=self.report_path)

    # ============================================================
    # Private Helpers
    # ============================================================

    def _upload_report(self) -> None:
        outcome = self.uploader.upload(ARTIFACT_NAME, [self.report_path])
        if outcome.ok:
            print(f"Uploaded {ARTIFACT_NAME} artifact")
        else:
            log_warning(f"Could not upload {ARTIFACT_NAME} artifact: {outcome.failure.message}")
