"""Infrastructure components for gitpwned-action.

This layer handles external system interactions:
- GitHub REST API via requests
- GitHub Actions outputs, summaries and workflow commands
- Workflow artifact uploads
- The gitpwned binary (installation and subprocess)
- SARIF report loading

Organized into subdirectories:
- github/ - GitHub API and Actions runtime
- scanner/ - gitpwned binary
- report/ - findings report parsing
"""

# GitHub
from .github import ArtifactUploader, GitHubApiClient
from .github.output import (
    add_github_path,
    log_debug,
    log_error,
    log_warning,
    write_github_output,
    write_github_step_summary,
)

# Scanner
from .scanner import GitpwnedRunner, InstallError, ScannerInstaller, ScannerRunner

# Report
from .report import (
    MalformedReportError,
    ReportError,
    ReportNotFoundError,
    load_sarif_report,
)

__all__ = [
    # GitHub
    "ArtifactUploader",
    "GitHubApiClient",
    "add_github_path",
    "log_debug",
    "log_error",
    "log_warning",
    "write_github_output",
    "write_github_step_summary",
    # Scanner
    "GitpwnedRunner",
    "InstallError",
    "ScannerInstaller",
    "ScannerRunner",
    # Report
    "MalformedReportError",
    "ReportError",
    "ReportNotFoundError",
    "load_sarif_report",
]
