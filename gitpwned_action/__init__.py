"""gitpwned GitHub Actions CLI tools.

Runs the gitpwned secret scanner for push, pull_request, workflow_dispatch
and schedule events, then reports findings back to the developer.

Usage:
    python -m gitpwned_action <command> [options]
    gitpwned-action <command> [options]

Structure:
    gitpwned_action/
    ├── __main__.py          # Entry point dispatcher
    ├── domain/              # Domain models (parse-once pattern)
    │   ├── config.py        # ActionConfig built once from the environment
    │   ├── event.py         # EventType, EventPayload, ScanRange
    │   ├── finding.py       # Finding, Fingerprint, ScanResult
    │   ├── github.py        # ReviewComment, ExistingReviewComment
    │   └── outcome.py       # Outcome / Failure result types
    ├── services/            # Business logic services
    │   ├── range_selector.py
    │   ├── scan_service.py
    │   ├── comment_publisher.py
    │   ├── summary_writer.py
    │   └── scan_pipeline.py
    ├── infrastructure/      # External system interactions
    │   ├── github/          # REST API, Actions outputs, artifacts
    │   ├── scanner/         # gitpwned binary install + subprocess runner
    │   └── report/          # SARIF report loading
    └── commands/            # Thin command orchestrators
        ├── scan.py
        ├── post_comments.py
        └── write_summary.py
"""

__version__ = "1.0.0"
