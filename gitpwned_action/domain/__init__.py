"""Domain models for gitpwned-action."""

from gitpwned_action.domain.config import ActionConfig, ConfigurationError
from gitpwned_action.domain.event import (
    EventPayload,
    EventType,
    RepositoryInfo,
    ScanRange,
    UnsupportedEventError,
)
from gitpwned_action.domain.finding import (
    Finding,
    Fingerprint,
    ScanExitCode,
    ScanResult,
)
from gitpwned_action.domain.github import (
    DiffSide,
    ExistingReviewComment,
    PullRequestCommit,
    ReviewComment,
)
from gitpwned_action.domain.outcome import (
    CollaboratorError,
    Failure,
    FailureKind,
    Outcome,
)

__all__ = [
    "ActionConfig",
    "CollaboratorError",
    "ConfigurationError",
    "DiffSide",
    "EventPayload",
    "EventType",
    "ExistingReviewComment",
    "Failure",
    "FailureKind",
    "Finding",
    "Fingerprint",
    "Outcome",
    "PullRequestCommit",
    "RepositoryInfo",
    "ReviewComment",
    "ScanExitCode",
    "ScanRange",
    "ScanResult",
    "UnsupportedEventError",
]
