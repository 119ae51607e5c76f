"""Domain models for GitHub API payloads.

These models mirror the REST API JSON, providing type-safe access to pull
request commits and review comments.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gitpwned_action.domain.finding import IGNORE_FILE_NAME, Finding


class DiffSide(Enum):
    """Side of the diff a review comment is anchored to."""

    LEFT = "LEFT"
    RIGHT = "RIGHT"


@dataclass
class PullRequestCommit:
    """Commit in a PR."""

    sha: str
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> PullRequestCommit:
        commit_data = data.get("commit") or {}
        return cls(
            sha=data.get("sha", ""),
            message=commit_data.get("message", ""),
        )


@dataclass
class ExistingReviewComment:
    """A review comment already present on a PR."""

    id: int
    body: str
    path: str
    line: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> ExistingReviewComment:
        # original_line survives force pushes, line goes null once outdated
        line = data.get("original_line")
        if line is None:
            line = data.get("line")
        return cls(
            id=data.get("id", 0),
            body=data.get("body", ""),
            path=data.get("path", ""),
            line=line,
        )

    @property
    def dedup_key(self) -> tuple[str, str, int | None]:
        return (self.body, self.path, self.line)


@dataclass(frozen=True)
class ReviewComment:
    """A review comment we intend to post for a finding."""

    body: str
    file_path: str
    line: int
    commit_sha: str
    side: DiffSide = DiffSide.RIGHT

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def for_finding(cls, finding: Finding, notify_user_list: str | None = None) -> ReviewComment:
        """Render the review comment for a finding.

        Args:
            finding: Finding to report
            notify_user_list: Optional mentions appended as a "cc" line

        Returns:
            ReviewComment anchored on the finding's file and line
        """
        body = (
            f"🛑 **Gitpwned** has detected a secret with rule-id `{finding.rule_id}` "
            f"in commit {finding.commit_sha}.\n"
            "If this secret is a _true_ positive, please rotate the secret ASAP.\n"
            "\n"
            "If this secret is a _false_ positive, you can add the fingerprint below "
            f"to your `{IGNORE_FILE_NAME}` file and commit the change to this branch.\n"
            "\n"
            "```\n"
            f"echo {finding.fingerprint.ignore_entry()} >> {IGNORE_FILE_NAME}\n"
            "```\n"
        )
        if notify_user_list:
            body += f"\n\ncc {notify_user_list}"

        return cls(
            body=body,
            file_path=finding.file_path,
            line=finding.start_line,
            commit_sha=finding.commit_sha,
        )

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def dedup_key(self) -> tuple[str, str, int | None]:
        return (self.body, self.file_path, self.line)

    def to_request_body(self) -> dict:
        """JSON body for POST /repos/{owner}/{repo}/pulls/{number}/comments."""
        return {
            "body": self.body,
            "commit_id": self.commit_sha,
            "path": self.file_path,
            "side": self.side.value,
            "line": self.line,
        }
