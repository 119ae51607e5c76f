"""Pull request review comment publishing.

Core service that turns findings into review comments on the lines that
introduced them, skipping comments that are already on the PR.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from gitpwned_action.domain.finding import Finding
from gitpwned_action.domain.github import ReviewComment
from gitpwned_action.domain.outcome import Outcome
from gitpwned_action.infrastructure.github.api import GitHubApiClient
from gitpwned_action.infrastructure.github.output import log_warning


@dataclass
class PublishReport:
    """What happened to each finding during one publish run."""

    posted: list[ReviewComment] = field(default_factory=list)
    skipped: list[ReviewComment] = field(default_factory=list)
    failed: list[ReviewComment] = field(default_factory=list)

    @property
    def attempted(self) -> int:
        return len(self.posted) + len(self.failed)


@dataclass
class CommentPublisher:
    """Service for posting finding comments on a PR.

    Uses GitHubApiClient for the actual API calls (dependency injection).
    """

    repo: str
    api: GitHubApiClient
    notify_user_list: str | None = None

    # ============================================================
    # Public API
    # ============================================================

    def build_comments(self, findings: Iterable[Finding]) -> list[ReviewComment]:
        """Render one review comment per finding, in report order."""
        return [ReviewComment.for_finding(f, self.notify_user_list) for f in findings]

    def publish(self, findings: Iterable[Finding], pr_number: int) -> PublishReport:
        """Post a review comment for every finding not already on the PR.

        Existing comments are fetched once. A rejected comment (usually a
        line outside the PR diff) is logged and the loop moves on.

        Args:
            findings: Findings in report order
            pr_number: PR to comment on

        Returns:
            PublishReport with posted, skipped and failed comments
        """
        report = PublishReport()
        comments = self.build_comments(findings)
        if not comments:
            return report

        existing = self.api.list_review_comments(self.repo, pr_number)
        if not existing.ok:
            log_warning(
                f"Could not list review comments on PR #{pr_number}, skipping comments: "
                f"{existing.failure.message}"
            )
            report.skipped.extend(comments)
            return report

        seen = {comment.dedup_key for comment in existing.value}

        for comment in comments:
            if comment.dedup_key in seen:
                report.skipped.append(comment)
                continue

            try:
                outcome = self.api.create_review_comment(self.repo, pr_number, comment)
            except Exception as e:
                outcome = Outcome.fatal(f"{type(e).__name__}: {e}")

            if outcome.ok:
                seen.add(comment.dedup_key)
                report.posted.append(comment)
                print(f"Posted comment to {comment.file_path}:{comment.line}")
            else:
                report.failed.append(comment)
                log_warning(
                    f"Error encountered when attempting to write a comment on PR #{pr_number}: "
                    f"{outcome.failure.message}\n"
                    "Likely an issue with too large of a diff for the comment to be written.\n"
                    "All secrets that have been leaked will be reported in the summary and job artifact."
                )

        print(
            f"Posted {len(report.posted)} comment(s), skipped {len(report.skipped)} "
            f"already present, {len(report.failed)} failed"
        )
        return report
