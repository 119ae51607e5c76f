"""Commit range selection.

Decides which commits the scanner inspects for each trigger event.
"""

from __future__ import annotations

from dataclasses import dataclass

from gitpwned_action.domain.config import ConfigurationError
from gitpwned_action.domain.event import EventPayload, EventType, ScanRange
from gitpwned_action.infrastructure.github.api import GitHubApiClient


class NoCommitsToScan(Exception):
    """Signals that the event carries no commits, so there is nothing to scan."""

    pass


@dataclass
class RangeSelector:
    """Computes the ScanRange for an event.

    Uses GitHubApiClient to list pull request commits (dependency injection).
    """

    api: GitHubApiClient
    github_token: str | None = None

    def select(self, event: EventPayload) -> ScanRange | None:
        """Compute the commit range for an event.

        Args:
            event: Parsed event payload

        Returns:
            The range to scan, or None to let the scanner walk its default history

        Raises:
            NoCommitsToScan: If the push or PR has no commits
            ConfigurationError: If a PR is scanned without a GitHub token
            CollaboratorError: If the PR commit list cannot be fetched
        """
        if event.event_type is EventType.PUSH:
            return self._select_push(event)
        if event.event_type is EventType.PULL_REQUEST:
            return self._select_pull_request(event)
        return None

    # ============================================================
    # Private Helpers
    # ============================================================

    @staticmethod
    def _select_push(event: EventPayload) -> ScanRange:
        if not event.commit_ids:
            raise NoCommitsToScan("No commits to scan")
        return ScanRange(base_ref=event.commit_ids[0], head_ref=event.commit_ids[-1])

    def _select_pull_request(self, event: EventPayload) -> ScanRange:
        if not self.github_token:
            raise ConfigurationError(
                "GITHUB_TOKEN is required to scan pull requests. "
                "Pass the automatically created token via `env: GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}`."
            )
        if event.pull_request_number is None:
            raise ConfigurationError("pull_request event payload has no PR number")

        commits = self.api.list_pull_request_commits(
            event.repository.full_name, event.pull_request_number
        ).unwrap()
        if not commits:
            raise NoCommitsToScan(f"PR #{event.pull_request_number} has no commits to scan")
        return ScanRange(base_ref=commits[0].sha, head_ref=commits[-1].sha)
