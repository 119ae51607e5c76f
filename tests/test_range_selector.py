"""Tests for RangeSelector.

Tests cover:
- Push events: first and last commit, single commit, no commits
- Pull request events: commit list lookup, token requirement, API failures
- Dispatch and schedule events: no explicit range
"""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from gitpwned_action.domain.config import ConfigurationError
from gitpwned_action.domain.event import EventPayload, EventType, RepositoryInfo, ScanRange
from gitpwned_action.domain.github import PullRequestCommit
from gitpwned_action.domain.outcome import CollaboratorError, Outcome
from gitpwned_action.infrastructure.github.api import GitHubApiClient
from gitpwned_action.services.range_selector import NoCommitsToScan, RangeSelector


def make_event(
    event_type: EventType,
    commit_ids: list[str] | None = None,
    pr_number: int | None = None,
) -> EventPayload:
    return EventPayload(
        event_type=event_type,
        repository=RepositoryInfo(full_name="octo/repo", html_url="https://github.com/octo/repo"),
        commit_ids=commit_ids or [],
        pull_request_number=pr_number,
    )


class TestPushRange(unittest.TestCase):
    """Tests for push events."""

    def setUp(self):
        self.api = MagicMock(spec=GitHubApiClient)
        self.selector = RangeSelector(api=self.api, github_token=None)

    def test_uses_first_and_last_commit(self):
        for count in (2, 3, 10):
            ids = [f"sha{i}" for i in range(count)]
            with self.subTest(count=count):
                scan_range = self.selector.select(make_event(EventType.PUSH, ids))
                self.assertEqual(scan_range, ScanRange(base_ref="sha0", head_ref=f"sha{count - 1}"))

    def test_single_commit_has_equal_refs(self):
        scan_range = self.selector.select(make_event(EventType.PUSH, ["only"]))
        self.assertTrue(scan_range.is_single_commit)

    def test_no_commits_signals_nothing_to_scan(self):
        with self.assertRaises(NoCommitsToScan):
            self.selector.select(make_event(EventType.PUSH, []))

    def test_push_needs_no_token_or_network(self):
        self.selector.select(make_event(EventType.PUSH, ["a", "b"]))
        self.api.list_pull_request_commits.assert_not_called()


class TestPullRequestRange(unittest.TestCase):
    """Tests for pull_request events."""

    def setUp(self):
        self.api = MagicMock(spec=GitHubApiClient)
        self.selector = RangeSelector(api=self.api, github_token="ghs_token")

    def test_uses_first_and_last_pr_commit(self):
        self.api.list_pull_request_commits.return_value = Outcome.success(
            [PullRequestCommit(sha="first"), PullRequestCommit(sha="mid"), PullRequestCommit(sha="last")]
        )

        scan_range = self.selector.select(make_event(EventType.PULL_REQUEST, pr_number=12))

        self.assertEqual(scan_range, ScanRange(base_ref="first", head_ref="last"))
        self.api.list_pull_request_commits.assert_called_once_with("octo/repo", 12)

    def test_missing_token_fails_before_network(self):
        selector = RangeSelector(api=self.api, github_token=None)
        with self.assertRaises(ConfigurationError) as ctx:
            selector.select(make_event(EventType.PULL_REQUEST, pr_number=12))
        self.assertIn("GITHUB_TOKEN", str(ctx.exception))
        self.api.list_pull_request_commits.assert_not_called()

    def test_api_failure_is_fatal(self):
        self.api.list_pull_request_commits.return_value = Outcome.fatal("HTTP 404")
        with self.assertRaises(CollaboratorError):
            self.selector.select(make_event(EventType.PULL_REQUEST, pr_number=12))

    def test_empty_pr_signals_nothing_to_scan(self):
        self.api.list_pull_request_commits.return_value = Outcome.success([])
        with self.assertRaises(NoCommitsToScan):
            self.selector.select(make_event(EventType.PULL_REQUEST, pr_number=12))


class TestDefaultHistoryRange(unittest.TestCase):
    def test_dispatch_and_schedule_have_no_range(self):
        api = MagicMock(spec=GitHubApiClient)
        selector = RangeSelector(api=api)
        self.assertIsNone(selector.select(make_event(EventType.WORKFLOW_DISPATCH)))
        self.assertIsNone(selector.select(make_event(EventType.SCHEDULE)))
        api.list_pull_request_commits.assert_not_called()


if __name__ == "__main__":
    unittest.main()
