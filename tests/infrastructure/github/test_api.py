"""Tests for GitHubApiClient.

Tests cover:
- Auth headers
- Latest release lookup
- Pagination of PR commits and review comments
- Review comment creation and dry run
- Transient vs fatal failure classification
"""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

import requests

from gitpwned_action.domain.github import ReviewComment
from gitpwned_action.domain.outcome import FailureKind
from gitpwned_action.infrastructure.github.api import GitHubApiClient


def make_response(json_data=None, status_code: int = 200, links: dict | None = None) -> MagicMock:
    """Create a mocked requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    response.links = links or {}
    response.text = "error body"
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(response=response)
    return response


def make_client(token: str | None = "ghs_token") -> tuple[GitHubApiClient, MagicMock]:
    session = MagicMock()
    session.headers = {}
    client = GitHubApiClient(token=token, api_url="https://api.github.com", session=session)
    return client, session


class TestGitHubApiClientHeaders(unittest.TestCase):
    def test_sets_bearer_token(self):
        _, session = make_client()
        self.assertEqual(session.headers["Authorization"], "Bearer ghs_token")
        self.assertEqual(session.headers["Accept"], "application/vnd.github+json")

    def test_no_token_no_authorization(self):
        _, session = make_client(token=None)
        self.assertNotIn("Authorization", session.headers)


class TestLatestRelease(unittest.TestCase):
    def test_returns_tag_name(self):
        client, session = make_client()
        session.get.return_value = make_response({"tag_name": "v8.18.0"})

        outcome = client.get_latest_release_tag("gitpwned", "gitpwned")

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, "v8.18.0")
        self.assertEqual(
            session.get.call_args[0][0],
            "https://api.github.com/repos/gitpwned/gitpwned/releases/latest",
        )

    def test_missing_tag_name_is_fatal(self):
        client, session = make_client()
        session.get.return_value = make_response({"message": "Not Found"})

        outcome = client.get_latest_release_tag("gitpwned", "gitpwned")

        self.assertFalse(outcome.ok)
        self.assertIs(outcome.failure.kind, FailureKind.FATAL)
        self.assertIn("tag_name", outcome.failure.message)

    def test_invalid_json_is_fatal(self):
        client, session = make_client()
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        outcome = client.get_latest_release_tag("gitpwned", "gitpwned")

        self.assertIs(outcome.failure.kind, FailureKind.FATAL)
        self.assertIn("invalid JSON", outcome.failure.message)


class TestPullRequestCommits(unittest.TestCase):
    """Tests for list_pull_request_commits."""

    def test_follows_pagination(self):
        client, session = make_client()
        next_url = "https://api.github.com/repos/o/r/pulls/5/commits?per_page=100&page=2"
        session.get.side_effect = [
            make_response([{"sha": "a"}, {"sha": "b"}], links={"next": {"url": next_url}}),
            make_response([{"sha": "c"}]),
        ]

        outcome = client.list_pull_request_commits("o/r", 5)

        self.assertTrue(outcome.ok)
        self.assertEqual([c.sha for c in outcome.value], ["a", "b", "c"])
        first_call, second_call = session.get.call_args_list
        self.assertEqual(first_call[0][0], "https://api.github.com/repos/o/r/pulls/5/commits")
        self.assertEqual(first_call[1]["params"], {"per_page": 100})
        self.assertEqual(second_call[0][0], next_url)
        self.assertIsNone(second_call[1]["params"])

    def test_not_found_is_fatal(self):
        client, session = make_client()
        session.get.return_value = make_response(status_code=404)

        outcome = client.list_pull_request_commits("o/r", 5)

        self.assertFalse(outcome.ok)
        self.assertIs(outcome.failure.kind, FailureKind.FATAL)
        self.assertIn("404", outcome.failure.message)

    def test_server_error_is_transient(self):
        client, session = make_client()
        session.get.return_value = make_response(status_code=502)

        outcome = client.list_pull_request_commits("o/r", 5)

        self.assertIs(outcome.failure.kind, FailureKind.TRANSIENT)

    def test_connection_error_is_transient(self):
        client, session = make_client()
        session.get.side_effect = requests.ConnectionError("reset")

        outcome = client.list_pull_request_commits("o/r", 5)

        self.assertIs(outcome.failure.kind, FailureKind.TRANSIENT)

    def test_invalid_json_page_is_failure(self):
        client, session = make_client()
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        outcome = client.list_pull_request_commits("o/r", 5)

        self.assertFalse(outcome.ok)


class TestReviewComments(unittest.TestCase):
    """Tests for listing and creating review comments."""

    def setUp(self):
        self.comment = ReviewComment(
            body="body", file_path="config.yml", line=12, commit_sha="abc"
        )

    def test_lists_existing_comments(self):
        client, session = make_client()
        session.get.return_value = make_response(
            [{"id": 1, "body": "hi", "path": "a.py", "original_line": 3, "line": 4}]
        )

        outcome = client.list_review_comments("o/r", 9)

        self.assertEqual(len(outcome.value), 1)
        self.assertEqual(outcome.value[0].dedup_key, ("hi", "a.py", 3))

    def test_creates_comment(self):
        client, session = make_client()
        session.post.return_value = make_response({"id": 77}, status_code=201)

        outcome = client.create_review_comment("o/r", 9, self.comment)

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, 77)
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], "https://api.github.com/repos/o/r/pulls/9/comments")
        self.assertEqual(kwargs["json"], self.comment.to_request_body())

    def test_created_reply_without_json_is_failure(self):
        client, session = make_client()
        response = make_response(status_code=201)
        response.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)
        session.post.return_value = response

        outcome = client.create_review_comment("o/r", 9, self.comment)

        self.assertFalse(outcome.ok)
        self.assertIn("invalid JSON", outcome.failure.message)

    def test_unprocessable_comment_is_fatal_failure(self):
        client, session = make_client()
        session.post.return_value = make_response(status_code=422)

        outcome = client.create_review_comment("o/r", 9, self.comment)

        self.assertFalse(outcome.ok)
        self.assertIs(outcome.failure.kind, FailureKind.FATAL)

    def test_dry_run_does_not_post(self):
        client, session = make_client()
        client.dry_run = True

        outcome = client.create_review_comment("o/r", 9, self.comment)

        self.assertTrue(outcome.ok)
        session.post.assert_not_called()


if __name__ == "__main__":
    unittest.main()
