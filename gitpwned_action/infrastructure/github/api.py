"""GitHub REST API client.

Infrastructure component wrapping the handful of REST endpoints the action
uses. Every call returns an Outcome so services decide whether a failure is
worth aborting for.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import requests

from gitpwned_action.domain.github import (
    ExistingReviewComment,
    PullRequestCommit,
    ReviewComment,
)
from gitpwned_action.domain.outcome import Outcome

_PER_PAGE = 100
_TIMEOUT_SECONDS = 30


def _classify(error: requests.RequestException, action: str) -> Outcome:
    """Turn a requests error into a transient or fatal Outcome."""
    response = getattr(error, "response", None)
    if response is not None:
        status = response.status_code
        message = f"{action} failed with HTTP {status}: {response.text[:500]}"
        if status >= 500 or status == 429:
            return Outcome.transient(message)
        return Outcome.fatal(message)
    return Outcome.transient(f"{action} failed: {error}")


@dataclass
class GitHubApiClient:
    """Thin wrapper over the GitHub REST API using requests.

    For testing, inject a mocked session.
    """

    token: str | None = None
    api_url: str = "https://api.github.com"
    dry_run: bool = False
    session: requests.Session = field(default_factory=requests.Session)

    def __post_init__(self) -> None:
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )
        if self.token:
            self.session.headers["Authorization"] = f"Bearer {self.token}"

    # --------------------------------------------------------
    # Public API - Releases
    # --------------------------------------------------------

    def get_latest_release_tag(self, owner: str, repo: str) -> Outcome[str]:
        """Get the tag name of a project's latest release.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            Outcome with the tag name (e.g. "v8.16.1")
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/releases/latest"
        try:
            response = self.session.get(url, timeout=_TIMEOUT_SECONDS)
            response.raise_for_status()
            data = response.json()
        except ValueError as e:
            return Outcome.fatal(f"GET {url} returned invalid JSON: {e}")
        except requests.RequestException as e:
            return _classify(e, f"GET {url}")
        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not tag:
            return Outcome.fatal(f"GET {url} returned no tag_name")
        return Outcome.success(tag)

    # --------------------------------------------------------
    # Public API - Pull Requests
    # --------------------------------------------------------

    def list_pull_request_commits(
        self, repo: str, pr_number: int
    ) -> Outcome[list[PullRequestCommit]]:
        """List the commits of a PR, oldest first.

        Args:
            repo: Repository in owner/name format
            pr_number: PR number

        Returns:
            Outcome with every commit across all pages
        """
        url = f"{self.api_url}/repos/{repo}/pulls/{pr_number}/commits"
        outcome = self._get_paginated(url)
        if not outcome.ok:
            return outcome  # type: ignore[return-value]
        return Outcome.success([PullRequestCommit.from_dict(c) for c in outcome.value])

    def list_review_comments(
        self, repo: str, pr_number: int
    ) -> Outcome[list[ExistingReviewComment]]:
        """List the review comments currently on a PR.

        Args:
            repo: Repository in owner/name format
            pr_number: PR number

        Returns:
            Outcome with every review comment across all pages
        """
        url = f"{self.api_url}/repos/{repo}/pulls/{pr_number}/comments"
        outcome = self._get_paginated(url)
        if not outcome.ok:
            return outcome  # type: ignore[return-value]
        return Outcome.success([ExistingReviewComment.from_dict(c) for c in outcome.value])

    def create_review_comment(
        self, repo: str, pr_number: int, comment: ReviewComment
    ) -> Outcome[int]:
        """Post a review comment on a specific line of a PR.

        Args:
            repo: Repository in owner/name format
            pr_number: PR number
            comment: Comment to post

        Returns:
            Outcome with the id of the created comment
        """
        url = f"{self.api_url}/repos/{repo}/pulls/{pr_number}/comments"
        if self.dry_run:
            print(f"[DRY RUN] Would POST {url} for {comment.file_path}:{comment.line}")
            return Outcome.success(0)
        try:
            response = self.session.post(
                url, json=comment.to_request_body(), timeout=_TIMEOUT_SECONDS
            )
            response.raise_for_status()
            data = response.json()
        except ValueError as e:
            return Outcome.fatal(f"POST {url} returned invalid JSON: {e}")
        except requests.RequestException as e:
            return _classify(e, f"POST {url}")
        return Outcome.success(data.get("id", 0) if isinstance(data, dict) else 0)

    # ============================================================
    # Private Helpers
    # ============================================================

    def _get_paginated(self, url: str) -> Outcome[list[dict]]:
        items: list[dict] = []
        next_url: str | None = url
        params: dict | None = {"per_page": _PER_PAGE}
        while next_url:
            try:
                response = self.session.get(next_url, params=params, timeout=_TIMEOUT_SECONDS)
                response.raise_for_status()
                page = response.json()
            except ValueError as e:
                return Outcome.fatal(f"GET {url} returned invalid JSON: {e}")
            except requests.RequestException as e:
                return _classify(e, f"GET {url}")
            items.extend(page)
            # The next link already carries the query string
            next_url = response.links.get("next", {}).get("url")
            params = None
        return Outcome.success(items)
