"""Post review comments command.

Re-publishes findings from an existing SARIF report onto a PR, e.g. after
a comment step failed. Existing comments are never duplicated.
"""

from __future__ import annotations

import sys

from gitpwned_action.infrastructure import GitHubApiClient, ReportError, load_sarif_report
from gitpwned_action.services import CommentPublisher


def cmd_post_comments(
    report_path: str,
    pr_number: int,
    repo: str,
    token: str | None,
    api_url: str = "https://api.github.com",
    notify_user_list: str | None = None,
    dry_run: bool = False,
) -> int:
    """Post review comments for every finding in a report.

    Args:
        report_path: Path to the gitpwned SARIF report
        pr_number: PR number to comment on
        repo: Repository in owner/repo format
        token: GitHub token
        api_url: GitHub API base URL
        notify_user_list: Mentions appended to each comment
        dry_run: Print what would be posted without posting

    Returns:
        Exit code (0 when every comment was posted or already present)
    """
    try:
        findings = load_sarif_report(report_path)
    except ReportError as e:
        print(str(e), file=sys.stderr)
        return 1

    if not findings:
        print("No findings in report, nothing to post")
        return 0

    if not token and not dry_run:
        print("A GitHub token is required to post comments (--token or GITHUB_TOKEN)", file=sys.stderr)
        return 1

    api = GitHubApiClient(token=token, api_url=api_url, dry_run=dry_run)
    publisher = CommentPublisher(repo=repo, api=api, notify_user_list=notify_user_list)
    report = publisher.publish(findings, pr_number)

    return 0 if not report.failed else 1
