#!/usr/bin/env python3
"""CLI entry point for gitpwned-action.

Usage:
    python -m gitpwned_action <command> [options]

Commands:
    scan            Scan the commits of the triggering event and report findings
    post-comments   Post review comments for an existing report
    write-summary   Write the job summary for an existing report
"""

import argparse
import os
import sys

from gitpwned_action.commands import cmd_post_comments, cmd_scan, cmd_write_summary
from gitpwned_action.domain.config import DEFAULT_API_URL, DEFAULT_REPORT_PATH


def main() -> int:
    parser = argparse.ArgumentParser(
        description="gitpwned GitHub Actions CLI tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  scan            Scan the commits of the triggering event and report findings
  post-comments   Post review comments for every finding in a SARIF report
  write-summary   Write the job summary for a finished scan

Examples:
  python -m gitpwned_action scan
  python -m gitpwned_action post-comments --pr-number 123 --repo owner/repo --dry-run
  python -m gitpwned_action write-summary --exit-code 2 --repo-url https://github.com/owner/repo
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # scan command
    parser_scan = subparsers.add_parser(
        "scan",
        help="Scan the commits of the triggering event (reads GITHUB_* / GITPWNED_* env)",
    )
    parser_scan.add_argument(
        "--dry-run",
        action="store_true",
        help="Print review comments instead of posting them",
    )

    # post-comments command
    parser_post = subparsers.add_parser(
        "post-comments",
        help="Post review comments for an existing report",
    )
    parser_post.add_argument(
        "--report-path",
        default=DEFAULT_REPORT_PATH,
        help=f"Path to the gitpwned SARIF report (default: {DEFAULT_REPORT_PATH})",
    )
    parser_post.add_argument(
        "--pr-number",
        required=True,
        type=int,
        help="PR number to post comments to",
    )
    parser_post.add_argument(
        "--repo",
        required=True,
        help="Repository in owner/repo format",
    )
    parser_post.add_argument(
        "--token",
        default=os.environ.get("GITHUB_TOKEN"),
        help="GitHub token (default: $GITHUB_TOKEN)",
    )
    parser_post.add_argument(
        "--notify-user-list",
        default=os.environ.get("GITPWNED_NOTIFY_USER_LIST"),
        help="Mentions appended to each comment, e.g. '@octocat @org/security'",
    )
    parser_post.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be posted without actually posting",
    )

    # write-summary command
    parser_summary = subparsers.add_parser(
        "write-summary",
        help="Write the job summary for a finished scan",
    )
    parser_summary.add_argument(
        "--exit-code",
        required=True,
        type=int,
        help="Exit status the scanner returned",
    )
    parser_summary.add_argument(
        "--repo-url",
        required=True,
        help="Repository URL used for commit and file links",
    )
    parser_summary.add_argument(
        "--report-path",
        default=DEFAULT_REPORT_PATH,
        help=f"Path to the gitpwned SARIF report (default: {DEFAULT_REPORT_PATH})",
    )
    parser_summary.add_argument(
        "--summary-path",
        default=os.environ.get("GITHUB_STEP_SUMMARY"),
        help="Summary file to append to (default: $GITHUB_STEP_SUMMARY, else stdout)",
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    # Route to command implementations with explicit parameters
    if args.command == "scan":
        return cmd_scan(dry_run=args.dry_run)

    elif args.command == "post-comments":
        return cmd_post_comments(
            report_path=args.report_path,
            pr_number=args.pr_number,
            repo=args.repo,
            token=args.token,
            api_url=os.environ.get("GITHUB_API_URL", DEFAULT_API_URL),
            notify_user_list=args.notify_user_list,
            dry_run=args.dry_run,
        )

    elif args.command == "write-summary":
        return cmd_write_summary(
            exit_code=args.exit_code,
            repo_url=args.repo_url,
            report_path=args.report_path,
            summary_path=args.summary_path,
        )

    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
