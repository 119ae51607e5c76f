"""Tests for CLI commands.

Tests cover:
- cmd_scan: fatal configuration errors, empty pushes, full wiring with a fake scanner
- cmd_write_summary: stdout and file output
- cmd_post_comments: report errors and publishing
"""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from gitpwned_action.commands import cmd_post_comments, cmd_scan, cmd_write_summary
from gitpwned_action.domain.outcome import Outcome


def make_sarif() -> dict:
    return {
        "runs": [
            {
                "results": [
                    {
                        "ruleId": "aws-key",
                        "locations": [
                            {
                                "physicalLocation": {
                                    "artifactLocation": {"uri": "config.yml"},
                                    "region": {"startLine": 12},
                                }
                            }
                        ],
                        "partialFingerprints": {
                            "commitSha": "abc123def4567890",
                            "author": "Mona Lisa",
                            "date": "2024-01-02T03:04:05Z",
                            "email": "mona@example.com",
                        },
                    }
                ]
            }
        ]
    }


class CommandTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_event(self, data: dict) -> Path:
        path = self.root / "event.json"
        path.write_text(json.dumps(data))
        return path

    def run_quietly(self, func, *args, **kwargs) -> tuple[int, str]:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = func(*args, **kwargs)
        return code, buffer.getvalue()


class TestCmdScan(CommandTestCase):
    """Tests for cmd_scan."""

    def test_unsupported_event_fails_before_reading_payload(self):
        env = {"GITHUB_EVENT_NAME": "issues", "GITHUB_EVENT_PATH": "/nonexistent.json"}

        code, output = self.run_quietly(cmd_scan, env)

        self.assertEqual(code, 1)
        self.assertIn("::error::ERROR: The [issues] event is not yet supported", output)

    def test_missing_event_name(self):
        code, output = self.run_quietly(cmd_scan, {"GITHUB_EVENT_PATH": "/tmp/x.json"})
        self.assertEqual(code, 1)
        self.assertIn("GITHUB_EVENT_NAME", output)

    def test_invalid_version(self):
        env = {
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_EVENT_PATH": str(self.write_event({"commits": []})),
            "GITPWNED_VERSION": "not-a-version",
        }
        code, _ = self.run_quietly(cmd_scan, env)
        self.assertEqual(code, 1)

    def test_unreadable_payload(self):
        env = {"GITHUB_EVENT_NAME": "push", "GITHUB_EVENT_PATH": str(self.root / "missing.json")}
        code, output = self.run_quietly(cmd_scan, env)
        self.assertEqual(code, 1)
        self.assertIn("could not read event payload", output)

    def test_push_without_commits_exits_cleanly(self):
        env = {
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_EVENT_PATH": str(self.write_event({"commits": [], "repository": {"full_name": "o/r"}})),
        }
        with patch("gitpwned_action.commands.scan.ScannerInstaller") as installer:
            code, output = self.run_quietly(cmd_scan, env)

        self.assertEqual(code, 0)
        self.assertIn("No commits to scan", output)
        installer.assert_not_called()

    def test_pull_request_without_token_is_fatal(self):
        env = {
            "GITHUB_EVENT_NAME": "pull_request",
            "GITHUB_EVENT_PATH": str(self.write_event({"number": 3, "repository": {"full_name": "o/r"}})),
        }
        code, output = self.run_quietly(cmd_scan, env)
        self.assertEqual(code, 1)
        self.assertIn("GITHUB_TOKEN is required", output)

    def test_push_scan_end_to_end_with_fake_scanner(self):
        summary = self.root / "summary.md"
        outputs = self.root / "output"
        env = {
            "GITHUB_EVENT_NAME": "push",
            "GITHUB_EVENT_PATH": str(
                self.write_event(
                    {
                        "commits": [{"id": "aaa"}, {"id": "bbb"}],
                        "repository": {"full_name": "o/r", "html_url": "https://github.com/o/r"},
                    }
                )
            ),
            "GITHUB_STEP_SUMMARY": str(summary),
            "GITHUB_OUTPUT": str(outputs),
            "GITPWNED_ENABLE_UPLOAD_ARTIFACT": "false",
        }
        runner = MagicMock()
        runner.run.return_value = 0

        with patch("gitpwned_action.commands.scan.ScannerInstaller") as installer, patch(
            "gitpwned_action.commands.scan.GitpwnedRunner", return_value=runner
        ):
            installer.return_value.install.return_value = Path("/opt/gitpwned")
            code, _ = self.run_quietly(cmd_scan, env)

        self.assertEqual(code, 0)
        installer.return_value.install.assert_called_once_with("8.16.1")
        args = runner.run.call_args[0][0]
        self.assertIn("--log-opts=--no-merges --first-parent aaa^..bbb", args)
        self.assertEqual(outputs.read_text(), "exit-code=0\n")
        self.assertIn("No leaks detected", summary.read_text())


class TestCmdWriteSummary(CommandTestCase):
    def test_prints_without_summary_file(self):
        code, output = self.run_quietly(cmd_write_summary, 0, "https://github.com/o/r", "results.sarif", None)
        self.assertEqual(code, 0)
        self.assertIn("No leaks detected", output)

    def test_writes_findings_table(self):
        report = self.root / "results.sarif"
        report.write_text(json.dumps(make_sarif()))
        summary = self.root / "summary.md"

        code, _ = self.run_quietly(cmd_write_summary, 2, "https://github.com/o/r", str(report), str(summary))

        self.assertEqual(code, 0)
        self.assertEqual(summary.read_text().count("<tr>"), 2)

    def test_missing_report(self):
        code, _ = self.run_quietly(
            cmd_write_summary, 2, "https://github.com/o/r", str(self.root / "nope.sarif"), None
        )
        self.assertEqual(code, 1)


class TestCmdPostComments(CommandTestCase):
    def test_missing_report(self):
        code, _ = self.run_quietly(
            cmd_post_comments, str(self.root / "nope.sarif"), 3, "o/r", "token"
        )
        self.assertEqual(code, 1)

    def test_requires_token(self):
        report = self.root / "results.sarif"
        report.write_text(json.dumps(make_sarif()))
        code, _ = self.run_quietly(cmd_post_comments, str(report), 3, "o/r", None)
        self.assertEqual(code, 1)

    def test_posts_findings(self):
        report = self.root / "results.sarif"
        report.write_text(json.dumps(make_sarif()))

        with patch("gitpwned_action.commands.post_comments.GitHubApiClient") as client_cls:
            api = client_cls.return_value
            api.list_review_comments.return_value = Outcome.success([])
            api.create_review_comment.return_value = Outcome.success(1)
            code, _ = self.run_quietly(cmd_post_comments, str(report), 3, "o/r", "token")

        self.assertEqual(code, 0)
        api.create_review_comment.assert_called_once()


if __name__ == "__main__":
    unittest.main()
