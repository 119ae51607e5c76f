"""CLI command implementations."""

from gitpwned_action.commands.post_comments import cmd_post_comments
from gitpwned_action.commands.scan import cmd_scan
from gitpwned_action.commands.write_summary import cmd_write_summary

__all__ = ["cmd_post_comments", "cmd_scan", "cmd_write_summary"]
