"""GitHub Actions output and logging helpers.

Runtime file paths (GITHUB_OUTPUT, GITHUB_STEP_SUMMARY, GITHUB_PATH) come
from ActionConfig and are passed in explicitly.
"""

from __future__ import annotations

from pathlib import Path


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


# ============================================================
# Workflow commands
# ============================================================


def log_debug(message: str) -> None:
    """Emit a debug message, only shown when step debug logging is on."""
    print(f"::debug::{_escape_data(message)}")


def log_warning(message: str) -> None:
    """Emit a warning annotation."""
    print(f"::warning::{_escape_data(message)}")


def log_error(message: str) -> None:
    """Emit an error annotation."""
    print(f"::error::{_escape_data(message)}")


# ============================================================
# Runtime files
# ============================================================


def write_github_output(output_file: Path | None, key: str, value: str) -> bool:
    """Write a key-value pair to GITHUB_OUTPUT for job outputs.

    Handles multiline values using heredoc syntax.

    Args:
        output_file: Path of the GITHUB_OUTPUT file, None outside Actions
        key: Output variable name
        value: Output value (can be multiline)

    Returns:
        True if written successfully, False otherwise
    """
    if output_file is None:
        print(f"GITHUB_OUTPUT not set, would output: {key}={value[:100]}")
        return False
    try:
        with open(output_file, "a", encoding="utf-8") as f:
            if "\n" in value:
                f.write(f"{key}<<EOF\n{value}\nEOF\n")
            else:
                f.write(f"{key}={value}\n")
        return True
    except OSError as e:
        log_warning(f"Failed to write output {key}: {e}")
        return False


def write_github_step_summary(summary_path: Path | None, content: str) -> bool:
    """Append content to GITHUB_STEP_SUMMARY for the job summary.

    Args:
        summary_path: Path of the GITHUB_STEP_SUMMARY file, None outside Actions
        content: Markdown/HTML content to append

    Returns:
        True if written successfully, False otherwise
    """
    if summary_path is None:
        print("GITHUB_STEP_SUMMARY not set, skipping job summary")
        return False
    try:
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(content)
        return True
    except OSError as e:
        log_warning(f"Failed to write job summary: {e}")
        return False


def add_github_path(path_file: Path | None, directory: Path) -> None:
    """Prepend a directory to PATH for subsequent steps."""
    if path_file is None:
        log_debug(f"GITHUB_PATH not set, not exporting {directory}")
        return
    with open(path_file, "a", encoding="utf-8") as f:
        f.write(f"{directory}\n")
