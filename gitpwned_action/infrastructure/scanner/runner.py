"""gitpwned subprocess runner.

Infrastructure component that wraps the scanner process. Output streams go
straight to the job log; only the exit status is returned.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from gitpwned_action.infrastructure.github.output import log_warning


def shell_exit_status(returncode: int) -> int:
    """Convert a Popen return code to a shell-style exit status.

    A process killed by signal N reports -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


class ScannerRunner(Protocol):
    """Protocol for running the scanner binary."""

    def run(self, args: list[str]) -> int:
        """Run the scanner with arguments and return its exit status."""
        ...


@dataclass
class GitpwnedRunner:
    """Runs the gitpwned binary via subprocess.

    delay_seconds is a soft allowance: once it passes the run is reported
    as slow but never killed.
    """

    binary: str | Path = "gitpwned"
    delay_seconds: float = 60.0
    cwd: Path | None = None

    def run(self, args: list[str]) -> int:
        """Run gitpwned and wait for it to exit.

        Args:
            args: Arguments after the binary name

        Returns:
            The process exit status, 128 + N when killed by signal N
        """
        cmd = [str(self.binary), *args]
        print(f"gitpwned cmd: {' '.join(cmd)}")

        process = subprocess.Popen(cmd, cwd=self.cwd)
        try:
            return shell_exit_status(process.wait(timeout=self.delay_seconds))
        except subprocess.TimeoutExpired:
            log_warning(
                f"gitpwned still running after {self.delay_seconds:g}s, waiting for it to finish"
            )
        return shell_exit_status(process.wait())
