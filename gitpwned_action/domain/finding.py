"""Domain models for scanner findings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

IGNORE_FILE_NAME = ".gitpwnedignore"


class ScanExitCode(IntEnum):
    """Exit statuses the scanner is configured to use."""

    CLEAN = 0
    SCAN_ERROR = 1
    FINDINGS_DETECTED = 2

    @classmethod
    def is_known(cls, code: int) -> bool:
        return code in {member.value for member in cls}


@dataclass(frozen=True)
class Fingerprint:
    """Stable identity of a finding across reruns.

    Compared structurally. The colon-joined form is only produced for the
    scanner's ignore file, whose format the scanner owns.
    """

    commit_sha: str
    file_path: str
    rule_id: str
    start_line: int

    def ignore_entry(self) -> str:
        """Render the line the scanner accepts in its ignore file."""
        return f"{self.commit_sha}:{self.file_path}:{self.rule_id}:{self.start_line}"


@dataclass(frozen=True)
class Finding:
    """One detected secret occurrence."""

    rule_id: str
    commit_sha: str
    file_path: str
    start_line: int
    author: str
    date: str
    email: str

    @property
    def fingerprint(self) -> Fingerprint:
        return Fingerprint(
            commit_sha=self.commit_sha,
            file_path=self.file_path,
            rule_id=self.rule_id,
            start_line=self.start_line,
        )

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:7]


@dataclass(frozen=True)
class ScanResult:
    """Exit status of one scanner run plus the findings it reported."""

    exit_code: int
    findings: tuple[Finding, ...] = field(default_factory=tuple)

    @property
    def has_findings(self) -> bool:
        return self.exit_code == ScanExitCode.FINDINGS_DETECTED
