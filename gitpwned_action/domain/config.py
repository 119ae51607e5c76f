"""Action configuration.

Built once from the process environment at startup and passed explicitly
to every service. Nothing below the command layer reads os.environ.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_SCANNER_VERSION = "8.16.1"
DEFAULT_REPORT_PATH = "results.sarif"
DEFAULT_SCAN_DELAY_SECONDS = 60.0
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_SERVER_URL = "https://github.com"

# Values that switch off an otherwise enabled feature flag; an empty value
# counts as 0
_DISABLED_VALUES = ("", "false", "0")


class ConfigurationError(Exception):
    """Raised for configuration problems that must stop the run."""

    pass


def _flag(env: Mapping[str, str], name: str) -> bool:
    value = env.get(name)
    if value is None:
        return True
    return value.strip().lower() not in _DISABLED_VALUES


def _optional(env: Mapping[str, str], name: str) -> str | None:
    value = env.get(name, "").strip()
    return value or None


@dataclass(frozen=True)
class ActionConfig:
    """Immutable configuration for one action run."""

    event_name: str
    event_path: Path
    github_token: str | None = None
    api_url: str = DEFAULT_API_URL
    server_url: str = DEFAULT_SERVER_URL
    repository: str = ""
    repository_owner: str = ""
    enable_summary: bool = True
    enable_upload_artifact: bool = True
    enable_comments: bool = True
    version: str = DEFAULT_SCANNER_VERSION
    notify_user_list: str | None = None
    scan_delay_seconds: float = DEFAULT_SCAN_DELAY_SECONDS
    report_path: Path = Path(DEFAULT_REPORT_PATH)
    output_path: Path | None = None
    step_summary_path: Path | None = None
    github_path_file: Path | None = None
    runtime_token: str | None = None
    results_url: str | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> ActionConfig:
        """Build the configuration from GitHub Actions environment variables.

        Args:
            env: Environment mapping, usually os.environ

        Returns:
            Frozen ActionConfig

        Raises:
            ConfigurationError: If a required variable is missing or malformed
        """
        event_name = env.get("GITHUB_EVENT_NAME", "").strip()
        if not event_name:
            raise ConfigurationError("GITHUB_EVENT_NAME is not set")

        event_path = env.get("GITHUB_EVENT_PATH", "").strip()
        if not event_path:
            raise ConfigurationError("GITHUB_EVENT_PATH is not set")

        raw_delay = env.get("GITPWNED_SCAN_DELAY", "").strip()
        try:
            scan_delay = float(raw_delay) if raw_delay else DEFAULT_SCAN_DELAY_SECONDS
        except ValueError:
            raise ConfigurationError(
                f"GITPWNED_SCAN_DELAY must be a number of seconds, got [{raw_delay}]"
            )

        def path_or_none(name: str) -> Path | None:
            value = _optional(env, name)
            return Path(value) if value else None

        return cls(
            event_name=event_name,
            event_path=Path(event_path),
            github_token=_optional(env, "GITHUB_TOKEN"),
            api_url=(_optional(env, "GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/"),
            server_url=(_optional(env, "GITHUB_SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
            repository=env.get("GITHUB_REPOSITORY", ""),
            repository_owner=env.get("GITHUB_REPOSITORY_OWNER", ""),
            enable_summary=_flag(env, "GITPWNED_ENABLE_SUMMARY"),
            enable_upload_artifact=_flag(env, "GITPWNED_ENABLE_UPLOAD_ARTIFACT"),
            enable_comments=_flag(env, "GITPWNED_ENABLE_COMMENTS"),
            version=_optional(env, "GITPWNED_VERSION") or DEFAULT_SCANNER_VERSION,
            notify_user_list=_optional(env, "GITPWNED_NOTIFY_USER_LIST"),
            scan_delay_seconds=scan_delay,
            report_path=Path(_optional(env, "GITPWNED_REPORT_PATH") or DEFAULT_REPORT_PATH),
            output_path=path_or_none("GITHUB_OUTPUT"),
            step_summary_path=path_or_none("GITHUB_STEP_SUMMARY"),
            github_path_file=path_or_none("GITHUB_PATH"),
            runtime_token=_optional(env, "ACTIONS_RUNTIME_TOKEN"),
            results_url=_optional(env, "ACTIONS_RESULTS_URL"),
        )
