"""Domain models for the triggering GitHub event.

Parse-once pattern: the raw event JSON is parsed into typed models at the
boundary, services never touch the payload dictionary.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class UnsupportedEventError(Exception):
    """Raised when the workflow was triggered by an event we cannot scan."""

    pass


class EventType(Enum):
    """Workflow trigger events the action knows how to scan."""

    PUSH = "push"
    PULL_REQUEST = "pull_request"
    WORKFLOW_DISPATCH = "workflow_dispatch"
    SCHEDULE = "schedule"

    @classmethod
    def parse(cls, name: str) -> EventType:
        """Map a GITHUB_EVENT_NAME value to an EventType.

        Raises:
            UnsupportedEventError: For any other event name
        """
        for member in cls:
            if member.value == name:
                return member
        raise UnsupportedEventError(f"The [{name}] event is not yet supported")

    @property
    def has_explicit_range(self) -> bool:
        """Whether the scan is limited to the commits carried by the event."""
        return self in (EventType.PUSH, EventType.PULL_REQUEST)


@dataclass(frozen=True)
class ScanRange:
    """Inclusive commit range handed to the scanner."""

    base_ref: str
    head_ref: str

    @property
    def is_single_commit(self) -> bool:
        return self.base_ref == self.head_ref


@dataclass
class RepositoryInfo:
    """The repository the workflow runs in."""

    full_name: str
    html_url: str
    owner_login: str = ""

    @property
    def owner(self) -> str:
        return self.full_name.split("/", 1)[0]

    @property
    def name(self) -> str:
        return self.full_name.split("/", 1)[-1]

    @classmethod
    def from_dict(cls, data: dict, server_url: str = "https://github.com") -> RepositoryInfo:
        owner_data = data.get("owner") or {}
        full_name = data.get("full_name", "")
        return cls(
            full_name=full_name,
            html_url=data.get("html_url") or f"{server_url}/{full_name}",
            owner_login=owner_data.get("login", ""),
        )


@dataclass
class EventPayload:
    """The subset of a webhook payload the scan needs."""

    event_type: EventType
    repository: RepositoryInfo
    commit_ids: list[str] = field(default_factory=list)
    pull_request_number: int | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(
        cls,
        event_type: EventType,
        data: dict,
        fallback_repository: str = "",
        fallback_owner: str = "",
        server_url: str = "https://github.com",
    ) -> EventPayload:
        """Parse a webhook payload.

        Scheduled events carry no repository object, so the repository is
        rebuilt from GITHUB_REPOSITORY / GITHUB_REPOSITORY_OWNER.

        Args:
            event_type: Already validated event type
            data: Raw webhook payload
            fallback_repository: owner/name used when the payload has no repository
            fallback_owner: Owner login used when the payload has no repository
            server_url: GitHub server URL for building the repository URL

        Returns:
            Typed EventPayload
        """
        repo_data = data.get("repository")
        if repo_data:
            repository = RepositoryInfo.from_dict(repo_data, server_url)
        else:
            repository = RepositoryInfo(
                full_name=fallback_repository,
                html_url=f"{server_url}/{fallback_repository}",
                owner_login=fallback_owner,
            )

        commit_ids = [c.get("id", "") for c in data.get("commits") or []]

        number = data.get("number")
        if number is None:
            number = (data.get("pull_request") or {}).get("number")

        return cls(
            event_type=event_type,
            repository=repository,
            commit_ids=commit_ids,
            pull_request_number=int(number) if number is not None else None,
        )

    @classmethod
    def from_file(
        cls,
        event_type: EventType,
        path: Path,
        fallback_repository: str = "",
        fallback_owner: str = "",
        server_url: str = "https://github.com",
    ) -> EventPayload:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(
            event_type,
            data,
            fallback_repository=fallback_repository,
            fallback_owner=fallback_owner,
            server_url=server_url,
        )
