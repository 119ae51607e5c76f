"""Result types for calls to external collaborators.

Network and runtime collaborators return an Outcome instead of raising, so
each caller decides whether a failure aborts the run or is only logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(Enum):
    """How bad a collaborator failure is."""

    TRANSIENT = "transient"
    FATAL = "fatal"


@dataclass(frozen=True)
class Failure:
    """A classified collaborator failure."""

    kind: FailureKind
    message: str

    @property
    def is_transient(self) -> bool:
        return self.kind is FailureKind.TRANSIENT

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Either a value or a Failure, never both."""

    value: T | None = None
    failure: Failure | None = None

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def transient(cls, message: str) -> Outcome[T]:
        return cls(failure=Failure(FailureKind.TRANSIENT, message))

    @classmethod
    def fatal(cls, message: str) -> Outcome[T]:
        return cls(failure=Failure(FailureKind.FATAL, message))

    # --------------------------------------------------------
    # Public API
    # --------------------------------------------------------

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        """Return the value, or raise CollaboratorError for a failure."""
        if self.failure is not None:
            raise CollaboratorError(str(self.failure))
        return self.value  # type: ignore[return-value]


class CollaboratorError(Exception):
    """Raised when a fatal collaborator failure has to abort the run."""

    pass
