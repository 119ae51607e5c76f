"""GitHub infrastructure - REST API, Actions runtime files, artifacts."""

from .api import GitHubApiClient
from .artifact import ArtifactUploader

__all__ = ["ArtifactUploader", "GitHubApiClient"]
