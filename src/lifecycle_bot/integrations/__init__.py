"""GitHub API integrations."""

from .client import LifecycleClient
from .github_client import GitHubClient

__all__ = ["GitHubClient", "LifecycleClient"]
