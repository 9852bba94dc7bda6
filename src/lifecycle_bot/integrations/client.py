"""Abstract GitHub client used by the lifecycle bot.

The bot depends on LifecycleClient rather than on GitHubClient so tests can
hand it a fake.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..models.github import PRInfo


class LifecycleClient(ABC):
    """Operations the lifecycle bot performs against GitHub.

    Every method may raise RemoteAPIError.
    """

    @abstractmethod
    def update_pr(self, pr: PRInfo, **fields: Any) -> Any:
        """Edit pull request fields and return the updated pull request."""

    @abstractmethod
    def update_issue(self, issue: PRInfo, **fields: Any) -> None:
        """Edit issue fields."""

    @abstractmethod
    def create_issue_comment(self, issue: PRInfo, body: str) -> None:
        """Post a comment on an issue or pull request."""

    @abstractmethod
    def is_collaborator(self, pr: PRInfo, login: str) -> bool:
        """Check whether ``login`` is a collaborator of the repository."""

    @abstractmethod
    def close_pr(self, pr: PRInfo) -> None:
        """Close a pull request."""

    @abstractmethod
    def reopen_pr(self, pr: PRInfo) -> None:
        """Reopen a pull request."""

    @abstractmethod
    def close_issue(self, issue: PRInfo) -> None:
        """Close an issue."""

    @abstractmethod
    def reopen_issue(self, issue: PRInfo) -> None:
        """Reopen an issue."""
