"""Exceptions raised by the lifecycle bot."""

from typing import Optional


class LifecycleBotError(Exception):
    """Base class for lifecycle bot errors."""


class ConfigTypeError(LifecycleBotError):
    """The configuration object handed to the bot has the wrong type."""


class ConfigNotFoundError(LifecycleBotError):
    """No configuration item covers the repository."""

    def __init__(self, org: str, repo: str):
        self.org = org
        self.repo = repo
        super().__init__(f"no config for this repo:{org}/{repo}")


class RemoteAPIError(LifecycleBotError):
    """A call to the GitHub API failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)
