"""GitHub API client for issue and pull request lifecycle operations."""

from typing import Any, Optional

import structlog
from github import Auth, Github
from github.GithubException import GithubException
from github.Issue import Issue
from github.PullRequest import PullRequest
from github.Repository import Repository

from ..config import Settings, get_settings
from ..exceptions import RemoteAPIError
from ..models.github import PRInfo
from .client import LifecycleClient

logger = structlog.get_logger(__name__)


class GitHubClient(LifecycleClient):
    """PyGithub implementation of LifecycleClient."""

    def __init__(self, settings: Optional[Settings] = None, github: Optional[Github] = None):
        """Initialize GitHub client."""
        self.settings = settings or get_settings()
        self._github = github or Github(
            auth=Auth.Token(self.settings.github_token),
            base_url=self.settings.github_base_url,
        )

    def _fail(self, message: str, target: PRInfo, e: GithubException) -> RemoteAPIError:
        logger.error(
            message,
            repo=target.full_name,
            number=target.number,
            status=e.status,
            error=str(e)
        )
        return RemoteAPIError(f"{message} {target}: {e}", status=e.status)

    def _get_repo(self, target: PRInfo) -> Repository:
        return self._github.get_repo(target.full_name)

    def get_pull_request(self, pr: PRInfo) -> PullRequest:
        """Get pull request information."""
        try:
            return self._get_repo(pr).get_pull(pr.number)
        except GithubException as e:
            raise self._fail("Error retrieving pull request", pr, e) from e

    def get_issue(self, issue: PRInfo) -> Issue:
        """Get issue information."""
        try:
            return self._get_repo(issue).get_issue(issue.number)
        except GithubException as e:
            raise self._fail("Error retrieving issue", issue, e) from e

    def update_pr(self, pr: PRInfo, **fields: Any) -> PullRequest:
        """Edit pull request fields."""
        pull = self.get_pull_request(pr)
        try:
            pull.edit(**fields)
        except GithubException as e:
            raise self._fail("Error updating pull request", pr, e) from e

        logger.info(
            "Updated pull request",
            repo=pr.full_name,
            number=pr.number,
            fields=sorted(fields)
        )
        return pull

    def update_issue(self, issue: PRInfo, **fields: Any) -> None:
        """Edit issue fields."""
        item = self.get_issue(issue)
        try:
            item.edit(**fields)
        except GithubException as e:
            raise self._fail("Error updating issue", issue, e) from e

        logger.info(
            "Updated issue",
            repo=issue.full_name,
            number=issue.number,
            fields=sorted(fields)
        )

    def create_issue_comment(self, issue: PRInfo, body: str) -> None:
        """Post a comment on an issue or pull request."""
        item = self.get_issue(issue)
        try:
            item.create_comment(body)
        except GithubException as e:
            raise self._fail("Error posting comment", issue, e) from e

        logger.info(
            "Posted comment",
            repo=issue.full_name,
            number=issue.number
        )

    def is_collaborator(self, pr: PRInfo, login: str) -> bool:
        """Check whether login is a collaborator of the repository."""
        try:
            result = self._get_repo(pr).has_in_collaborators(login)
        except GithubException as e:
            raise self._fail("Error checking collaborator", pr, e) from e

        logger.debug(
            "Checked collaborator",
            repo=pr.full_name,
            login=login,
            collaborator=result
        )
        return result

    def close_pr(self, pr: PRInfo) -> None:
        self.update_pr(pr, state="closed")

    def reopen_pr(self, pr: PRInfo) -> None:
        self.update_pr(pr, state="open")

    def close_issue(self, issue: PRInfo) -> None:
        self.update_issue(issue, state="closed")

    def reopen_issue(self, issue: PRInfo) -> None:
        self.update_issue(issue, state="open")
