"""GitHub-related Pydantic models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """GitHub user model."""
    model_config = ConfigDict(extra="allow")

    login: str
    id: Optional[int] = None
    type: Optional[str] = None


class Repository(BaseModel):
    """GitHub repository model."""
    model_config = ConfigDict(extra="allow")

    name: str
    full_name: str
    owner: User

    @property
    def org(self) -> str:
        """Owner login of the repository."""
        return self.owner.login


class Issue(BaseModel):
    """GitHub issue model; pull requests carry a ``pull_request`` link object."""
    model_config = ConfigDict(extra="allow")

    number: int
    state: str
    user: User
    title: Optional[str] = None
    pull_request: Optional[Dict[str, Any]] = None

    @property
    def is_pull_request(self) -> bool:
        """Check whether the issue is a pull request."""
        return self.pull_request is not None


class Comment(BaseModel):
    """GitHub issue comment model."""
    model_config = ConfigDict(extra="allow")

    body: str = ""
    user: User
    id: Optional[int] = None


class IssueCommentEvent(BaseModel):
    """GitHub ``issue_comment`` webhook payload."""
    model_config = ConfigDict(extra="allow")

    action: str
    issue: Issue
    comment: Comment
    repository: Repository
    sender: Optional[User] = None


class PRInfo(BaseModel):
    """Address of an issue or pull request."""
    model_config = ConfigDict(frozen=True)

    org: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        """Repository name in owner/name form."""
        return f"{self.org}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.number}"
