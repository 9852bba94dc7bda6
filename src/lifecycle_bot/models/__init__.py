"""Pydantic models for the lifecycle bot."""

from .github import Comment, Issue, IssueCommentEvent, PRInfo, Repository, User

__all__ = [
    "Comment",
    "Issue",
    "IssueCommentEvent",
    "PRInfo",
    "Repository",
    "User",
]
