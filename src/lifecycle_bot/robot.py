"""Lifecycle bot: close and reopen issues and pull requests from comments."""

import re
from typing import Any

import structlog

from .config import BotConfig, Configuration
from .exceptions import ConfigNotFoundError, ConfigTypeError
from .integrations.client import LifecycleClient
from .models.github import IssueCommentEvent, PRInfo
from .webhooks.framework import HandlerRegister

logger = structlog.get_logger(__name__)

BOT_NAME = "lifecycle"
CREATE_ACTION = "created"

# The action in the rejection message is always "reopen", for /close too.
OPTION_FAILURE_MESSAGE = (
    "***@{commenter}*** you can't {action} it unless you are "
    "the author of it or a collaborator."
)

# Command lines only allow ASCII whitespace around them.
COMMAND_WHITESPACE = " \t\n\f\r"

REOPEN_RE = re.compile(r"^/reopen\s*$", re.IGNORECASE | re.MULTILINE | re.ASCII)
CLOSE_RE = re.compile(r"^/close\s*$", re.IGNORECASE | re.MULTILINE | re.ASCII)


class LifecycleHandler:
    """Handles /close and /reopen comments on issues and pull requests."""

    name = BOT_NAME

    def __init__(self, client: LifecycleClient):
        self.client = client

    def new_config(self) -> Configuration:
        """Return an empty configuration for the framework to populate."""
        return Configuration()

    def get_config(self, config: Any, org: str, repo: str) -> BotConfig:
        """Resolve the configuration item covering org/repo."""
        if not isinstance(config, Configuration):
            raise ConfigTypeError(
                f"can't convert {type(config).__name__} to Configuration"
            )

        bot_config = config.config_for(org, repo)
        if bot_config is None:
            raise ConfigNotFoundError(org, repo)
        return bot_config

    def register_event_handler(self, register: HandlerRegister) -> None:
        register.register_issue_comment_handler(self.handle_issue_comment_event)

    def handle_issue_comment_event(self, event: IssueCommentEvent, config: Any, log: Any = None) -> None:
        """Entry point for ``issue_comment`` events.

        Only newly created comments are looked at. Configuration errors and
        GitHub API errors are raised to the caller.
        """
        if event.action != CREATE_ACTION:
            return

        org = event.repository.org
        repo = event.repository.name
        self.get_config(config, org, repo)

        info = PRInfo(org=org, repo=repo, number=event.issue.number)
        log = (log or logger).bind(org=org, repo=info.full_name, number=info.number)
        self.handle_life_cycle(event, info, log)

    def handle_life_cycle(self, event: IssueCommentEvent, info: PRInfo, log: Any) -> None:
        author = event.issue.user.login
        comment = event.comment.body.strip(COMMAND_WHITESPACE)
        commenter = event.comment.user.login
        state = event.issue.state

        if state == "closed" and REOPEN_RE.search(comment):
            log.info("Reopen command received", commenter=commenter)
            self.open(event, info, commenter, author, log)
            return

        if state == "open" and CLOSE_RE.search(comment):
            log.info("Close command received", commenter=commenter)
            self.close(event, info, commenter, author, log)

    def open(self, event: IssueCommentEvent, info: PRInfo, commenter: str, author: str, log: Any) -> None:
        """Reopen the item, or explain why the commenter may not."""
        if not self.has_permission(info, commenter, author):
            log.info("Reopen refused", commenter=commenter, author=author)
            self.client.create_issue_comment(
                info, OPTION_FAILURE_MESSAGE.format(commenter=commenter, action="reopen")
            )
            return

        if event.issue.is_pull_request:
            self.client.reopen_pr(info)
        else:
            self.client.reopen_issue(info)
        log.info("Reopened", pull_request=event.issue.is_pull_request)

    def close(self, event: IssueCommentEvent, info: PRInfo, commenter: str, author: str, log: Any) -> None:
        """Close the item, or explain why the commenter may not."""
        if not self.has_permission(info, commenter, author):
            log.info("Close refused", commenter=commenter, author=author)
            self.client.create_issue_comment(
                info, OPTION_FAILURE_MESSAGE.format(commenter=commenter, action="reopen")
            )
            return

        if event.issue.is_pull_request:
            self.client.close_pr(info)
        else:
            self.client.close_issue(info)
        log.info("Closed", pull_request=event.issue.is_pull_request)

    def has_permission(self, info: PRInfo, commenter: str, author: str) -> bool:
        """The author may always act; anyone else must be a collaborator."""
        if commenter == author:
            return True
        return self.client.is_collaborator(info, commenter)
