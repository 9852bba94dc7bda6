"""Handler registration for GitHub webhook events."""

from typing import Any, Callable, List, Protocol

from ..models.github import IssueCommentEvent

IssueCommentHandler = Callable[[IssueCommentEvent, Any, Any], None]


class HandlerRegister:
    """Collects the event handlers a bot wants to receive."""

    def __init__(self):
        self._issue_comment_handlers: List[IssueCommentHandler] = []

    def register_issue_comment_handler(self, handler: IssueCommentHandler) -> None:
        """Register a handler for ``issue_comment`` events."""
        self._issue_comment_handlers.append(handler)

    @property
    def issue_comment_handlers(self) -> List[IssueCommentHandler]:
        return list(self._issue_comment_handlers)


class Robot(Protocol):
    """What the webhook framework needs from a bot."""

    name: str

    def new_config(self) -> Any:
        ...

    def register_event_handler(self, register: HandlerRegister) -> None:
        ...
