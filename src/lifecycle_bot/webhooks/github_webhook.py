"""GitHub webhook handler for dispatching issue comment events."""

import hashlib
import hmac
from typing import Any, Dict, Optional

import structlog

from ..config import Settings, get_settings
from ..exceptions import ConfigNotFoundError
from ..models.github import IssueCommentEvent
from .framework import HandlerRegister, Robot

logger = structlog.get_logger(__name__)

ISSUE_COMMENT_EVENT = "issue_comment"


class GitHubWebhookHandler:
    """Verifies GitHub deliveries and passes them to the bot's handlers."""

    def __init__(self, robot: Robot, config: Any, settings: Optional[Settings] = None):
        """Initialize webhook handler.

        ``config`` is the bot configuration, created with ``robot.new_config()``
        and already populated.
        """
        self.settings = settings or get_settings()
        self.robot = robot
        self.config = config
        self.register = HandlerRegister()
        robot.register_event_handler(self.register)

    def verify_signature(self, payload_body: bytes, signature_header: Optional[str]) -> bool:
        """Verify GitHub webhook signature."""
        if not signature_header:
            return False

        try:
            algorithm, signature = signature_header.split("=", 1)
        except ValueError:
            return False
        if algorithm != "sha256":
            return False

        expected_signature = hmac.new(
            self.settings.github_webhook_secret.encode(),
            payload_body,
            hashlib.sha256
        ).hexdigest()

        return hmac.compare_digest(
            signature.encode("utf-8", "surrogateescape"),
            expected_signature.encode()
        )

    def handle_webhook(
        self,
        event_name: str,
        payload: Dict[str, Any],
        delivery_id: Optional[str] = None
    ) -> Dict[str, str]:
        """Dispatch a verified webhook delivery.

        Payloads that fail validation raise pydantic's ValidationError. A
        repository without configuration is logged and ignored; any other
        handler error propagates.
        """
        if event_name != ISSUE_COMMENT_EVENT:
            logger.debug(
                "Ignoring webhook event",
                event_type=event_name,
                delivery_id=delivery_id
            )
            return {"status": "ignored", "reason": f"Event '{event_name}' not handled"}

        event = IssueCommentEvent.model_validate(payload)
        log = logger.bind(
            bot=self.robot.name,
            event_type=event_name,
            action=event.action,
            delivery_id=delivery_id,
            repo=event.repository.full_name,
            number=event.issue.number,
        )
        log.debug("Received GitHub webhook")

        for handler in self.register.issue_comment_handlers:
            try:
                handler(event, self.config, log)
            except ConfigNotFoundError as e:
                log.warning("can not get config for bot", error=str(e))
                return {"status": "ignored", "reason": str(e)}

        return {"status": "handled"}
