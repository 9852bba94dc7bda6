"""FastAPI application for the lifecycle bot."""

import json
from datetime import datetime, timezone
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from . import __version__
from .config import Settings, get_settings, load_repo_config
from .integrations.client import LifecycleClient
from .integrations.github_client import GitHubClient
from .robot import LifecycleHandler
from .utils.logging import setup_logging
from .webhooks.github_webhook import GitHubWebhookHandler

logger = structlog.get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[LifecycleClient] = None,
    configure_logging: bool = True
) -> FastAPI:
    """Build the application.

    Used as a uvicorn factory; tests pass their own settings and client.
    """
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings)

    robot = LifecycleHandler(client or GitHubClient(settings))
    bot_config = load_repo_config(settings.repo_config_file, robot.new_config())
    webhook_handler = GitHubWebhookHandler(robot, bot_config, settings)

    app = FastAPI(
        title="Lifecycle Bot",
        description="Close and reopen GitHub issues and pull requests from comments",
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None
    )
    app.state.settings = settings
    app.state.webhook_handler = webhook_handler

    @app.on_event("startup")
    async def startup_event():
        """Application startup event."""
        logger.info(
            "Starting Lifecycle Bot",
            version=__version__,
            environment=settings.environment.value,
            host=settings.host,
            port=settings.port,
            configured_items=len(bot_config.config_items)
        )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": __version__,
            "environment": settings.environment.value
        }

    @app.post("/webhook/github")
    async def github_webhook(request: Request):
        """Handle GitHub webhook events."""
        body = await request.body()
        signature = request.headers.get("X-Hub-Signature-256")
        event_name = request.headers.get("X-GitHub-Event", "")
        delivery_id = request.headers.get("X-GitHub-Delivery")

        if not webhook_handler.verify_signature(body, signature):
            logger.warning(
                "Invalid webhook signature",
                event_type=event_name,
                delivery_id=delivery_id
            )
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid signature")

        try:
            payload = json.loads(body)
            return await run_in_threadpool(
                webhook_handler.handle_webhook, event_name, payload, delivery_id
            )
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "Malformed webhook payload",
                event_type=event_name,
                delivery_id=delivery_id,
                error=str(e)
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Malformed payload: {e}"
            )
        except Exception as e:
            logger.error(
                "Error handling GitHub webhook",
                event_type=event_name,
                delivery_id=delivery_id,
                error=str(e),
                exc_info=True
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Webhook processing failed: {e}"
            )

    return app
