"""Command-line interface for the lifecycle bot."""

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from .config import Configuration, get_settings, load_repo_config
from .integrations.github_client import GitHubClient
from .robot import LifecycleHandler
from .utils.logging import setup_logging
from .webhooks.github_webhook import GitHubWebhookHandler

app = typer.Typer(
    name="lifecycle-bot",
    help="Close and reopen GitHub issues and pull requests from comments",
    add_completion=False
)
console = Console()


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind to (defaults to HOST setting)"),
    port: Optional[int] = typer.Option(None, help="Port to bind to (defaults to PORT setting)"),
    reload: bool = typer.Option(False, help="Enable auto-reload"),
):
    """Start the webhook server."""
    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"Starting Lifecycle Bot on {host}:{port}")
    console.print(f"Environment: {settings.environment.value}")

    uvicorn.run(
        "lifecycle_bot.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.value.lower()
    )


@app.command()
def config():
    """Show current configuration."""
    settings = get_settings()

    table = Table(title="Lifecycle Bot Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Host", settings.host)
    table.add_row("Port", str(settings.port))
    table.add_row("Environment", settings.environment.value)
    table.add_row("Log Level", settings.log_level.value)
    table.add_row("GitHub API", settings.github_base_url)
    table.add_row("Has GitHub Token", "yes" if settings.github_token else "no")
    table.add_row("Has Webhook Secret", "yes" if settings.github_webhook_secret else "no")
    table.add_row("Repo Config File", settings.repo_config_file)
    console.print(table)

    bot_config = load_repo_config(settings.repo_config_file, Configuration())
    if not bot_config.config_items:
        console.print("No repositories configured")
        return

    repos = Table(title="Configured Repositories")
    repos.add_column("#", style="cyan")
    repos.add_column("Repos", style="green")
    repos.add_column("Excluded", style="yellow")
    for index, item in enumerate(bot_config.config_items):
        repos.add_row(str(index), ", ".join(item.repos), ", ".join(item.excluded_repos))
    console.print(repos)


@app.command()
def handle(
    event_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="issue_comment payload (JSON)"),
):
    """Run a saved issue_comment payload through the bot."""
    settings = get_settings()
    setup_logging(settings)

    payload = json.loads(event_file.read_text(encoding="utf-8"))
    robot = LifecycleHandler(GitHubClient(settings))
    bot_config = load_repo_config(settings.repo_config_file, robot.new_config())
    handler = GitHubWebhookHandler(robot, bot_config, settings)

    try:
        result = handler.handle_webhook("issue_comment", payload)
    except Exception as e:
        console.print(f"Error: {e}")
        raise typer.Exit(code=1)

    console.print(f"Result: {result['status']}")
    if result.get("reason"):
        console.print(f"Reason: {result['reason']}")


def main():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
