"""Shared fixtures for lifecycle bot tests."""

import pytest

from lifecycle_bot.config import BotConfig, Configuration, Settings
from tests.factories import WEBHOOK_SECRET, FakeClient


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def bot_config():
    return Configuration(config_items=[BotConfig(repos=["acme"])])


@pytest.fixture
def settings(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("config_items:\n  - repos:\n      - acme\n")
    return Settings(
        github_token="gh-token",
        github_webhook_secret=WEBHOOK_SECRET,
        repo_config_file=str(config_file),
        _env_file=None,
    )
