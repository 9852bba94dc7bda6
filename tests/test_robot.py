"""Tests for the /close and /reopen command handling."""

import pytest

from lifecycle_bot.config import BotConfig, Configuration
from lifecycle_bot.exceptions import ConfigNotFoundError, ConfigTypeError, RemoteAPIError
from lifecycle_bot.models.github import PRInfo
from lifecycle_bot.robot import CLOSE_RE, REOPEN_RE, LifecycleHandler
from lifecycle_bot.webhooks.framework import HandlerRegister
from tests.factories import FakeClient, make_event

REJECTION = "you can't reopen it unless you are the author of it or a collaborator"
INFO = PRInfo(org="acme", repo="widgets", number=7)


def _handle(client, bot_config, **kwargs):
    LifecycleHandler(client).handle_issue_comment_event(make_event(**kwargs), bot_config)


class TestActionFilter:
    @pytest.mark.parametrize("action", ["edited", "deleted"])
    def test_non_created_actions_are_ignored(self, client, bot_config, action):
        _handle(client, bot_config, action=action, state="closed", body="/reopen", commenter="mallory")
        assert client.calls == []

    def test_non_created_action_skips_config_lookup(self, client):
        _handle(client, Configuration(), action="edited", body="/close")
        assert client.calls == []


class TestConfig:
    def test_missing_config_raises_without_remote_calls(self, client):
        with pytest.raises(ConfigNotFoundError) as exc:
            _handle(client, Configuration(), body="/close")
        assert exc.value.org == "acme"
        assert exc.value.repo == "widgets"
        assert client.calls == []

    def test_wrong_config_type_raises(self, client):
        with pytest.raises(ConfigTypeError):
            _handle(client, {"config_items": []}, body="/close")
        assert client.calls == []

    def test_excluded_repo_has_no_config(self, client):
        config = Configuration(config_items=[BotConfig(repos=["acme"], excluded_repos=["acme/widgets"])])
        with pytest.raises(ConfigNotFoundError):
            _handle(client, config, body="/close")

    def test_get_config_returns_matching_item(self, client, bot_config):
        item = LifecycleHandler(client).get_config(bot_config, "acme", "widgets")
        assert item is bot_config.config_items[0]

    def test_new_config_is_empty(self, client):
        config = LifecycleHandler(client).new_config()
        assert isinstance(config, Configuration)
        assert config.config_items == []


class TestReopen:
    def test_author_reopens_issue(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="/reopen")
        assert client.calls == [("reopen_issue", INFO, None)]

    def test_author_reopens_pull_request(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="/reopen", is_pull_request=True)
        assert client.calls == [("reopen_pr", INFO, None)]

    def test_collaborator_reopens(self, bot_config):
        client = FakeClient(collaborators=["bob"])
        _handle(client, bot_config, state="closed", body="/REOPEN", commenter="bob")
        assert client.names() == ["reopen_issue"]
        assert client.names(include_reads=True) == ["is_collaborator", "reopen_issue"]

    def test_stranger_gets_rejection_comment(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="/reopen", commenter="mallory", is_pull_request=True)
        assert client.names() == ["create_issue_comment"]
        _, info, body = client.calls[-1]
        assert info == INFO
        assert body == (
            "***@mallory*** you can't reopen it unless you are the author of it or a collaborator."
        )

    def test_reopen_on_open_item_is_noop(self, client, bot_config):
        _handle(client, bot_config, state="open", body="/reopen")
        assert client.calls == []

    def test_padded_single_line_comment_reopens_pull_request(self, client, bot_config):
        _handle(
            client,
            bot_config,
            state="closed",
            body="  /reopen  \n",
            author="alice",
            commenter="alice",
            is_pull_request=True,
        )
        assert client.calls == [("reopen_pr", INFO, None)]

    def test_command_on_its_own_line_among_others(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="Fixed upstream.\n/reopen\nThanks!")
        assert client.names() == ["reopen_issue"]

    def test_non_ascii_trailing_space_is_noop(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="/reopen\u00a0")
        assert client.calls == []

    @pytest.mark.parametrize("body", ["/reopened", "/reopen extra", "please /reopen", "reopen"])
    def test_non_matching_text_is_noop(self, client, bot_config, body):
        _handle(client, bot_config, state="closed", body=body)
        assert client.calls == []


class TestClose:
    def test_author_closes_without_collaborator_check(self, client, bot_config):
        _handle(client, bot_config, state="open", body="/close", is_pull_request=True)
        assert client.calls == [("close_pr", INFO, None)]

    def test_author_closes_issue(self, client, bot_config):
        _handle(client, bot_config, state="open", body="/Close  ")
        assert client.calls == [("close_issue", INFO, None)]

    def test_collaborator_closes(self, bot_config):
        client = FakeClient(collaborators=["bob"])
        _handle(client, bot_config, state="open", body="/close", commenter="bob", is_pull_request=True)
        assert client.names() == ["close_pr"]

    def test_rejection_message_says_reopen(self, client, bot_config):
        _handle(client, bot_config, state="open", body="/close", commenter="mallory")
        assert client.names() == ["create_issue_comment"]
        assert REJECTION in client.calls[-1][2]
        assert "@mallory" in client.calls[-1][2]

    def test_close_on_closed_item_is_noop(self, client, bot_config):
        _handle(client, bot_config, state="closed", body="/close")
        assert client.calls == []

    @pytest.mark.parametrize("body", ["/closed", "/close now", "/closeout"])
    def test_non_matching_text_is_noop(self, client, bot_config, body):
        _handle(client, bot_config, state="open", body=body)
        assert client.calls == []


class TestRemoteErrors:
    def test_state_change_failure_propagates_without_comment(self, bot_config, mocker):
        client = FakeClient()
        mocker.patch.object(client, "close_issue", side_effect=RemoteAPIError("boom", status=502))
        with pytest.raises(RemoteAPIError):
            _handle(client, bot_config, state="open", body="/close")
        assert client.calls == []

    def test_collaborator_lookup_failure_propagates(self, bot_config, mocker):
        client = FakeClient()
        mocker.patch.object(client, "is_collaborator", side_effect=RemoteAPIError("rate limited", status=403))
        with pytest.raises(RemoteAPIError):
            _handle(client, bot_config, state="closed", body="/reopen", commenter="bob")
        assert client.calls == []


class TestHasPermission:
    def test_author_needs_no_lookup(self, client):
        assert LifecycleHandler(client).has_permission(INFO, "alice", "alice") is True
        assert client.calls == []

    def test_non_collaborator(self, client):
        assert LifecycleHandler(client).has_permission(INFO, "mallory", "alice") is False
        assert client.names(include_reads=True) == ["is_collaborator"]


def test_registers_single_issue_comment_handler(client):
    register = HandlerRegister()
    robot = LifecycleHandler(client)
    robot.register_event_handler(register)
    assert register.issue_comment_handlers == [robot.handle_issue_comment_event]


@pytest.mark.parametrize(
    "pattern, text, expected",
    [
        (REOPEN_RE, "/reopen", True),
        (REOPEN_RE, "/ReOpen \t", True),
        (REOPEN_RE, "/reopen\r\n", True),
        (REOPEN_RE, " /reopen", False),
        (CLOSE_RE, "/close", True),
        (CLOSE_RE, "text\n/CLOSE\n", True),
        (CLOSE_RE, "/close /reopen", False),
        (REOPEN_RE, "/reopen\u00a0", False),
        (CLOSE_RE, "/close\u3000", False),
    ],
)
def test_command_patterns(pattern, text, expected):
    assert bool(pattern.search(text)) is expected
