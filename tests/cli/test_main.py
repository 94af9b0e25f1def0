"""Tests for the cloudbits-notify CLI."""

import json
from unittest.mock import MagicMock, patch

import click
import pytest
from typer.testing import CliRunner

from cloudbits.cli.main import app
from cloudbits.exceptions import InvalidParameterError, TransportError
from cloudbits.models import Subscription


runner = CliRunner()


def strip_ansi(text: str) -> str:
    """Strip ANSI escape codes from text."""
    return click.unstyle(text)


@pytest.fixture
def manager():
    """Patch NotificationManager in the CLI and yield the instance it returns."""
    with patch("cloudbits.cli.main.NotificationManager") as manager_cls:
        instance = MagicMock()
        manager_cls.return_value.__enter__.return_value = instance
        instance.manager_cls = manager_cls
        yield instance


class TestList:

    def test_prints_subscriptions(self, manager):
        manager.list_subscriptions.return_value = [
            Subscription.model_validate(
                {"publisher_id": "dev-1", "subscriber_id": "dev-2", "publisher_events": [{"name": "amplitude", "key": "amplitude"}]}
            ),
        ]

        result = runner.invoke(app, ["list", "dev-1", "--token", "T1"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [
            {"publisher_id": "dev-1", "subscriber_id": "dev-2", "publisher_events": [{"name": "amplitude", "key": "amplitude"}]}
        ]
        manager.manager_cls.assert_called_once_with(token="T1")
        manager.list_subscriptions.assert_called_once_with("dev-1")

    def test_reports_transport_error(self, manager):
        manager.list_subscriptions.side_effect = TransportError("HTTP 401", status_code=401)

        result = runner.invoke(app, ["list", "dev-1"])

        assert result.exit_code == 1
        assert "Transport_Error" in result.output


class TestSubscribe:

    def test_subscribes_to_events(self, manager):
        manager.subscribe_to_notifications.return_value = {"publisher_id": "dev-1"}

        result = runner.invoke(
            app, ["subscribe", "dev-1", "amplitude:delta:ignite", "amplitude", "-s", "dev-2"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"publisher_id": "dev-1"}
        manager.subscribe_to_notifications.assert_called_once_with(
            publisher_id="dev-1",
            events=["amplitude:delta:ignite", "amplitude"],
            subscriber_id="dev-2",
        )

    def test_reports_invalid_parameter(self, manager):
        manager.subscribe_to_notifications.side_effect = InvalidParameterError("events cannot be null or empty")

        result = runner.invoke(app, ["subscribe", "dev-1", "x"])

        assert result.exit_code == 1
        assert "Invalid_Parameter" in result.output


class TestUnsubscribe:

    def test_deletes_subscription(self, manager):
        manager.delete_subscription.return_value = [1]

        result = runner.invoke(app, ["unsubscribe", "dev-1"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == [1]
        manager.delete_subscription.assert_called_once_with("dev-1", subscriber_id=None)


class TestEventsAndVersion:

    def test_events_lists_default_table(self):
        result = runner.invoke(app, ["events"])

        assert result.exit_code == 0
        assert "amplitude:delta:ignite" in result.stdout
        assert "ignite" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "cloudbits v" in result.stdout

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        output = strip_ansi(result.stdout)

        assert result.exit_code == 0
        for command in ("list", "subscribe", "unsubscribe", "events", "version"):
            assert command in output
