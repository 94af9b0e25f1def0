"""
Shared fixtures for cloudbits tests.
"""
import pytest
from unittest.mock import MagicMock

from cloudbits.config import ClientConfig, reset_settings
from cloudbits.mappings import EventMappingTable
from cloudbits.notifications import NotificationManager

SUBSCRIPTIONS_URL = "https://api.test/subscriptions"
CALLBACK_URL = "https://hooks.test/cloudbits"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the developer's environment and .env file out of the tests."""
    for name in (
        "CLOUDBITS_TOKEN",
        "CLOUDBITS_API_URL",
        "CLOUDBITS_SUBSCRIPTIONS_URL",
        "CLOUDBITS_CALLBACK_URL",
        "CLOUDBITS_CALLBACK_AUTH_TOKEN",
        "CLOUDBITS_TIMEOUT",
        "CLOUDBITS_EVENT_MAPPINGS_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def config():
    return ClientConfig(
        auth_token="T1",
        subscriptions_url=SUBSCRIPTIONS_URL,
        callback_url=CALLBACK_URL,
    )


@pytest.fixture
def transport():
    """Transport double recording every call."""
    mock = MagicMock()
    mock.call.return_value = {}
    return mock


@pytest.fixture
def event_mappings():
    return EventMappingTable({"bit1": "key-1", "press": "button-press"})


@pytest.fixture
def manager(config, transport, event_mappings):
    return NotificationManager(config=config, transport=transport, event_mappings=event_mappings)
