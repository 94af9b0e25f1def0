"""
Cloudbits - Client for littleBits cloudBit event subscriptions.
"""

__version__ = "0.1.0"

from .config import ClientConfig, Settings, get_settings
from .exceptions import (
    CloudbitsError,
    ConfigurationError,
    InvalidParameterError,
    TransportError,
)
from .mappings import DEFAULT_EVENT_KEYS, EventMappingTable, load_mapping_file
from .models import EventRef, Subscription
from .notifications import NotificationManager
from .transport import ApiRequest, HttpTransport

__all__ = [
    "__version__",
    # Configuration
    "ClientConfig",
    "Settings",
    "get_settings",
    # Errors
    "CloudbitsError",
    "ConfigurationError",
    "InvalidParameterError",
    "TransportError",
    # Event mappings
    "DEFAULT_EVENT_KEYS",
    "EventMappingTable",
    "load_mapping_file",
    # Models
    "EventRef",
    "Subscription",
    # Clients
    "NotificationManager",
    "ApiRequest",
    "HttpTransport",
]
