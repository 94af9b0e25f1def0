"""
Subscriptions to events generated by littleBits cloudBit devices.

Usage:
    from cloudbits import NotificationManager

    with NotificationManager(token="...") as manager:
        manager.subscribe_to_notifications(
            publisher_id="00e04c0379bb",
            events=["amplitude:delta:ignite"],
        )
        for subscription in manager.list_subscriptions("00e04c0379bb"):
            print(subscription.subscriber_id, subscription.publisher_events)
"""
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import urlencode

from pydantic import ValidationError

from .config import ClientConfig, get_settings
from .exceptions import InvalidParameterError, TransportError
from .mappings import EventMappingTable, default_event_mappings
from .models import EventRef, Subscription, SubscriptionCreate, SubscriptionDelete
from .transport import ApiRequest, HttpTransport, Transport

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}

EventLike = Union[EventRef, Mapping[str, Any], str]


class NotificationManager:
    """
    Manages subscriptions to events generated by littleBits devices.

    Each operation validates its arguments, then performs exactly one call on
    the transport. Errors raised by the transport propagate unchanged.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        event_mappings: Optional[EventMappingTable] = None,
    ):
        """
        Initialize the manager.

        Args:
            token: cloudBit access token. Falls back to the configured default.
            config: Explicit client configuration. Built from settings if omitted.
            transport: Transport to send requests with. An HttpTransport using
                the resolved token is created if omitted.
            event_mappings: Event name to key table used when listing.
        """
        settings = None
        if config is None:
            settings = get_settings()
            config = settings.client_config(token)
        elif token:
            config = config.model_copy(update={"auth_token": token})
        self.config = config

        if event_mappings is None:
            settings = settings or get_settings()
            event_mappings = default_event_mappings(settings)
        self.event_mappings = event_mappings

        if transport is None:
            settings = settings or get_settings()
            transport = HttpTransport(token=config.auth_token, timeout=settings.timeout)
            self._owns_transport = True
        else:
            self._owns_transport = False
        self.transport = transport

    def close(self):
        """Close the transport if this manager created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _subscriber_id(self, subscriber_id: Optional[str]) -> str:
        return subscriber_id if subscriber_id else self.config.default_subscriber_id

    def list_subscriptions(self, publisher_id: str) -> List[Subscription]:
        """
        List the subscriptions that exist for a publisher device.

        Every event of every returned subscription gets its ``key`` set from
        the event mapping table (None when the name is unknown). The transport
        response itself is left untouched.

        Args:
            publisher_id: Id of the publisher device

        Returns:
            Subscriptions in the order returned by the service

        Raises:
            InvalidParameterError: If publisher_id is empty
            TransportError: If the call fails or the response is not a subscription list
        """
        if not publisher_id:
            raise InvalidParameterError(
                "NotificationManager.list_subscriptions : publisher_id cannot be null or empty"
            )

        url = f"{self.config.subscriptions_url}?{urlencode({'publisher_id': publisher_id})}"
        logger.debug(f"Listing subscriptions for publisher {publisher_id}")
        response = self.transport.call(ApiRequest(url=url))

        if response is None:
            response = []
        if not isinstance(response, list):
            raise TransportError(
                f"GET {url} returned a malformed subscription list: expected an array, "
                f"got {type(response).__name__}"
            )

        subscriptions = []
        for item in response:
            try:
                subscription = Subscription.model_validate(item)
            except ValidationError as e:
                raise TransportError(f"GET {url} returned a malformed subscription list: {e}") from e
            if subscription.publisher_events:
                subscription.publisher_events = [
                    event.model_copy(update={"key": self.event_mappings.lookup(event.name)})
                    for event in subscription.publisher_events
                ]
            subscriptions.append(subscription)
        return subscriptions

    def subscribe_to_notifications(
        self,
        publisher_id: str,
        events: Sequence[EventLike],
        subscriber_id: Optional[str] = None,
    ) -> Any:
        """
        Subscribe to events of a publisher device.

        Args:
            publisher_id: Id of the device to monitor
            events: Events to subscribe to. Strings are taken as event names.
            subscriber_id: Device id or callback URL to send events to.
                Defaults to the configured callback URL.

        Returns:
            The subscription as returned by the service

        Raises:
            InvalidParameterError: If publisher_id or events is empty
        """
        if not publisher_id:
            raise InvalidParameterError(
                "NotificationManager.subscribe_to_notifications : publisher_id cannot be null or empty"
            )
        if not events:
            raise InvalidParameterError(
                "NotificationManager.subscribe_to_notifications : events cannot be null or empty"
            )
        if isinstance(events, str):
            raise InvalidParameterError(
                "NotificationManager.subscribe_to_notifications : events must be a sequence of events, not a string"
            )

        payload = SubscriptionCreate(
            publisher_id=publisher_id,
            subscriber_id=self._subscriber_id(subscriber_id),
            publisher_events=[_event_payload(event) for event in events],
        )
        logger.debug(f"Subscribing to {len(events)} events of publisher {publisher_id}")
        return self.transport.call(
            ApiRequest(
                url=self.config.subscriptions_url,
                method="POST",
                headers=dict(JSON_HEADERS),
                body=payload.model_dump_json(),
            )
        )

    def delete_subscription(self, publisher_id: str, subscriber_id: Optional[str] = None) -> Any:
        """
        Delete the subscription of a subscriber to a publisher device.

        Args:
            publisher_id: Id of the monitored device
            subscriber_id: Device id or callback URL of the subscriber.
                Defaults to the configured callback URL.

        Returns:
            The service response

        Raises:
            InvalidParameterError: If publisher_id is empty
        """
        if not publisher_id:
            raise InvalidParameterError(
                "NotificationManager.delete_subscription : publisher_id cannot be null or empty"
            )

        payload = SubscriptionDelete(
            subscriber_id=self._subscriber_id(subscriber_id),
            publisher_id=publisher_id,
        )
        logger.debug(f"Deleting subscription to publisher {publisher_id}")
        return self.transport.call(
            ApiRequest(
                url=self.config.subscriptions_url,
                method="DELETE",
                headers=dict(JSON_HEADERS),
                body=payload.model_dump_json(),
            )
        )


def _event_payload(event: EventLike) -> Dict[str, Any]:
    if isinstance(event, str):
        return {"name": event}
    if isinstance(event, EventRef):
        return event.model_dump(exclude_none=True)
    return {k: v for k, v in event.items() if not (k == "key" and v is None)}
