"""
Pydantic models for cloudBit subscriptions.

Field names match the wire format of the subscriptions endpoint (snake_case).
Models returned by the service keep any extra fields the service sends.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventRef(BaseModel):
    """A publisher event a subscriber is notified about."""
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., description="Event name as known to the cloudBit API.")
    key: Optional[str] = Field(
        default=None,
        description="Key from the event mapping table. Only populated on list.",
    )


class Subscription(BaseModel):
    """A subscription of a subscriber (device id or callback URL) to a publisher device."""
    model_config = ConfigDict(extra="allow")

    publisher_id: Optional[str] = None
    subscriber_id: Optional[str] = None
    publisher_events: Optional[List[EventRef]] = None


class SubscriptionCreate(BaseModel):
    """Request body for creating a subscription."""
    publisher_id: str
    subscriber_id: str
    publisher_events: List[Dict[str, Any]]


class SubscriptionDelete(BaseModel):
    """Request body for deleting a subscription."""
    subscriber_id: str
    publisher_id: str
