"""
floor/realtime.py
=====================================================================================
Change notifications for watched relations, carried over the Channels layer.

Writers publish a ``ChangeEvent`` to the relation's group; readers either join
the group from a consumer (see ``floor.consumers``) or iterate a ``ChangeFeed``:

    async with ChangeFeed("tables") as feed:
        async for event in feed:
            ...
=====================================================================================
"""

import logging
from dataclasses import dataclass, field

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

MESSAGE_TYPE = "table.change"
OPERATIONS = ("INSERT", "UPDATE", "DELETE")


def group_for(relation):
    return f"floor.{relation}"


@dataclass(frozen=True)
class ChangeEvent:
    operation: str
    table: str
    schema: str = "public"
    payload: dict = field(default_factory=dict)

    def to_message(self):
        return {
            "type": MESSAGE_TYPE,
            "operation": self.operation,
            "schema": self.schema,
            "table": self.table,
            "payload": self.payload,
        }

    @classmethod
    def from_message(cls, message):
        return cls(
            operation=message.get("operation", "UPDATE"),
            schema=message.get("schema", "public"),
            table=message["table"],
            payload=message.get("payload") or {},
        )


def publish(event, layer=None):
    """Send ``event`` to its relation group from synchronous code."""
    layer = layer or get_channel_layer()
    if not layer:
        logger.warning("⚠️ Channels layer not found. Skipping change notification.")
        return

    async_to_sync(layer.group_send)(group_for(event.table), event.to_message())
    logger.debug(f"📣 {event.operation} on {event.table} published.")


class ChangeFeed:
    """Subscription to one relation's change events on a private channel."""

    def __init__(self, relation, layer=None):
        self.relation = relation
        self.group = group_for(relation)
        self.layer = layer or get_channel_layer()
        self.channel = None

    async def __aenter__(self):
        self.channel = await self.layer.new_channel()
        await self.layer.group_add(self.group, self.channel)
        logger.info(f"Subscribed {self.channel} to {self.group}")
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.layer.group_discard(self.group, self.channel)
        self.channel = None

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.channel is None:
            raise StopAsyncIteration
        while True:
            message = await self.layer.receive(self.channel)
            if message.get("type") == MESSAGE_TYPE:
                return ChangeEvent.from_message(message)
            logger.debug(f"Ignoring message of type {message.get('type')!r} on {self.group}")
