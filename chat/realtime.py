# chat/realtime.py
"""
Live message feed on top of the Channels layer.

Each conversation has one layer group. Stores publish a `chat.message`
event to it after a message row is persisted; readers get an explicit
`Subscription` handle that they iterate and `cancel()`. The websocket
consumer reads through a `chat.messaging.ConversationView`, which holds
one of these subscriptions.
"""
import asyncio
import logging

from channels.layers import get_channel_layer
from django.utils.dateparse import parse_datetime
from redis.exceptions import RedisError

from core.conf import marketplace_setting
from core.domain import Message
from core.exceptions import TransientStoreError

logger = logging.getLogger(__name__)

MESSAGE_EVENT = 'chat.message'

TRANSIENT_ERRORS = (OSError, asyncio.TimeoutError, RedisError)


def group_name(conversation_id):
    return f'conversation_{conversation_id}'


def message_event(message):
    return {
        'type': MESSAGE_EVENT,
        'message_id': message.id,
        'conversation_id': message.conversation_id,
        'sender_id': message.sender_id,
        'content': message.content,
        'created_at': message.created_at.isoformat(),
        'is_read': message.is_read,
    }


def message_from_event(event):
    return Message(
        id=str(event['message_id']),
        conversation_id=str(event['conversation_id']),
        sender_id=str(event['sender_id']),
        content=event['content'],
        created_at=parse_datetime(event['created_at']),
        is_read=bool(event.get('is_read', False)),
    )


class Subscription:
    """
    Cancellable async iterator over messages pushed to one conversation.

    Nothing is delivered once `cancel()` has been called, even if events
    were already buffered in the layer. A dropped layer connection is
    retried with exponential backoff; after a successful resubscribe the
    `on_resubscribe` coroutine is awaited so the owner can back-fill
    anything pushed while the connection was down.
    """

    def __init__(self, layer, conversation_id, on_resubscribe=None, attempts=None, base_delay=None):
        self.layer = layer
        self.conversation_id = str(conversation_id)
        self.group = group_name(conversation_id)
        self.on_resubscribe = on_resubscribe
        self.attempts = attempts if attempts is not None else marketplace_setting('RESUBSCRIBE_ATTEMPTS')
        self.base_delay = base_delay if base_delay is not None else marketplace_setting('RESUBSCRIBE_BASE_DELAY')
        self.channel = None
        self.closed = False
        self.reconnects = 0

    async def start(self):
        try:
            await self._join()
        except TRANSIENT_ERRORS as exc:
            raise TransientStoreError(
                "Live messages are unavailable right now.", detail=str(exc)
            ) from exc
        logger.debug("Subscribed %s to %s", self.channel, self.group)
        return self

    async def _join(self):
        self.channel = await self.layer.new_channel()
        await self.layer.group_add(self.group, self.channel)

    def __aiter__(self):
        return self

    async def __anext__(self):
        while True:
            if self.closed:
                raise StopAsyncIteration
            try:
                event = await self.layer.receive(self.channel)
            except TRANSIENT_ERRORS as exc:
                if self.closed:
                    raise StopAsyncIteration
                logger.warning("Live feed for %s dropped: %s", self.group, exc)
                await self._resubscribe()
                continue
            if self.closed:
                raise StopAsyncIteration
            if event.get('type') != MESSAGE_EVENT:
                continue
            return message_from_event(event)

    async def _leave(self, channel):
        try:
            await self.layer.group_discard(self.group, channel)
        except TRANSIENT_ERRORS as exc:
            # Group membership expires on its own.
            logger.warning("Could not remove %s from %s: %s", channel, self.group, exc)

    async def _resubscribe(self):
        if self.channel is not None:
            await self._leave(self.channel)
        last_error = None
        for attempt in range(self.attempts):
            await asyncio.sleep(self.base_delay * (2 ** attempt))
            if self.closed:
                return
            try:
                await self._join()
            except TRANSIENT_ERRORS as exc:
                last_error = exc
                logger.warning("Resubscribe attempt %s/%s for %s failed: %s",
                               attempt + 1, self.attempts, self.group, exc)
                continue
            self.reconnects += 1
            logger.info("Resubscribed to %s after %s attempt(s)", self.group, attempt + 1)
            if self.on_resubscribe is not None:
                await self.on_resubscribe()
            return
        raise TransientStoreError(
            "Lost connection to live messages.", detail=str(last_error)
        )

    async def cancel(self):
        if self.closed:
            return
        self.closed = True
        if self.channel is None:
            return
        await self._leave(self.channel)
        logger.debug("Unsubscribed %s from %s", self.channel, self.group)

    close = cancel

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.cancel()


class MessageFeed:
    """Publish/subscribe keyed by conversation id."""

    def __init__(self, layer=None):
        self._layer = layer

    @property
    def layer(self):
        if self._layer is None:
            self._layer = get_channel_layer()
        return self._layer

    async def publish(self, message):
        try:
            await self.layer.group_send(group_name(message.conversation_id), message_event(message))
        except TRANSIENT_ERRORS as exc:
            # The row is already persisted; open views pick it up on their
            # echo-timeout re-fetch or on resubscribe back-fill.
            logger.error("Failed to push message %s to %s: %s",
                         message.id, group_name(message.conversation_id), exc)

    async def subscribe(self, conversation_id, on_resubscribe=None):
        subscription = Subscription(self.layer, conversation_id, on_resubscribe=on_resubscribe)
        return await subscription.start()
