# chat/messaging.py
"""
Open-conversation state for one viewer.

A `ConversationView` goes CLOSED -> LOADING -> LIVE -> CLOSED. History is
loaded before the live subscription starts, the boundary between the two
is back-filled from the store, and every message is placed by
(created_at, id) no matter when it arrives. The view is also an async
iterator yielding messages in the order they were added to it.

`Inbox` owns the viewer's conversation summaries and at most one open view.
"""
import asyncio
import bisect
import contextlib
import enum
import logging
from datetime import timedelta

from core.conf import marketplace_setting
from core.constants import EMPLOYER
from core.exceptions import MarketplaceError, TransientStoreError, ValidationError

from .services import ConversationService

logger = logging.getLogger(__name__)


class ViewState(enum.Enum):
    CLOSED = 'closed'
    LOADING = 'loading'
    LIVE = 'live'


class ConversationView:

    def __init__(self, store, viewer_id, on_change=None, echo_timeout=None):
        self.store = store
        self.viewer_id = str(viewer_id)
        self.on_change = on_change
        self.echo_timeout = echo_timeout if echo_timeout is not None else marketplace_setting('MESSAGE_ECHO_TIMEOUT')
        self.service = ConversationService(store)
        self.state = ViewState.CLOSED
        self.conversation_id = None
        self.messages = []
        self.subscription = None
        self.error = None
        self._ids = set()
        self._pump = None
        self._queue = asyncio.Queue()
        self._echo_waiters = {}
        self._generation = 0

    # ----- lifecycle -----
    async def open(self, conversation_id):
        await self.close()
        generation = self._generation
        self.state = ViewState.LOADING
        self.conversation_id = str(conversation_id)
        self.messages = []
        self._ids = set()
        self._queue = asyncio.Queue()
        self.error = None

        try:
            history = await self.service.history(self.conversation_id)
        except MarketplaceError as exc:
            if generation == self._generation:
                self._fail(exc)
            raise
        if generation != self._generation:
            return self

        for message in history:
            self._insert(message)
        self.state = ViewState.LIVE

        try:
            subscription = await self.store.subscribe(self.conversation_id, on_resubscribe=self.backfill)
        except TransientStoreError as exc:
            if generation == self._generation:
                self._fail(exc)
            raise
        if generation != self._generation:
            await subscription.cancel()
            return self
        self.subscription = subscription
        self._pump = asyncio.create_task(self._run(subscription, generation))

        try:
            # Anything persisted between the history read and the subscribe.
            await self.backfill()
            await self.service.mark_read(self.conversation_id, self.viewer_id)
        except TransientStoreError as exc:
            # The view stays live; the next resubscribe or send re-fetches.
            logger.error(f"Could not finish opening conversation {self.conversation_id}: {exc.detail or exc}")
            self.error = exc
        logger.debug(f"Viewer {self.viewer_id} opened conversation {self.conversation_id}")
        return self

    async def close(self):
        self._generation += 1
        subscription, pump = self.subscription, self._pump
        self.subscription = None
        self._pump = None
        self.state = ViewState.CLOSED
        if subscription is not None:
            await subscription.cancel()
        if pump is not None and pump is not asyncio.current_task():
            pump.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await pump
        for waiter in self._echo_waiters.values():
            waiter.cancel()
        self._echo_waiters.clear()
        self._queue.put_nowait(None)

    def _fail(self, exc):
        self.error = exc
        self.state = ViewState.CLOSED
        self.conversation_id = None
        self._queue.put_nowait(None)

    # ----- inbound -----
    async def _run(self, subscription, generation):
        try:
            async for message in subscription:
                if generation != self._generation:
                    break
                await self._accept(message)
        except MarketplaceError as exc:
            logger.error(f"Live feed for conversation {self.conversation_id} lost: {exc.detail or exc}")
            if generation == self._generation:
                self._fail(exc)

    def _insert(self, message):
        if message.conversation_id != self.conversation_id or message.id in self._ids:
            return False
        self._ids.add(message.id)
        bisect.insort(self.messages, message, key=lambda m: m.ordering)
        self._queue.put_nowait(message)
        waiter = self._echo_waiters.get(message.id)
        if waiter is not None and not waiter.done():
            waiter.set_result(message)
        return True

    async def _accept(self, message):
        if self.state is not ViewState.LIVE or not self._insert(message):
            return
        if self.on_change is not None:
            await self.on_change(message)

    async def backfill(self):
        """
        Re-read from shortly before the newest message held and merge anything
        missing. The overlap covers rows committed with an earlier timestamp
        after a later message was already pushed; duplicates are dropped.
        """
        if self.state is not ViewState.LIVE:
            return
        generation = self._generation
        since = None
        if self.messages:
            since = self.messages[-1].created_at - timedelta(seconds=marketplace_setting('BACKFILL_OVERLAP'))
        rows = await self.service.history(self.conversation_id, since=since)
        if generation != self._generation:
            return
        for message in rows:
            await self._accept(message)

    # ----- outbound -----
    async def send(self, content):
        """
        Persist a message from the viewer. It is not appended here: it shows
        up through the live feed, or through a re-fetch if the push does not
        arrive within `echo_timeout` seconds.
        """
        if self.state is not ViewState.LIVE:
            raise ValidationError("Open a conversation before sending a message.")
        message = await self.service.send_message(self.conversation_id, self.viewer_id, content)
        if message.id in self._ids:
            return message

        waiter = asyncio.get_running_loop().create_future()
        self._echo_waiters[message.id] = waiter
        try:
            await asyncio.wait_for(waiter, self.echo_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"No live echo for message {message.id} after {self.echo_timeout}s, re-fetching")
            try:
                await self.backfill()
            except TransientStoreError as exc:
                logger.error(f"Re-fetch after send failed for conversation {self.conversation_id}: {exc.detail or exc}")
        finally:
            self._echo_waiters.pop(message.id, None)
        return message

    # ----- stream -----
    def __aiter__(self):
        return self

    async def __anext__(self):
        message = await self._queue.get()
        if message is None:
            raise StopAsyncIteration
        return message


class Inbox:
    """Conversation list of one viewer plus the conversation currently open."""

    def __init__(self, store, viewer_id, profile_id, user_type):
        self.store = store
        self.viewer_id = str(viewer_id)
        self.profile_id = str(profile_id)
        self.user_type = user_type
        self.service = ConversationService(store)
        self.summaries = []
        self.view = None
        self.error = None

    @classmethod
    def for_session(cls, session):
        user = session.current_user()
        profile = session.current_employer_profile() if user.user_type == EMPLOYER else session.current_worker_profile()
        return cls(session.store, user.id, profile.id, user.user_type)

    async def refresh(self, *_):
        """Reload summaries. On a store outage the previous list is kept."""
        try:
            self.summaries = await self.service.list_for(self.profile_id, self.user_type, self.viewer_id)
            self.error = None
        except TransientStoreError as exc:
            logger.error(f"Could not refresh conversations for {self.viewer_id}: {exc.detail or exc}")
            self.error = exc
        return self.summaries

    async def select(self, conversation_id):
        if self.view is None:
            self.view = ConversationView(self.store, self.viewer_id, on_change=self.refresh)
        await self.view.open(conversation_id)
        await self.refresh()
        return self.view

    async def start_conversation(self, worker_id, employer_id):
        conversation = await self.service.get_or_create(worker_id, employer_id)
        await self.refresh()
        return await self.select(conversation.id)

    async def send(self, content):
        if self.view is None:
            raise ValidationError("Open a conversation before sending a message.")
        return await self.view.send(content)

    async def teardown(self):
        if self.view is not None:
            await self.view.close()
            self.view = None
