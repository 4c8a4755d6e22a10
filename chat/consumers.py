# chat/consumers.py
import asyncio
import contextlib
import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from core.exceptions import MarketplaceError
from core.serializers import MessageSerializer
from core.store import get_store
from users.session import MarketplaceSession

from .messaging import ConversationView
from .services import ConversationService

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncWebsocketConsumer):
    """
    One socket per open conversation. The socket owns a ConversationView:
    everything the view appends is forwarded as a `message` frame, and
    `{"type": "message", "message": "..."}` frames are sent through it.
    """

    session = None
    view = None
    forwarder = None

    async def connect(self):
        self.conversation_id = self.scope['url_route']['kwargs']['conversation_id']
        self.user = self.scope.get('user')

        if not self.user or not self.user.is_authenticated:
            logger.info(f"Unauthenticated user tried to connect to conversation {self.conversation_id}")
            await self.close()
            return

        try:
            self.session = await MarketplaceSession.start(get_store(), self.user.pk)
            user = self.session.current_user()
            await ConversationService(self.session.store).get_for_participant(
                self.conversation_id, self.session.current_profile().id, user.user_type
            )
        except MarketplaceError as exc:
            logger.info(f"User {self.user.pk} denied access to conversation {self.conversation_id}: {exc.user_message}")
            await self.close()
            return

        await self.accept()
        self.view = ConversationView(self.session.store, user.id)
        try:
            await self.view.open(self.conversation_id)
        except MarketplaceError as exc:
            await self.send_error(exc)
            await self.close()
            return
        self.forwarder = asyncio.create_task(self.forward(self.view))
        logger.debug(f"User {user.id} connected to conversation {self.conversation_id}")

    async def disconnect(self, close_code):
        if self.forwarder is not None:
            self.forwarder.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self.forwarder
        if self.view is not None:
            await self.view.close()
        if self.session is not None:
            await self.session.end()
        logger.debug(f"Socket for conversation {getattr(self, 'conversation_id', None)} closed ({close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or '')
        except ValueError:
            await self.send(text_data=json.dumps({'type': 'error', 'message': 'Invalid JSON received'}))
            return

        if data.get('type') != 'message':
            return
        try:
            await self.view.send(data.get('message', ''))
        except MarketplaceError as exc:
            await self.send_error(exc)

    async def forward(self, view):
        async for message in view:
            await self.send(text_data=json.dumps({
                'type': 'message',
                'message': MessageSerializer(message).data,
            }))

    async def send_error(self, exc):
        await self.send(text_data=json.dumps({'type': 'error', 'message': exc.user_message}))
