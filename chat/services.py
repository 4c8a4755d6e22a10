# chat/services.py
import logging

from core.constants import WORKER
from core.exceptions import ConflictError, NotFoundError
from core.forms import clean_or_raise
from core.store import get_store

from .forms import MessageForm

logger = logging.getLogger(__name__)


class ConversationService:
    """Conversation lookup and message persistence."""

    def __init__(self, store=None):
        self.store = store or get_store()

    async def get_or_create(self, worker_id, employer_id):
        """
        Return the single conversation of a worker-employer pair.

        Two callers racing on a new pair both end up with the same row: the
        loser of the insert gets ConflictError and re-reads the winner's.
        """
        conversation = await self.store.find_conversation(worker_id, employer_id)
        if conversation is not None:
            return conversation
        try:
            conversation = await self.store.create_conversation(worker_id, employer_id)
        except ConflictError as exc:
            conversation = await self.store.find_conversation(worker_id, employer_id)
            if conversation is None:
                raise NotFoundError(
                    "Could not open the conversation. Please try again.", detail=exc.detail
                ) from exc
            return conversation
        logger.info(f"Started conversation {conversation.id} between worker {worker_id} and employer {employer_id}")
        return conversation

    async def get_for_participant(self, conversation_id, profile_id, user_type):
        """The conversation, if `profile_id` is its worker or employer side. Others get NotFoundError."""
        conversation = await self.store.get_conversation(conversation_id)
        side = conversation.worker_id if user_type == WORKER else conversation.employer_id
        if side != str(profile_id):
            raise NotFoundError("Conversation not found.", detail=f"{profile_id} is not in {conversation_id}")
        return conversation

    async def list_for(self, profile_id, user_type, viewer_id):
        return await self.store.list_conversations(profile_id, user_type, viewer_id)

    async def history(self, conversation_id, since=None):
        return await self.store.list_messages(conversation_id, since=since)

    async def send_message(self, conversation_id, sender_id, content):
        """Validate, persist and publish a message. Nothing is written when validation fails."""
        data = clean_or_raise(MessageForm(data={'content': content}))
        return await self.store.insert_message(conversation_id, sender_id, data['content'])

    async def mark_read(self, conversation_id, reader_id):
        return await self.store.mark_read(conversation_id, reader_id)

    async def unread_total(self, user_id):
        return await self.store.count_unread(user_id)
