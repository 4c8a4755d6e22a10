# core/store/base.py
"""
The persistence capability set every marketplace component talks to.

All methods are coroutines and return `core.domain` objects. Stores raise
only the `core.exceptions` taxonomy: `NotFoundError` for unknown ids,
`ConflictError` for uniqueness violations, `TransientStoreError` when the
backend is unreachable. Business rules (validation, filter semantics,
get-or-create policy) belong to the services, never to a store.
"""
from abc import ABC, abstractmethod

from chat.realtime import MessageFeed


class MarketplaceStore(ABC):

    def __init__(self, feed=None):
        self.feed = feed or MessageFeed()

    # ----- users -----
    @abstractmethod
    async def get_user(self, user_id):
        ...

    # ----- workers -----
    @abstractmethod
    async def get_worker(self, worker_id):
        ...

    @abstractmethod
    async def get_worker_by_user(self, user_id):
        ...

    @abstractmethod
    async def get_workers(self, worker_ids):
        """Return the existing workers among `worker_ids`, unknown ids are skipped."""

    @abstractmethod
    async def create_worker(self, user_id, **fields):
        ...

    @abstractmethod
    async def update_worker(self, worker_id, **changes):
        ...

    @abstractmethod
    async def query_workers(self, query):
        """Evaluate a `workers.query.WorkerQuery`."""

    # ----- employers -----
    @abstractmethod
    async def get_employer(self, employer_id):
        ...

    @abstractmethod
    async def get_employer_by_user(self, user_id):
        ...

    @abstractmethod
    async def create_employer(self, user_id, **fields):
        ...

    @abstractmethod
    async def update_employer(self, employer_id, **changes):
        ...

    # ----- jobs -----
    @abstractmethod
    async def get_job(self, job_id):
        ...

    @abstractmethod
    async def query_jobs(self, query):
        """Evaluate a `jobs.query.JobQuery`."""

    @abstractmethod
    async def create_job(self, employer_id, **fields):
        ...

    @abstractmethod
    async def update_job(self, job_id, **changes):
        ...

    @abstractmethod
    async def delete_job(self, job_id):
        ...

    async def list_jobs_by_employer(self, employer_id):
        from jobs.query import build_job_query

        return await self.query_jobs(build_job_query(employer_id=employer_id, active_only=False))

    # ----- reviews -----
    @abstractmethod
    async def list_reviews(self, worker_id):
        """Reviews of one worker, newest first."""

    @abstractmethod
    async def create_review(self, worker_id, employer_id, rating, comment):
        ...

    # ----- saved workers -----
    @abstractmethod
    async def list_saved(self, employer_id):
        ...

    @abstractmethod
    async def add_saved(self, employer_id, worker_id):
        """Persist the pair. Raises ConflictError when it already exists."""

    @abstractmethod
    async def remove_saved(self, employer_id, worker_id):
        """Delete the pair. Returns False when there was nothing to delete."""

    # ----- conversations -----
    @abstractmethod
    async def get_conversation(self, conversation_id):
        ...

    @abstractmethod
    async def find_conversation(self, worker_id, employer_id):
        """Return the conversation for the pair, or None."""

    @abstractmethod
    async def create_conversation(self, worker_id, employer_id):
        """Insert a conversation. Raises ConflictError when the pair already has one."""

    @abstractmethod
    async def list_conversations(self, profile_id, user_type, viewer_id):
        """Summaries for one participant, most recent first, with the viewer's unread count."""

    # ----- messages -----
    @abstractmethod
    async def list_messages(self, conversation_id, since=None):
        """Messages in ascending (created_at, id) order, optionally only those after `since`."""

    @abstractmethod
    async def insert_message(self, conversation_id, sender_id, content):
        """Persist a message, update the conversation snapshot, then publish it."""

    @abstractmethod
    async def mark_read(self, conversation_id, reader_id):
        """Mark every message not sent by `reader_id` as read. Returns the count."""

    @abstractmethod
    async def count_unread(self, user_id):
        ...

    # ----- feed -----
    async def subscribe(self, conversation_id, on_resubscribe=None):
        return await self.feed.subscribe(conversation_id, on_resubscribe=on_resubscribe)
