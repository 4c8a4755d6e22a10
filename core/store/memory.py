# core/store/memory.py
"""
Dict-backed store used by the test-suite and database-free demos.

Every coroutine yields to the event loop once before touching state, so
interleavings look like they would against a remote backend. Between that
yield and the return, each operation is atomic.
"""
import asyncio
import itertools
import uuid

from django.utils import timezone

from core.constants import FULL_TIME, WORKER
from core.domain import (
    Conversation,
    EmployerProfile,
    Job,
    Message,
    Review,
    SavedWorker,
    UserAccount,
    WorkerProfile,
)
from core.exceptions import ConflictError, NotFoundError

from .base import MarketplaceStore

WORKER_DEFAULTS = {
    'name': '',
    'hourly_rate_min': 1,
    'hourly_rate_max': 3,
    'availability_hours': 8,
    'availability_type': FULL_TIME,
}


class MemoryStore(MarketplaceStore):

    def __init__(self, feed=None, clock=None):
        super().__init__(feed)
        self.clock = clock or timezone.now
        self._ids = itertools.count(1)
        self.users = {}
        self.workers = {}
        self.employers = {}
        self.jobs = {}
        self.reviews = {}
        self.saved = {}
        self.conversations = {}
        self.messages = {}

    def _next_id(self):
        return str(next(self._ids))

    @staticmethod
    async def _yield():
        await asyncio.sleep(0)

    @staticmethod
    def _lookup(table, key, label):
        try:
            return table[str(key)]
        except KeyError:
            raise NotFoundError(f"{label} not found.", detail=f"{label} {key!r}") from None

    # ----- users -----
    def add_user(self, email, user_type=WORKER, user_id=None):
        """Register an account directly (authentication is outside the store)."""
        user = UserAccount(
            id=str(user_id or uuid.uuid4()),
            email=email,
            user_type=user_type,
            created_at=self.clock(),
        )
        self.users[user.id] = user
        return user

    async def get_user(self, user_id):
        await self._yield()
        return self._lookup(self.users, user_id, 'User')

    # ----- workers -----
    async def get_worker(self, worker_id):
        await self._yield()
        return self._lookup(self.workers, worker_id, 'Worker')

    async def get_worker_by_user(self, user_id):
        await self._yield()
        for worker in self.workers.values():
            if worker.user_id == str(user_id):
                return worker
        raise NotFoundError("Worker profile not found.", detail=f"user {user_id!r}")

    async def get_workers(self, worker_ids):
        await self._yield()
        wanted = {str(worker_id) for worker_id in worker_ids}
        return [worker for worker_id, worker in self.workers.items() if worker_id in wanted]

    async def create_worker(self, user_id, **fields):
        await self._yield()
        values = {**WORKER_DEFAULTS, 'last_active': self.clock(), **fields}
        worker = WorkerProfile(id=self._next_id(), user_id=str(user_id), **values)
        self.workers[worker.id] = worker
        return worker

    async def update_worker(self, worker_id, **changes):
        await self._yield()
        worker = self._lookup(self.workers, worker_id, 'Worker').with_changes(**changes)
        self.workers[worker.id] = worker
        return worker

    async def query_workers(self, query):
        await self._yield()
        return query.apply(list(self.workers.values()))

    # ----- employers -----
    async def get_employer(self, employer_id):
        await self._yield()
        return self._lookup(self.employers, employer_id, 'Employer')

    async def get_employer_by_user(self, user_id):
        await self._yield()
        for employer in self.employers.values():
            if employer.user_id == str(user_id):
                return employer
        raise NotFoundError("Employer profile not found.", detail=f"user {user_id!r}")

    async def create_employer(self, user_id, **fields):
        await self._yield()
        values = {'company_name': '', **fields}
        employer = EmployerProfile(id=self._next_id(), user_id=str(user_id), created_at=self.clock(), **values)
        self.employers[employer.id] = employer
        return employer

    async def update_employer(self, employer_id, **changes):
        await self._yield()
        employer = self._lookup(self.employers, employer_id, 'Employer').with_changes(**changes)
        self.employers[employer.id] = employer
        return employer

    # ----- jobs -----
    def _with_employer_name(self, job):
        employer = self.employers.get(job.employer_id)
        return job.with_changes(employer_name=employer.company_name if employer else '')

    async def get_job(self, job_id):
        await self._yield()
        return self._with_employer_name(self._lookup(self.jobs, job_id, 'Job'))

    async def query_jobs(self, query):
        await self._yield()
        return query.apply([self._with_employer_name(job) for job in self.jobs.values()])

    async def create_job(self, employer_id, **fields):
        await self._yield()
        self._lookup(self.employers, employer_id, 'Employer')
        job = Job(id=self._next_id(), employer_id=str(employer_id), created_at=self.clock(), **fields)
        self.jobs[job.id] = job
        return self._with_employer_name(job)

    async def update_job(self, job_id, **changes):
        await self._yield()
        job = self._lookup(self.jobs, job_id, 'Job').with_changes(**changes)
        self.jobs[job.id] = job
        return self._with_employer_name(job)

    async def delete_job(self, job_id):
        await self._yield()
        self._lookup(self.jobs, job_id, 'Job')
        del self.jobs[str(job_id)]

    # ----- reviews -----
    async def list_reviews(self, worker_id):
        await self._yield()
        reviews = [r for r in self.reviews.values() if r.worker_id == str(worker_id)]
        return sorted(reviews, key=lambda r: r.created_at, reverse=True)

    async def create_review(self, worker_id, employer_id, rating, comment):
        await self._yield()
        self._lookup(self.workers, worker_id, 'Worker')
        employer = self._lookup(self.employers, employer_id, 'Employer')
        review = Review(
            id=self._next_id(),
            worker_id=str(worker_id),
            employer_id=employer.id,
            employer_name=employer.company_name,
            rating=rating,
            comment=comment,
            created_at=self.clock(),
        )
        self.reviews[review.id] = review
        return review

    # ----- saved workers -----
    async def list_saved(self, employer_id):
        await self._yield()
        return [s for (employer, _), s in self.saved.items() if employer == str(employer_id)]

    async def add_saved(self, employer_id, worker_id):
        await self._yield()
        self._lookup(self.employers, employer_id, 'Employer')
        self._lookup(self.workers, worker_id, 'Worker')
        key = (str(employer_id), str(worker_id))
        if key in self.saved:
            raise ConflictError("Worker is already saved.", detail=f"saved pair {key}")
        saved = SavedWorker(id=self._next_id(), employer_id=key[0], worker_id=key[1], saved_at=self.clock())
        self.saved[key] = saved
        return saved

    async def remove_saved(self, employer_id, worker_id):
        await self._yield()
        return self.saved.pop((str(employer_id), str(worker_id)), None) is not None

    # ----- conversations -----
    def _summary(self, conversation, viewer_id=None):
        worker = self.workers.get(conversation.worker_id)
        employer = self.employers.get(conversation.employer_id)
        unread = 0
        if viewer_id is not None:
            unread = sum(
                1 for m in self.messages.values()
                if m.conversation_id == conversation.id and not m.is_read and m.sender_id != str(viewer_id)
            )
        return Conversation(
            id=conversation.id,
            worker_id=conversation.worker_id,
            employer_id=conversation.employer_id,
            worker_name=worker.name if worker else '',
            employer_name=employer.company_name if employer else '',
            last_message=conversation.last_message,
            last_message_at=conversation.last_message_at,
            unread_count=unread,
        )

    async def get_conversation(self, conversation_id):
        await self._yield()
        return self._summary(self._lookup(self.conversations, conversation_id, 'Conversation'))

    async def find_conversation(self, worker_id, employer_id):
        await self._yield()
        for conversation in self.conversations.values():
            if conversation.worker_id == str(worker_id) and conversation.employer_id == str(employer_id):
                return self._summary(conversation)
        return None

    async def create_conversation(self, worker_id, employer_id):
        await self._yield()
        self._lookup(self.workers, worker_id, 'Worker')
        self._lookup(self.employers, employer_id, 'Employer')
        for conversation in self.conversations.values():
            if conversation.worker_id == str(worker_id) and conversation.employer_id == str(employer_id):
                raise ConflictError("Conversation already exists.", detail=f"pair {worker_id}/{employer_id}")
        conversation = Conversation(id=self._next_id(), worker_id=str(worker_id), employer_id=str(employer_id))
        self.conversations[conversation.id] = conversation
        return self._summary(conversation)

    async def list_conversations(self, profile_id, user_type, viewer_id):
        await self._yield()
        attr = 'worker_id' if user_type == WORKER else 'employer_id'
        mine = [c for c in self.conversations.values() if getattr(c, attr) == str(profile_id)]
        active = sorted((c for c in mine if c.last_message_at), key=lambda c: c.last_message_at, reverse=True)
        # Conversations without messages go last, newest first.
        idle = [c for c in reversed(mine) if not c.last_message_at]
        return [self._summary(c, viewer_id) for c in active + idle]

    # ----- messages -----
    async def list_messages(self, conversation_id, since=None):
        await self._yield()
        self._lookup(self.conversations, conversation_id, 'Conversation')
        messages = [
            m for m in self.messages.values()
            if m.conversation_id == str(conversation_id) and (since is None or m.created_at >= since)
        ]
        return sorted(messages, key=lambda m: m.ordering)

    async def insert_message(self, conversation_id, sender_id, content):
        await self._yield()
        conversation = self._lookup(self.conversations, conversation_id, 'Conversation')
        message = Message(
            id=self._next_id(),
            conversation_id=conversation.id,
            sender_id=str(sender_id),
            content=content,
            created_at=self.clock(),
        )
        self.messages[message.id] = message
        self.conversations[conversation.id] = Conversation(
            id=conversation.id,
            worker_id=conversation.worker_id,
            employer_id=conversation.employer_id,
            last_message=content,
            last_message_at=message.created_at,
        )
        await self.feed.publish(message)
        return message

    async def mark_read(self, conversation_id, reader_id):
        await self._yield()
        count = 0
        for message_id, m in list(self.messages.items()):
            if m.conversation_id == str(conversation_id) and not m.is_read and m.sender_id != str(reader_id):
                self.messages[message_id] = Message(
                    id=m.id,
                    conversation_id=m.conversation_id,
                    sender_id=m.sender_id,
                    content=m.content,
                    created_at=m.created_at,
                    is_read=True,
                )
                count += 1
        return count

    async def count_unread(self, user_id):
        await self._yield()
        user_id = str(user_id)
        mine = {
            c.id for c in self.conversations.values()
            if getattr(self.workers.get(c.worker_id), 'user_id', None) == user_id
            or getattr(self.employers.get(c.employer_id), 'user_id', None) == user_id
        }
        return sum(
            1 for m in self.messages.values()
            if m.conversation_id in mine and not m.is_read and m.sender_id != user_id
        )
