# users/session.py
"""
Per-login marketplace context.

A `MarketplaceSession` is created at login with `await
MarketplaceSession.start(store, user_id)` and passed explicitly to the
components that need the current user, their profile or the saved-worker
ids. It is the only writer of that state. After `end()` every operation
raises `SessionClosed`.
"""
import logging

from asgiref.sync import sync_to_async

from core.exceptions import MarketplaceError, SessionClosed, ValidationError
from core.storage import save_avatar
from workers.saved import SavedWorkerManager

from .celery_tasks import delete_avatar_file
from .forms import EmployerProfileForm, WorkerProfileForm

logger = logging.getLogger(__name__)


class MarketplaceSession:

    def __init__(self, store, user, worker_profile=None, employer_profile=None, saved=None):
        self.store = store
        self._user = user
        self._worker = worker_profile
        self._employer = employer_profile
        self._saved = saved
        self._inbox = None
        self.closed = False

    @classmethod
    async def start(cls, store, user_id):
        user = await store.get_user(user_id)
        if user.is_employer:
            employer = await store.get_employer_by_user(user.id)
            saved = SavedWorkerManager(store, employer.id)
            await saved.reload()
            session = cls(store, user, employer_profile=employer, saved=saved)
        else:
            worker = await store.get_worker_by_user(user.id)
            session = cls(store, user, worker_profile=worker)
        logger.info(f"Session started for {user.email} ({user.user_type})")
        return session

    async def end(self):
        if self.closed:
            return
        self.closed = True
        if self._inbox is not None:
            await self._inbox.teardown()
            self._inbox = None
        logger.info(f"Session ended for {self._user.email}")

    def _check_open(self):
        if self.closed:
            raise SessionClosed()

    def require_worker(self):
        self._check_open()
        if self._worker is None:
            raise ValidationError("You must be logged in as a worker")
        return self._worker

    def require_employer(self):
        self._check_open()
        if self._employer is None:
            raise ValidationError("You must be logged in as an employer")
        return self._employer

    # ----- identity -----
    def current_user(self):
        self._check_open()
        return self._user

    def current_worker_profile(self):
        self._check_open()
        return self._worker

    def current_employer_profile(self):
        self._check_open()
        return self._employer

    def current_profile(self):
        self._check_open()
        return self._employer if self._user.is_employer else self._worker

    # ----- profile edits -----
    async def update_worker_profile(self, **partial):
        """Validate and persist a partial worker profile update. The held profile changes only on success."""
        worker = self.require_worker()
        changes = WorkerProfileForm.validate_changes(worker, partial)
        if not changes:
            return worker
        updated = await self.store.update_worker(worker.id, **changes)
        self._worker = updated
        return updated

    async def update_employer_profile(self, **partial):
        employer = self.require_employer()
        changes = EmployerProfileForm.validate_changes(employer, partial)
        if not changes:
            return employer
        updated = await self.store.update_employer(employer.id, **changes)
        self._employer = updated
        return updated

    async def upload_avatar(self, upload):
        """Store a new avatar, point the profile at it and queue removal of the old file."""
        self._check_open()
        profile = self.current_profile()
        url = await sync_to_async(save_avatar)(self._user.id, upload)
        try:
            if self._user.is_employer:
                self._employer = await self.store.update_employer(profile.id, avatar=url)
            else:
                self._worker = await self.store.update_worker(profile.id, avatar=url)
        except MarketplaceError as exc:
            logger.warning(f"Avatar update failed for user {self._user.id}, discarding {url}: {exc.detail or exc}")
            await sync_to_async(delete_avatar_file.delay)(url)
            raise
        if profile.avatar and profile.avatar != url:
            await sync_to_async(delete_avatar_file.delay)(profile.avatar)
        return url

    # ----- saved workers -----
    @property
    def saved_worker_ids(self):
        self._check_open()
        return self._saved.saved_ids if self._saved is not None else frozenset()

    async def save_worker(self, worker_id):
        self.require_employer()
        await self._saved.save(worker_id)

    async def unsave_worker(self, worker_id):
        self.require_employer()
        await self._saved.unsave(worker_id)

    def is_worker_saved(self, worker_id):
        self._check_open()
        return self._saved is not None and self._saved.is_saved(worker_id)

    async def saved_workers(self):
        self.require_employer()
        return await self._saved.list_saved()

    # ----- messaging -----
    def inbox(self):
        """The session's Inbox. It is torn down by end()."""
        self._check_open()
        if self._inbox is None:
            from chat.messaging import Inbox

            self._inbox = Inbox.for_session(self)
        return self._inbox
