# workers/saved.py
"""
Saved-worker bookmarks of one employer.

`SavedWorkerManager` keeps an in-memory mirror of the saved worker ids so the
directory can render bookmark state without a round trip. Writes update the
mirror first and undo it when persistence fails. Saving is idempotent and
unsaving something that was never saved is a no-op.
"""
import logging

from core.exceptions import ConflictError, MarketplaceError

logger = logging.getLogger(__name__)


class SavedWorkerManager:

    def __init__(self, store, employer_id):
        self.store = store
        self.employer_id = str(employer_id)
        self._ids = set()

    @property
    def saved_ids(self):
        return frozenset(self._ids)

    async def reload(self):
        rows = await self.store.list_saved(self.employer_id)
        self._ids = {row.worker_id for row in rows}
        return self.saved_ids

    def is_saved(self, worker_id):
        return str(worker_id) in self._ids

    async def save(self, worker_id):
        """Write through to the store even when the mirror already holds the id."""
        worker_id = str(worker_id)
        was_saved = worker_id in self._ids
        self._ids.add(worker_id)
        try:
            await self.store.add_saved(self.employer_id, worker_id)
        except ConflictError:
            logger.debug(f"Worker {worker_id} already saved by employer {self.employer_id}")
        except MarketplaceError as exc:
            if not was_saved:
                self._ids.discard(worker_id)
            logger.warning(f"Could not save worker {worker_id} for employer {self.employer_id}: {exc.detail or exc}")
            raise

    async def unsave(self, worker_id):
        worker_id = str(worker_id)
        was_saved = worker_id in self._ids
        self._ids.discard(worker_id)
        try:
            await self.store.remove_saved(self.employer_id, worker_id)
        except MarketplaceError as exc:
            if was_saved:
                self._ids.add(worker_id)
            logger.warning(f"Could not unsave worker {worker_id} for employer {self.employer_id}: {exc.detail or exc}")
            raise

    async def list_saved(self):
        """The saved workers as profiles. Ids of deleted profiles are skipped."""
        return set(await self.store.get_workers(sorted(self._ids)))


async def save(store, employer_id, worker_id):
    try:
        await store.add_saved(employer_id, worker_id)
    except ConflictError:
        pass


async def unsave(store, employer_id, worker_id):
    await store.remove_saved(employer_id, worker_id)


async def is_saved(store, employer_id, worker_id):
    return any(row.worker_id == str(worker_id) for row in await store.list_saved(employer_id))


async def list_saved(store, employer_id):
    rows = await store.list_saved(employer_id)
    return set(await store.get_workers([row.worker_id for row in rows]))
