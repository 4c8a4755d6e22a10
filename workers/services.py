# workers/services.py
import logging

from core.exceptions import TransientStoreError
from core.query import SearchResult
from core.store import get_store

from .query import build_worker_query

logger = logging.getLogger(__name__)


class WorkerSearchService:
    """Worker directory reads."""

    def __init__(self, store=None):
        self.store = store or get_store()

    async def search(self, filters=None, limit=None, offset=None, snapshot=None, now=None):
        """
        Run a directory search.

        With `snapshot` the local predicate chain runs over those workers and
        the store is not touched. A store outage gives an empty result with
        `.error` set; validation errors are raised.
        """
        query = build_worker_query(filters, limit=limit, offset=offset, now=now)
        if snapshot is not None:
            return SearchResult(query.apply(list(snapshot)))
        try:
            workers = await self.store.query_workers(query)
        except TransientStoreError as exc:
            logger.error(f"Worker search failed: {exc.detail or exc}")
            return SearchResult(error=exc)
        return SearchResult(workers)

    async def get_profile(self, worker_id):
        return await self.store.get_worker(worker_id)

    async def get_profile_with_reviews(self, worker_id):
        worker = await self.store.get_worker(worker_id)
        reviews = await self.store.list_reviews(worker.id)
        return worker, reviews
