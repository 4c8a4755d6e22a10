# jobs/services.py
import logging

from core.exceptions import NotFoundError, TransientStoreError
from core.query import SearchResult
from core.store import get_store

from .forms import JobForm
from .query import build_job_query

logger = logging.getLogger(__name__)


class JobService:
    """Job board reads and job management by the owning employer."""

    def __init__(self, store=None):
        self.store = store or get_store()

    async def list_jobs(self, search='', skill=None, sort=None, limit=None, offset=None):
        query = build_job_query(search=search, skill=skill, sort=sort, limit=limit, offset=offset)
        try:
            jobs = await self.store.query_jobs(query)
        except TransientStoreError as exc:
            logger.error(f"Job board query failed: {exc.detail or exc}")
            return SearchResult(error=exc)
        return SearchResult(jobs)

    async def get_job(self, job_id):
        return await self.store.get_job(job_id)

    async def list_for_employer(self, employer_id):
        return await self.store.list_jobs_by_employer(employer_id)

    async def create_job(self, employer_id, data):
        fields = JobForm(data=data).job_fields()
        job = await self.store.create_job(employer_id, **fields)
        logger.info(f"Employer {employer_id} posted job {job.id}")
        return job

    async def update_job(self, employer_id, job_id, data):
        job = await self._owned(employer_id, job_id)
        fields = JobForm(data=data).job_fields()
        return await self.store.update_job(job.id, **fields)

    async def deactivate_job(self, employer_id, job_id):
        job = await self._owned(employer_id, job_id)
        if not job.is_active:
            return job
        return await self.store.update_job(job.id, is_active=False)

    async def delete_job(self, employer_id, job_id):
        job = await self._owned(employer_id, job_id)
        await self.store.delete_job(job.id)
        logger.info(f"Employer {employer_id} deleted job {job.id}")

    async def _owned(self, employer_id, job_id):
        job = await self.store.get_job(job_id)
        if job.employer_id != str(employer_id):
            # Other employers' jobs are reported as missing.
            raise NotFoundError("Job not found.", detail=f"job {job_id} is not owned by {employer_id}")
        return job
