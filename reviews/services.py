# reviews/services.py
import logging

from core.forms import clean_or_raise
from core.store import get_store

from .forms import ReviewForm

logger = logging.getLogger(__name__)


class ReviewService:

    def __init__(self, store=None):
        self.store = store or get_store()

    async def list_for_worker(self, worker_id):
        return await self.store.list_reviews(worker_id)

    async def create_review(self, employer_id, worker_id, rating, comment=''):
        data = clean_or_raise(ReviewForm(data={'rating': rating, 'comment': comment}))
        review = await self.store.create_review(worker_id, employer_id, data['rating'], data['comment'])
        # review_count / average_rating are maintained by the aggregation job.
        logger.info(f"Employer {employer_id} reviewed worker {worker_id} ({review.rating}/5)")
        return review
