# reviews/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from core.serializers import ReviewSerializer
from core.views import current_session, json_api, read_json

from .services import ReviewService


@require_GET
@json_api
async def worker_reviews(request, worker_id):
    reviews = await ReviewService().list_for_worker(worker_id)
    return JsonResponse({'results': ReviewSerializer(reviews, many=True).data})


@require_POST
@json_api
async def create_review(request, worker_id):
    session = await current_session(request)
    employer = session.require_employer()
    data = read_json(request)
    review = await ReviewService().create_review(
        employer.id, worker_id, data.get('rating'), data.get('comment', '')
    )
    return JsonResponse({'review': ReviewSerializer(review).data}, status=201)
