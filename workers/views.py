# workers/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from core.conf import marketplace_setting
from core.forms import PaginationForm
from core.serializers import ReviewSerializer, WorkerSerializer
from core.views import current_session, json_api, optional_session

from .forms import WorkerFilterForm
from .services import WorkerSearchService


@require_GET
@json_api
async def worker_search(request):
    """Worker directory with sidebar filters, newest activity first."""
    filters = WorkerFilterForm(request.GET).to_filter_state()
    limit, offset = PaginationForm(request.GET).page(marketplace_setting('SEARCH_PAGE_SIZE'))
    results = await WorkerSearchService().search(filters, limit=limit, offset=offset)
    if not results.ok:
        raise results.error

    session = await optional_session(request)
    saved_ids = session.saved_worker_ids if session else frozenset()
    workers = WorkerSerializer(results, many=True).data
    for worker in workers:
        worker['is_saved'] = worker['id'] in saved_ids
    return JsonResponse({
        'count': len(workers),
        'filters_active': not filters.is_default(),
        'results': workers,
    })


@require_GET
@json_api
async def worker_detail(request, worker_id):
    worker, reviews = await WorkerSearchService().get_profile_with_reviews(worker_id)
    return JsonResponse({
        'worker': WorkerSerializer(worker).data,
        'reviews': ReviewSerializer(reviews, many=True).data,
    })


@require_GET
@json_api
async def saved_workers(request):
    session = await current_session(request)
    workers = sorted(await session.saved_workers(), key=lambda w: w.last_active, reverse=True)
    return JsonResponse({'results': WorkerSerializer(workers, many=True).data})


@require_POST
@json_api
async def save_worker(request, worker_id):
    session = await current_session(request)
    await session.save_worker(worker_id)
    return JsonResponse({'worker_id': str(worker_id), 'is_saved': True})


@require_http_methods(['POST', 'DELETE'])
@json_api
async def unsave_worker(request, worker_id):
    session = await current_session(request)
    await session.unsave_worker(worker_id)
    return JsonResponse({'worker_id': str(worker_id), 'is_saved': False})
