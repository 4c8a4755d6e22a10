# jobs/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from core.conf import marketplace_setting
from core.serializers import JobSerializer
from core.views import current_session, json_api, read_json

from .forms import JobFilterForm
from .services import JobService


async def _employer_id(request):
    session = await current_session(request)
    return session.require_employer().id


@require_GET
@json_api
async def job_list(request):
    """Public job board: search, skill filter, sort."""
    params = JobFilterForm(request.GET).query_params(marketplace_setting('SEARCH_PAGE_SIZE'))
    jobs = await JobService().list_jobs(**params)
    if not jobs.ok:
        raise jobs.error
    return JsonResponse({'count': len(jobs), 'results': JobSerializer(jobs, many=True).data})


@require_GET
@json_api
async def job_detail(request, job_id):
    job = await JobService().get_job(job_id)
    return JsonResponse({'job': JobSerializer(job).data})


@require_GET
@json_api
async def my_jobs(request):
    employer_id = await _employer_id(request)
    jobs = await JobService().list_for_employer(employer_id)
    return JsonResponse({'results': JobSerializer(jobs, many=True).data})


@require_POST
@json_api
async def job_create(request):
    employer_id = await _employer_id(request)
    job = await JobService().create_job(employer_id, read_json(request))
    return JsonResponse({'job': JobSerializer(job).data}, status=201)


@require_POST
@json_api
async def job_update(request, job_id):
    employer_id = await _employer_id(request)
    job = await JobService().update_job(employer_id, job_id, read_json(request))
    return JsonResponse({'job': JobSerializer(job).data})


@require_POST
@json_api
async def job_deactivate(request, job_id):
    employer_id = await _employer_id(request)
    job = await JobService().deactivate_job(employer_id, job_id)
    return JsonResponse({'job': JobSerializer(job).data})


@require_http_methods(['POST', 'DELETE'])
@json_api
async def job_delete(request, job_id):
    employer_id = await _employer_id(request)
    await JobService().delete_job(employer_id, job_id)
    return JsonResponse({'deleted': str(job_id)})
