# users/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from core.exceptions import ValidationError
from core.serializers import EmployerSerializer, WorkerSerializer
from core.views import current_session, json_api, read_json


def _profile_payload(session):
    user = session.current_user()
    if user.is_employer:
        profile = EmployerSerializer(session.current_employer_profile()).data
    else:
        profile = WorkerSerializer(session.current_worker_profile()).data
    return {
        'user': {'id': user.id, 'email': user.email, 'user_type': user.user_type},
        'profile': profile,
    }


@require_GET
@json_api
async def me(request):
    """Current user, their profile and the saved worker ids."""
    session = await current_session(request)
    payload = _profile_payload(session)
    payload['saved_worker_ids'] = sorted(session.saved_worker_ids)
    return JsonResponse(payload)


@require_POST
@json_api
async def update_profile(request):
    session = await current_session(request)
    changes = read_json(request)
    if session.current_user().is_employer:
        await session.update_employer_profile(**changes)
    else:
        await session.update_worker_profile(**changes)
    return JsonResponse(_profile_payload(session))


@require_POST
@json_api
async def upload_avatar(request):
    session = await current_session(request)
    upload = request.FILES.get('avatar')
    if upload is None:
        raise ValidationError(errors={'avatar': "Please choose an image to upload."})
    url = await session.upload_avatar(upload)
    return JsonResponse({'avatar': url})
