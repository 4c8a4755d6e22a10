# chat/views.py
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from core.exceptions import ValidationError
from core.serializers import ConversationSerializer, MessageSerializer
from core.views import current_session, json_api, read_json

from .services import ConversationService


async def _participant(request, conversation_id):
    """The session and conversation, when the current user takes part in it."""
    session = await current_session(request)
    conversation = await ConversationService(session.store).get_for_participant(
        conversation_id, session.current_profile().id, session.current_user().user_type
    )
    return session, conversation


@require_GET
@json_api
async def conversation_list(request):
    session = await current_session(request)
    user = session.current_user()
    conversations = await ConversationService(session.store).list_for(
        session.current_profile().id, user.user_type, user.id
    )
    return JsonResponse({'results': ConversationSerializer(conversations, many=True).data})


@require_POST
@json_api
async def start_conversation(request):
    """Employers pass `worker_id`, workers pass `employer_id`."""
    session = await current_session(request)
    data = read_json(request)
    profile = session.current_profile()
    if session.current_user().is_employer:
        worker_id, employer_id = data.get('worker_id'), profile.id
    else:
        worker_id, employer_id = profile.id, data.get('employer_id')
    if not worker_id or not employer_id:
        raise ValidationError("Choose who you want to message.")
    conversation = await ConversationService(session.store).get_or_create(worker_id, employer_id)
    return JsonResponse({'conversation': ConversationSerializer(conversation).data})


@require_GET
@json_api
async def conversation_messages(request, conversation_id):
    session, conversation = await _participant(request, conversation_id)
    messages = await ConversationService(session.store).history(conversation.id)
    return JsonResponse({'results': MessageSerializer(messages, many=True).data})


@require_POST
@json_api
async def send_message(request, conversation_id):
    session, conversation = await _participant(request, conversation_id)
    content = read_json(request).get('content', '')
    message = await ConversationService(session.store).send_message(
        conversation.id, session.current_user().id, content
    )
    return JsonResponse({'message': MessageSerializer(message).data}, status=201)


@require_POST
@json_api
async def mark_read(request, conversation_id):
    session, conversation = await _participant(request, conversation_id)
    count = await ConversationService(session.store).mark_read(conversation.id, session.current_user().id)
    return JsonResponse({'marked_read': count})


@require_GET
@json_api
async def get_unread_count(request):
    '''API endpoint to get unread message count'''
    session = await current_session(request)
    count = await ConversationService(session.store).unread_total(session.current_user().id)
    return JsonResponse({'unread_count': count})
