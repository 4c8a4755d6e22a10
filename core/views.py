# core/views.py
"""Shared plumbing for the JSON views of every app."""
import functools
import json
import logging

from django.http import JsonResponse

from core.exceptions import AuthenticationRequired, MarketplaceError, ValidationError
from core.store import get_store
from core.utils import error_payload

logger = logging.getLogger(__name__)


def json_api(view):
    """Turn MarketplaceError raised by an async view into a JSON error response."""

    @functools.wraps(view)
    async def wrapper(request, *args, **kwargs):
        try:
            return await view(request, *args, **kwargs)
        except MarketplaceError as exc:
            level = logging.ERROR if exc.status_code >= 500 else logging.INFO
            logger.log(level, f"{request.method} {request.path} -> {exc.status_code}: {exc.detail or exc.user_message}")
            return JsonResponse(error_payload(exc), status=exc.status_code)

    return wrapper


def read_json(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON.") from None
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


async def current_session(request):
    """Start a MarketplaceSession for the logged-in user of this request."""
    from users.session import MarketplaceSession

    user = await request.auser()
    if not user.is_authenticated:
        raise AuthenticationRequired()
    return await MarketplaceSession.start(get_store(), user.pk)


async def optional_session(request):
    user = await request.auser()
    if not user.is_authenticated:
        return None
    return await current_session(request)
