from django.utils import timezone
from django.utils.dateformat import format as date_format


def last_active_display(last_active, now=None):
    """Human readable "last seen" label used on worker cards."""
    now = now or timezone.now()
    minutes = int((now - last_active).total_seconds() // 60)

    if minutes < 5:
        return "Online now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return date_format(timezone.localtime(last_active), "M j, Y")


def error_payload(error):
    """JSON body for a MarketplaceError."""
    payload = {'error': error.user_message}
    errors = getattr(error, 'errors', None)
    if errors:
        payload['errors'] = errors
    return payload
