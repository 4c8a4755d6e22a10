# core/query.py
from django.db.models import Q
from django.db.models.functions import Lower
from django.db.models.lookups import Contains

from core.exceptions import QueryConfigurationError, ValidationError


def check_pagination(limit, offset):
    """Validate a limit/offset pair. Offset without a limit is a configuration error."""
    if limit is not None and limit < 0:
        raise ValidationError(errors={"limit": "Limit must be zero or more."})
    if offset is not None and offset < 0:
        raise ValidationError(errors={"offset": "Offset must be zero or more."})
    if offset is not None and limit is None:
        raise QueryConfigurationError()


def paginate(items, limit=None, offset=None):
    """Slice an already ordered sequence the way LIMIT/OFFSET would."""
    start = offset or 0
    if limit is None:
        return list(items[start:])
    return list(items[start:start + limit])


class SearchResult(list):
    """
    A list of results that also carries the error that emptied it.

    Read paths do not retry on store failure: they hand back an empty
    result with `error` set so the caller decides what to show.
    """

    def __init__(self, items=(), error=None):
        super().__init__(items)
        self.error = error

    @property
    def ok(self):
        return self.error is None


def fold_case(text):
    """Case folding shared by local matching and the database LOWER() function."""
    if text is None:
        return None
    return text.lower()


def text_contains(field, needle):
    """Q object matching rows where `field` contains `needle` under `fold_case`."""
    return Q(Contains(Lower(field), fold_case(needle)))
