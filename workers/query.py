# workers/query.py
"""
Worker search query builder.

A `WorkerQuery` compiles one `FilterState` two ways: `as_q()` for the ORM
backed store and `apply()` for a local snapshot. Both compilations must
return the same id set for any filter state and dataset, so the local
chain is built from the predicate engine rather than restating the rules.
"""
from dataclasses import dataclass
from datetime import datetime
from functools import partial

from django.db.models import Q
from django.utils import timezone

from core.query import check_pagination, paginate, text_contains

from .filters import LAST_ACTIVE_WINDOWS, PREDICATES, FilterState

ORDERING = ('-last_active', 'id')


@dataclass(frozen=True)
class WorkerQuery:
    filters: FilterState
    now: datetime
    limit: int | None = None
    offset: int | None = None

    def predicates(self):
        return [partial(predicate, self.filters, now=self.now) for predicate in PREDICATES]

    def matches(self, worker):
        return all(predicate(worker) for predicate in self.predicates())

    def apply(self, workers):
        """Run the predicate chain over `workers` (in insertion order), then order and paginate."""
        chain = self.predicates()
        matched = [w for w in workers if all(predicate(w) for predicate in chain)]
        # sorted() is stable, so equal last_active keeps insertion order.
        matched = sorted(matched, key=lambda w: w.last_active, reverse=True)
        return paginate(matched, self.limit, self.offset)

    def as_q(self):
        """Compile the filters into a Q object over users.WorkerProfile rows."""
        from users.models import WorkerProfile

        f = self.filters
        if f.is_malformed:
            return Q(pk__in=[])

        q = Q(hourly_rate_max__gte=f.min_rate, hourly_rate_min__lte=f.max_rate)
        q &= Q(availability_hours__gte=f.min_hours, availability_hours__lte=f.max_hours)

        if f.search:
            # Skill conditions go through subqueries so that the text match and
            # the skills OR-match never have to hit the same join row.
            by_skill = WorkerProfile.objects.filter(text_contains('skills__name', f.search)).values('pk')
            q &= text_contains('name', f.search) | text_contains('headline', f.search) | Q(pk__in=by_skill)
        if not f.any_country:
            q &= Q(country_code=f.country)
        if f.verified_only:
            q &= Q(is_verified=True)

        window = LAST_ACTIVE_WINDOWS.get(f.last_active)
        if window is not None:
            q &= Q(last_active__gte=self.now - window)

        if f.skills:
            with_skill = WorkerProfile.objects.filter(skills__name__in=sorted(f.skills)).values('pk')
            q &= Q(pk__in=with_skill)
        return q

    @property
    def ordering(self):
        return ORDERING


def build_worker_query(filters=None, limit=None, offset=None, now=None):
    check_pagination(limit, offset)
    return WorkerQuery(
        filters=filters or FilterState(),
        now=now or timezone.now(),
        limit=limit,
        offset=offset,
    )


def filter_workers(filters, workers, now=None):
    """Local-mode search over an in-memory snapshot."""
    return build_worker_query(filters, now=now).apply(list(workers))
