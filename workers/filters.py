# workers/filters.py
"""
Predicate engine for the worker directory.

A `FilterState` is the composed set of sidebar filters. `matches()` decides
whether a single worker is included; it is pure and never raises. Malformed
bounds (min above max) simply exclude every candidate.

The individual predicates are exposed so the query builder can chain them
over a local snapshot and so the ORM compilation in `workers.query` can be
checked against them.
"""
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import Decimal

from django.utils import timezone

from core.constants import (
    HOURS_SCALE_MAX,
    HOURS_SCALE_MIN,
    LAST_ACTIVE_ANY,
    LAST_ACTIVE_MONTH,
    LAST_ACTIVE_TODAY,
    LAST_ACTIVE_WEEK,
    RATE_SCALE_MAX,
    RATE_SCALE_MIN,
)
from core.query import fold_case

ANY_COUNTRY = ('', 'any', 'all')

LAST_ACTIVE_WINDOWS = {
    LAST_ACTIVE_TODAY: timedelta(hours=24),
    LAST_ACTIVE_WEEK: timedelta(days=7),
    LAST_ACTIVE_MONTH: timedelta(days=30),
}


@dataclass(frozen=True)
class FilterState:
    search: str = ''
    country: str = 'any'
    min_rate: Decimal = Decimal(RATE_SCALE_MIN)
    max_rate: Decimal = Decimal(RATE_SCALE_MAX)
    min_hours: int = HOURS_SCALE_MIN
    max_hours: int = HOURS_SCALE_MAX
    verified_only: bool = False
    last_active: str = LAST_ACTIVE_ANY
    skills: frozenset = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, 'search', (self.search or '').strip())
        object.__setattr__(self, 'country', self.country or 'any')
        object.__setattr__(self, 'min_rate', Decimal(str(self.min_rate)))
        object.__setattr__(self, 'max_rate', Decimal(str(self.max_rate)))
        object.__setattr__(self, 'skills', frozenset(s for s in (self.skills or ()) if s))

    @property
    def any_country(self):
        return self.country.lower() in ANY_COUNTRY

    @property
    def is_malformed(self):
        return self.min_rate > self.max_rate or self.min_hours > self.max_hours

    def is_default(self):
        return self == FilterState()


def matches_search(filters, worker, now=None):
    if not filters.search:
        return True
    needle = fold_case(filters.search)
    if needle in fold_case(worker.name) or needle in fold_case(worker.headline):
        return True
    return any(needle in fold_case(skill) for skill in worker.skills)


def matches_country(filters, worker, now=None):
    return filters.any_country or worker.country_code == filters.country


def matches_rate(filters, worker, now=None):
    # Range overlap, not containment.
    return worker.hourly_rate_max >= filters.min_rate and worker.hourly_rate_min <= filters.max_rate


def matches_hours(filters, worker, now=None):
    return filters.min_hours <= worker.availability_hours <= filters.max_hours


def matches_verified(filters, worker, now=None):
    return not filters.verified_only or worker.is_verified


def matches_last_active(filters, worker, now=None):
    window = LAST_ACTIVE_WINDOWS.get(filters.last_active)
    if window is None:
        return True
    now = now or timezone.now()
    return now - worker.last_active <= window


def matches_skills(filters, worker, now=None):
    return not filters.skills or bool(filters.skills & worker.skills)


def matches_bounds(filters, worker, now=None):
    return not filters.is_malformed


PREDICATES = (
    matches_bounds,
    matches_search,
    matches_country,
    matches_rate,
    matches_hours,
    matches_verified,
    matches_last_active,
    matches_skills,
)


def matches(filters, worker, now=None):
    """Return True when `worker` passes every predicate of `filters`."""
    now = now or timezone.now()
    return all(predicate(filters, worker, now) for predicate in PREDICATES)
