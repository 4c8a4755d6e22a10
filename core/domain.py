# core/domain.py
"""
Immutable domain objects handed out by every store.

Stores normalise their row shapes into these classes, so business logic
(filtering, validation, messaging) only ever sees one representation.
Construction checks the data-model invariants and raises
`InvariantViolation` when they do not hold.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal

from .constants import AVAILABILITY_TYPE_CHOICES, EMPLOYER, FULL_TIME, USER_TYPE_CHOICES, WORKER
from .exceptions import InvariantViolation

_USER_TYPES = {value for value, _ in USER_TYPE_CHOICES}
_AVAILABILITY_TYPES = {value for value, _ in AVAILABILITY_TYPE_CHOICES}


def _decimal(value):
    if value is None or isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _check(condition, message):
    if not condition:
        raise InvariantViolation(message)


def id_sort_key(value):
    """Numeric ids sort numerically, anything else after them as text."""
    text = str(value)
    return (0, int(text), '') if text.isdigit() else (1, 0, text)


def _check_rates(obj):
    object.__setattr__(obj, 'hourly_rate_min', _decimal(obj.hourly_rate_min))
    object.__setattr__(obj, 'hourly_rate_max', _decimal(obj.hourly_rate_max))
    _check(
        obj.hourly_rate_min <= obj.hourly_rate_max,
        f"{type(obj).__name__} {obj.id}: hourly_rate_min {obj.hourly_rate_min} > hourly_rate_max {obj.hourly_rate_max}",
    )


@dataclass(frozen=True)
class UserAccount:
    id: str
    email: str
    user_type: str
    created_at: datetime | None = None

    def __post_init__(self):
        _check(self.user_type in _USER_TYPES, f"unknown user type {self.user_type!r}")

    @property
    def is_worker(self):
        return self.user_type == WORKER

    @property
    def is_employer(self):
        return self.user_type == EMPLOYER


@dataclass(frozen=True)
class WorkerProfile:
    id: str
    user_id: str
    name: str
    hourly_rate_min: Decimal
    hourly_rate_max: Decimal
    availability_hours: int
    last_active: datetime
    country: str = ''
    country_code: str = ''
    headline: str = ''
    skills: frozenset = field(default_factory=frozenset)
    availability_type: str = FULL_TIME
    bio: str = ''
    avatar: str | None = None
    is_verified: bool = False
    review_count: int = 0
    average_rating: Decimal = Decimal('0')

    def __post_init__(self):
        object.__setattr__(self, 'skills', frozenset(self.skills))
        object.__setattr__(self, 'average_rating', _decimal(self.average_rating))
        _check_rates(self)
        _check(1 <= self.availability_hours <= 12, f"worker {self.id}: availability_hours {self.availability_hours} outside 1-12")
        _check(self.availability_type in _AVAILABILITY_TYPES, f"worker {self.id}: unknown availability type {self.availability_type!r}")
        _check(self.review_count >= 0, f"worker {self.id}: negative review_count")
        _check(Decimal('0') <= self.average_rating <= Decimal('5'), f"worker {self.id}: average_rating outside 0-5")

    def with_changes(self, **changes):
        return replace(self, **changes)


@dataclass(frozen=True)
class EmployerProfile:
    id: str
    user_id: str
    company_name: str
    country: str = ''
    country_code: str = ''
    bio: str = ''
    avatar: str | None = None
    created_at: datetime | None = None

    def with_changes(self, **changes):
        return replace(self, **changes)


@dataclass(frozen=True)
class Job:
    id: str
    employer_id: str
    title: str
    description: str
    hourly_rate_min: Decimal
    hourly_rate_max: Decimal
    availability_hours: int
    created_at: datetime
    skills: frozenset = field(default_factory=frozenset)
    employer_name: str = ''
    country_preference: str | None = None
    is_active: bool = True

    def __post_init__(self):
        object.__setattr__(self, 'skills', frozenset(self.skills))
        _check_rates(self)
        _check(1 <= self.availability_hours <= 12, f"job {self.id}: availability_hours {self.availability_hours} outside 1-12")

    def with_changes(self, **changes):
        return replace(self, **changes)


@dataclass(frozen=True)
class Review:
    id: str
    worker_id: str
    employer_id: str
    rating: int
    comment: str
    created_at: datetime
    employer_name: str = ''

    def __post_init__(self):
        _check(isinstance(self.rating, int) and 1 <= self.rating <= 5, f"review {self.id}: rating {self.rating!r} outside 1-5")


@dataclass(frozen=True)
class SavedWorker:
    id: str
    employer_id: str
    worker_id: str
    saved_at: datetime


@dataclass(frozen=True)
class Conversation:
    id: str
    worker_id: str
    employer_id: str
    worker_name: str = ''
    employer_name: str = ''
    last_message: str = ''
    last_message_at: datetime | None = None
    unread_count: int = 0


@dataclass(frozen=True)
class Message:
    id: str
    conversation_id: str
    sender_id: str
    content: str
    created_at: datetime
    is_read: bool = False

    @property
    def ordering(self):
        return (self.created_at, id_sort_key(self.id))
