# core/store/orm.py
"""
Store backed by the Django ORM.

Each operation is a plain synchronous ORM function run through
`sync_to_async`, so multi-row writes can share one `transaction.atomic()`.
Database errors are translated into the `core.exceptions` taxonomy before
they leave this module.
"""
import functools
import logging

from asgiref.sync import sync_to_async
from django.core.exceptions import ObjectDoesNotExist
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, InterfaceError, OperationalError, transaction
from django.db.models import Count, F, Q
from django.utils import timezone

from chat import models as chat_models
from core.constants import WORKER
from core.domain import (
    Conversation,
    EmployerProfile,
    Job,
    Message,
    Review,
    SavedWorker,
    UserAccount,
    WorkerProfile,
)
from core.exceptions import ConflictError, NotFoundError, TransientStoreError
from jobs import models as job_models
from reviews import models as review_models
from users import models as user_models
from workers import models as worker_models

from .base import MarketplaceStore

logger = logging.getLogger(__name__)

# Domain field name -> model field name, where they differ.
FIELD_NAMES = {'avatar': 'avatar_url'}


def db_call(func):
    """Run a sync ORM method in a worker thread and translate its errors."""

    @functools.wraps(func)
    def translated(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ObjectDoesNotExist as exc:
            raise NotFoundError(detail=str(exc)) from exc
        except IntegrityError as exc:
            raise ConflictError(detail=str(exc)) from exc
        except (OperationalError, InterfaceError) as exc:
            logger.error(f"Database unavailable in {func.__name__}: {exc}")
            raise TransientStoreError(detail=str(exc)) from exc

    return sync_to_async(translated)


def _get(queryset, pk, label):
    try:
        return queryset.get(pk=pk)
    except (ObjectDoesNotExist, ValueError, DjangoValidationError):
        raise NotFoundError(f"{label} not found.", detail=f"{label} {pk!r}") from None


def _page(queryset, limit, offset):
    start = offset or 0
    if limit is None:
        return queryset[start:] if start else queryset
    return queryset[start:start + limit]


def _set_skills(row, names):
    skills = [worker_models.Skill.objects.get_or_create(name=name)[0] for name in sorted(set(names))]
    row.skills.set(skills)


def _apply_changes(row, changes):
    skills = changes.pop('skills', None)
    for name, value in changes.items():
        setattr(row, FIELD_NAMES.get(name, name), value)
    row.save()
    if skills is not None:
        _set_skills(row, skills)


# ----- row -> domain -----
def to_user(row):
    return UserAccount(id=str(row.pk), email=row.email, user_type=row.user_type, created_at=row.date_joined)


def to_worker(row):
    return WorkerProfile(
        id=str(row.pk),
        user_id=str(row.user_id),
        name=row.name,
        avatar=row.avatar_url or None,
        country=row.country,
        country_code=row.country_code,
        headline=row.headline,
        skills=frozenset(skill.name for skill in row.skills.all()),
        hourly_rate_min=row.hourly_rate_min,
        hourly_rate_max=row.hourly_rate_max,
        availability_hours=row.availability_hours,
        availability_type=row.availability_type,
        bio=row.bio,
        last_active=row.last_active,
        is_verified=row.is_verified,
        review_count=row.review_count,
        average_rating=row.average_rating,
    )


def to_employer(row):
    return EmployerProfile(
        id=str(row.pk),
        user_id=str(row.user_id),
        company_name=row.company_name,
        avatar=row.avatar_url or None,
        country=row.country,
        country_code=row.country_code,
        bio=row.bio,
        created_at=row.created_at,
    )


def to_job(row):
    return Job(
        id=str(row.pk),
        employer_id=str(row.employer_id),
        employer_name=row.employer.company_name,
        title=row.title,
        description=row.description,
        skills=frozenset(skill.name for skill in row.skills.all()),
        hourly_rate_min=row.hourly_rate_min,
        hourly_rate_max=row.hourly_rate_max,
        availability_hours=row.availability_hours,
        country_preference=row.country_preference,
        is_active=row.is_active,
        created_at=row.created_at,
    )


def to_review(row):
    return Review(
        id=str(row.pk),
        worker_id=str(row.worker_id),
        employer_id=str(row.employer_id),
        employer_name=row.employer.company_name,
        rating=int(row.rating),
        comment=row.comment,
        created_at=row.created_at,
    )


def to_saved(row):
    return SavedWorker(id=str(row.pk), employer_id=str(row.employer_id), worker_id=str(row.worker_id), saved_at=row.saved_at)


def to_conversation(row, unread_count=0):
    return Conversation(
        id=str(row.pk),
        worker_id=str(row.worker_id),
        employer_id=str(row.employer_id),
        worker_name=row.worker.name,
        employer_name=row.employer.company_name,
        last_message=row.last_message,
        last_message_at=row.last_message_at,
        unread_count=unread_count,
    )


def to_message(row):
    return Message(
        id=str(row.pk),
        conversation_id=str(row.conversation_id),
        sender_id=str(row.sender_id),
        content=row.content,
        created_at=row.created_at,
        is_read=row.is_read,
    )


def _workers():
    return user_models.WorkerProfile.objects.prefetch_related('skills')


def _jobs():
    return job_models.Job.objects.select_related('employer').prefetch_related('skills')


def _conversations():
    return chat_models.Conversation.objects.select_related('worker', 'employer')


class OrmStore(MarketplaceStore):

    # ----- users -----
    @db_call
    def get_user(self, user_id):
        return to_user(_get(user_models.User.objects.all(), user_id, 'User'))

    # ----- workers -----
    @db_call
    def get_worker(self, worker_id):
        return to_worker(_get(_workers(), worker_id, 'Worker'))

    @db_call
    def get_worker_by_user(self, user_id):
        try:
            return to_worker(_workers().get(user_id=user_id))
        except (ObjectDoesNotExist, ValueError, DjangoValidationError):
            raise NotFoundError("Worker profile not found.", detail=f"user {user_id!r}") from None

    @db_call
    def get_workers(self, worker_ids):
        ids = [worker_id for worker_id in map(str, worker_ids) if worker_id.isdigit()]
        return [to_worker(row) for row in _workers().filter(pk__in=ids).order_by('id')]

    @db_call
    def create_worker(self, user_id, **fields):
        skills = fields.pop('skills', ())
        # Run the domain invariants before the row is written.
        WorkerProfile(
            id='new', user_id=str(user_id),
            **{'name': '', 'hourly_rate_min': 1, 'hourly_rate_max': 3, 'availability_hours': 8,
               'last_active': timezone.now(), **fields},
        )
        with transaction.atomic():
            row = user_models.WorkerProfile.objects.create(
                user_id=user_id, **{FIELD_NAMES.get(k, k): v for k, v in fields.items()}
            )
            _set_skills(row, skills)
        return to_worker(_workers().get(pk=row.pk))

    @db_call
    def update_worker(self, worker_id, **changes):
        row = _get(_workers(), worker_id, 'Worker')
        to_worker(row).with_changes(**changes)
        with transaction.atomic():
            _apply_changes(row, changes)
        return to_worker(_workers().get(pk=row.pk))

    @db_call
    def query_workers(self, query):
        rows = user_models.WorkerProfile.objects.filter(query.as_q()).order_by(*query.ordering)
        rows = _page(rows.prefetch_related('skills'), query.limit, query.offset)
        return [to_worker(row) for row in rows]

    # ----- employers -----
    @db_call
    def get_employer(self, employer_id):
        return to_employer(_get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer'))

    @db_call
    def get_employer_by_user(self, user_id):
        try:
            return to_employer(user_models.EmployerProfile.objects.get(user_id=user_id))
        except (ObjectDoesNotExist, ValueError, DjangoValidationError):
            raise NotFoundError("Employer profile not found.", detail=f"user {user_id!r}") from None

    @db_call
    def create_employer(self, user_id, **fields):
        row = user_models.EmployerProfile.objects.create(
            user_id=user_id, **{FIELD_NAMES.get(k, k): v for k, v in fields.items()}
        )
        return to_employer(row)

    @db_call
    def update_employer(self, employer_id, **changes):
        row = _get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer')
        _apply_changes(row, changes)
        return to_employer(row)

    # ----- jobs -----
    @db_call
    def get_job(self, job_id):
        return to_job(_get(_jobs(), job_id, 'Job'))

    @db_call
    def query_jobs(self, query):
        rows = job_models.Job.objects.filter(query.as_q()).order_by(*query.ordering)
        rows = _page(rows.select_related('employer').prefetch_related('skills'), query.limit, query.offset)
        return [to_job(row) for row in rows]

    @db_call
    def create_job(self, employer_id, **fields):
        employer = _get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer')
        skills = fields.pop('skills', ())
        with transaction.atomic():
            row = job_models.Job.objects.create(employer=employer, **fields)
            _set_skills(row, skills)
        return to_job(_jobs().get(pk=row.pk))

    @db_call
    def update_job(self, job_id, **changes):
        row = _get(_jobs(), job_id, 'Job')
        to_job(row).with_changes(**changes)
        with transaction.atomic():
            _apply_changes(row, changes)
        return to_job(_jobs().get(pk=row.pk))

    @db_call
    def delete_job(self, job_id):
        _get(job_models.Job.objects.all(), job_id, 'Job').delete()

    # ----- reviews -----
    @db_call
    def list_reviews(self, worker_id):
        rows = review_models.Review.objects.filter(worker_id=worker_id).select_related('employer')
        return [to_review(row) for row in rows.order_by('-created_at', '-id')]

    @db_call
    def create_review(self, worker_id, employer_id, rating, comment):
        worker = _get(user_models.WorkerProfile.objects.all(), worker_id, 'Worker')
        employer = _get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer')
        row = review_models.Review.objects.create(worker=worker, employer=employer, rating=rating, comment=comment)
        return to_review(row)

    # ----- saved workers -----
    @db_call
    def list_saved(self, employer_id):
        rows = worker_models.SavedWorker.objects.filter(employer_id=employer_id).order_by('saved_at', 'id')
        return [to_saved(row) for row in rows]

    @db_call
    def add_saved(self, employer_id, worker_id):
        employer = _get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer')
        worker = _get(user_models.WorkerProfile.objects.all(), worker_id, 'Worker')
        try:
            with transaction.atomic():
                row = worker_models.SavedWorker.objects.create(employer=employer, worker=worker)
        except IntegrityError as exc:
            raise ConflictError("Worker is already saved.", detail=str(exc)) from exc
        return to_saved(row)

    @db_call
    def remove_saved(self, employer_id, worker_id):
        deleted, _ = worker_models.SavedWorker.objects.filter(
            employer_id=employer_id, worker_id=worker_id
        ).delete()
        return deleted > 0

    # ----- conversations -----
    @db_call
    def get_conversation(self, conversation_id):
        return to_conversation(_get(_conversations(), conversation_id, 'Conversation'))

    @db_call
    def find_conversation(self, worker_id, employer_id):
        row = _conversations().filter(worker_id=worker_id, employer_id=employer_id).first()
        return to_conversation(row) if row else None

    @db_call
    def create_conversation(self, worker_id, employer_id):
        worker = _get(user_models.WorkerProfile.objects.all(), worker_id, 'Worker')
        employer = _get(user_models.EmployerProfile.objects.all(), employer_id, 'Employer')
        try:
            with transaction.atomic():
                row = chat_models.Conversation.objects.create(worker=worker, employer=employer)
        except IntegrityError as exc:
            raise ConflictError("Conversation already exists.", detail=str(exc)) from exc
        return to_conversation(row)

    @db_call
    def list_conversations(self, profile_id, user_type, viewer_id):
        side = 'worker_id' if user_type == WORKER else 'employer_id'
        unread = Q(messages__is_read=False) & ~Q(messages__sender_id=viewer_id)
        rows = (
            _conversations()
            .filter(**{side: profile_id})
            .annotate(unread=Count('messages', filter=unread))
            .order_by(F('last_message_at').desc(nulls_last=True), '-created_at', '-id')
        )
        return [to_conversation(row, unread_count=row.unread) for row in rows]

    # ----- messages -----
    @db_call
    def list_messages(self, conversation_id, since=None):
        _get(chat_models.Conversation.objects.all(), conversation_id, 'Conversation')
        rows = chat_models.Message.objects.filter(conversation_id=conversation_id)
        if since is not None:
            rows = rows.filter(created_at__gte=since)
        return [to_message(row) for row in rows.order_by('created_at', 'id')]

    @db_call
    def _insert_message(self, conversation_id, sender_id, content):
        with transaction.atomic():
            conversation = _get(
                chat_models.Conversation.objects.select_for_update(), conversation_id, 'Conversation'
            )
            row = chat_models.Message.objects.create(conversation=conversation, sender_id=sender_id, content=content)
            conversation.last_message = content
            conversation.last_message_at = row.created_at
            conversation.save(update_fields=['last_message', 'last_message_at'])
        return to_message(row)

    async def insert_message(self, conversation_id, sender_id, content):
        message = await self._insert_message(conversation_id, sender_id, content)
        await self.feed.publish(message)
        return message

    @db_call
    def mark_read(self, conversation_id, reader_id):
        return (
            chat_models.Message.objects
            .filter(conversation_id=conversation_id, is_read=False)
            .exclude(sender_id=reader_id)
            .update(is_read=True)
        )

    @db_call
    def count_unread(self, user_id):
        return (
            chat_models.Message.objects
            .filter(Q(conversation__worker__user_id=user_id) | Q(conversation__employer__user_id=user_id))
            .filter(is_read=False)
            .exclude(sender_id=user_id)
            .count()
        )
