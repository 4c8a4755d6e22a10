# core/tests/test_base.py
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

from channels.layers import InMemoryChannelLayer
from django.conf import settings
from django.contrib.auth import get_user_model
from django.test import SimpleTestCase, TestCase, override_settings

from chat.realtime import MessageFeed
from core.constants import EMPLOYER, WORKER
from core.store import get_store
from core.store.memory import MemoryStore
from core.store.orm import OrmStore
from workers.models import Skill

User = get_user_model()

T0 = datetime(2024, 5, 1, 12, 0, tzinfo=dt_timezone.utc)


class FakeClock:
    """Returns `now` and then moves it forward by `step`, so every stored row gets its own instant."""

    def __init__(self, start=T0, step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_memory_store(clock=None):
    return MemoryStore(feed=MessageFeed(InMemoryChannelLayer()), clock=clock or FakeClock())


class MemoryStoreTestCase(SimpleTestCase):
    """Base test case running against a fresh MemoryStore"""

    def setUp(self):
        self.clock = FakeClock()
        self.store = make_memory_store(self.clock)

    async def add_worker(self, email='worker@example.com', **fields):
        user = self.store.add_user(email, WORKER)
        fields.setdefault('name', email.split('@')[0].title())
        fields['skills'] = frozenset(fields.get('skills', ()))
        return await self.store.create_worker(user.id, **fields)

    async def add_employer(self, email='employer@example.com', **fields):
        user = self.store.add_user(email, EMPLOYER)
        fields.setdefault('company_name', email.split('@')[0].title())
        return await self.store.create_employer(user.id, **fields)


class OrmStoreTestCase(TestCase):
    """Base test case running against the ORM store with its own channel layer"""

    def setUp(self):
        self.store = OrmStore(feed=MessageFeed(InMemoryChannelLayer()))

    @staticmethod
    def create_worker(email='worker@example.com', skills=(), **fields):
        user = User.objects.create_user(email=email, password='testpass123', user_type=WORKER)
        profile = user.worker_profile
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.save()
        profile.skills.set([Skill.objects.get_or_create(name=name)[0] for name in skills])
        return profile

    @staticmethod
    def create_employer(email='employer@example.com', **fields):
        user = User.objects.create_user(email=email, password='testpass123', user_type=EMPLOYER)
        profile = user.employer_profile
        for name, value in fields.items():
            setattr(profile, name, value)
        profile.save()
        return profile


@override_settings(MARKETPLACE={**settings.MARKETPLACE, "STORE_BACKEND": "core.store.orm.OrmStore"})
class ApiTestCase(TestCase):
    """
    Base test case for the JSON views. Views resolve the store through
    get_store(), which is switched to the ORM store for these tests.
    """

    def setUp(self):
        get_store.cache_clear()
        self.addCleanup(get_store.cache_clear)
        self.worker_user = User.objects.create_user(
            email='maria@example.com', password='testpass123', user_type=WORKER
        )
        self.worker = self.worker_user.worker_profile
        self.worker.name = 'Maria Santos'
        self.worker.hourly_rate_min = Decimal('2.00')
        self.worker.hourly_rate_max = Decimal('3.00')
        self.worker.save()

        self.employer_user = User.objects.create_user(
            email='hiring@growthlabs.example.com', password='testpass123', user_type=EMPLOYER
        )
        self.employer = self.employer_user.employer_profile
        self.employer.company_name = 'Growth Labs'
        self.employer.save()

        self.worker_client = self.client_class()
        self.worker_client.force_login(self.worker_user)
        self.employer_client = self.client_class()
        self.employer_client.force_login(self.employer_user)
