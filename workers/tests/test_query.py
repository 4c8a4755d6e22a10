# workers/tests/test_query.py
from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from core.exceptions import QueryConfigurationError
from core.tests.test_base import T0, OrmStoreTestCase
from users.models import WorkerProfile
from workers.filters import FilterState
from workers.query import build_worker_query, filter_workers

from .test_filters import make_worker

FILTER_STATES = [
    FilterState(),
    FilterState(search='assist'),
    FilterState(search='wordpress'),
    FilterState(search='  Raj '),
    FilterState(search='élodie'),
    FilterState(search='FRANÇAISE'),
    FilterState(search='traducción'),
    FilterState(country='PH'),
    FilterState(country='all'),
    FilterState(min_rate=0, max_rate=2),
    FilterState(min_rate=4, max_rate=10),
    FilterState(min_rate='2.5', max_rate='3.5'),
    FilterState(min_hours=6, max_hours=6),
    FilterState(verified_only=True),
    FilterState(last_active='today'),
    FilterState(last_active='week'),
    FilterState(last_active='month'),
    FilterState(skills={'SEO', 'Excel'}),
    FilterState(skills={'Nothing'}),
    FilterState(min_rate=4, max_rate=6, skills={'WordPress'}),
    FilterState(search='seo', skills={'WordPress'}, verified_only=True),
    FilterState(search='data', country='PK', min_hours=8),
    FilterState(min_rate=6, max_rate=2),
    FilterState(min_hours=9, max_hours=3),
]

DATASET = [
    dict(email='maria@example.com', name='Maria Santos', headline='Experienced Virtual Assistant',
         country_code='PH', skills=['Virtual Assistant', 'Data Entry'], rates=('2', '3'), hours=8,
         verified=True, age=timedelta(minutes=1)),
    dict(email='raj@example.com', name='Raj Patel', headline='Full Stack Web Developer',
         country_code='IN', skills=['WordPress', 'SEO', 'Shopify'], rates=('3', '5'), hours=6,
         verified=True, age=timedelta(hours=2)),
    dict(email='grace@example.com', name='Grace Okafor', headline='Content Writer',
         country_code='NG', skills=['SEO', 'Research'], rates=('1', '2'), hours=8,
         verified=False, age=timedelta(days=1, hours=1)),
    dict(email='linh@example.com', name='Linh Nguyen', headline='Graphic Designer',
         country_code='VN', skills=['Graphic Design'], rates=('2', '4'), hours=5,
         verified=True, age=timedelta(days=3)),
    dict(email='ahmed@example.com', name='Ahmed Hassan', headline='Data Entry Specialist',
         country_code='PK', skills=['Data Entry', 'Excel'], rates=('1', '2'), hours=8,
         verified=True, age=timedelta(days=12)),
    dict(email='sofia@example.com', name='Sofia Rodriguez', headline='Lead Generation',
         country_code='CO', skills=[], rates=('2.5', '3'), hours=6,
         verified=False, age=timedelta(days=40)),
    dict(email='elodie@example.com', name='ÉLODIE Núñez', headline='Traductrice française',
         country_code='FR', skills=['TRADUCCIÓN'], rates=('3', '4'), hours=4,
         verified=True, age=timedelta(days=60)),
]


class LocalAndOrmEquivalenceTest(OrmStoreTestCase):
    """Both compilations of a WorkerQuery must select the same workers in the same order"""

    def setUp(self):
        super().setUp()
        for data in DATASET:
            self.create_worker(
                data['email'], skills=data['skills'], name=data['name'], headline=data['headline'],
                country_code=data['country_code'],
                hourly_rate_min=Decimal(data['rates'][0]), hourly_rate_max=Decimal(data['rates'][1]),
                availability_hours=data['hours'], is_verified=data['verified'],
                last_active=T0 - data['age'],
            )

    async def test_same_results_for_every_filter_state(self):
        ids = [pk async for pk in WorkerProfile.objects.order_by('id').values_list('id', flat=True)]
        snapshot = await self.store.get_workers(ids)
        for filters in FILTER_STATES:
            with self.subTest(filters=filters):
                query = build_worker_query(filters, now=T0)
                remote = [w.id for w in await self.store.query_workers(query)]
                local = [w.id for w in query.apply(snapshot)]
                self.assertEqual(remote, local)

    async def test_non_ascii_search_is_case_insensitive(self):
        for search in ('élodie', 'ÉLODIE', 'núñez', 'FRANÇAISE', 'traducción'):
            with self.subTest(search=search):
                query = build_worker_query(FilterState(search=search), now=T0)
                self.assertEqual([w.name for w in await self.store.query_workers(query)], ['ÉLODIE Núñez'])

    async def test_pagination_matches(self):
        query = build_worker_query(FilterState(), limit=2, offset=1, now=T0)
        ids = [pk async for pk in WorkerProfile.objects.order_by('id').values_list('id', flat=True)]
        snapshot = await self.store.get_workers(ids)
        remote = [w.name for w in await self.store.query_workers(query)]
        self.assertEqual(remote, ['Raj Patel', 'Grace Okafor'])
        self.assertEqual([w.name for w in query.apply(snapshot)], remote)


class WorkerQueryTest(SimpleTestCase):

    def test_newest_activity_first_and_stable(self):
        a = make_worker('1', last_active=T0)
        b = make_worker('2', last_active=T0 + timedelta(minutes=5))
        c = make_worker('3', last_active=T0)
        self.assertEqual([w.id for w in filter_workers(FilterState(), [a, b, c], now=T0)], ['2', '1', '3'])

    def test_offset_requires_limit(self):
        with self.assertRaises(QueryConfigurationError):
            build_worker_query(FilterState(), offset=10)

    def test_malformed_bounds_select_nothing(self):
        query = build_worker_query(FilterState(min_rate=5, max_rate=1), now=T0)
        self.assertEqual(query.apply([make_worker()]), [])
