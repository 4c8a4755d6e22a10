# workers/tests/test_filters.py
from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase

from core.domain import WorkerProfile
from core.tests.test_base import T0
from workers.filters import FilterState, matches, matches_rate, matches_skills


def make_worker(worker_id='1', **overrides):
    fields = {
        'id': worker_id, 'user_id': f'u{worker_id}', 'name': 'Maria Santos',
        'headline': 'Experienced Virtual Assistant', 'country': 'Philippines', 'country_code': 'PH',
        'skills': {'Virtual Assistant', 'Data Entry'},
        'hourly_rate_min': 2, 'hourly_rate_max': 3, 'availability_hours': 8,
        'last_active': T0, 'is_verified': False,
    }
    fields.update(overrides)
    return WorkerProfile(**fields)


class RateOverlapTest(SimpleTestCase):

    def test_boundary_touch_is_included(self):
        worker = make_worker(hourly_rate_min=2, hourly_rate_max=3)
        self.assertTrue(matches_rate(FilterState(min_rate=0, max_rate=2), worker))
        self.assertTrue(matches_rate(FilterState(min_rate=3, max_rate=10), worker))

    def test_disjoint_range_is_excluded(self):
        worker = make_worker(hourly_rate_min=2, hourly_rate_max=3)
        self.assertFalse(matches_rate(FilterState(min_rate=4, max_rate=10), worker))

    def test_overlap_not_containment(self):
        worker = make_worker(hourly_rate_min=3, hourly_rate_max=5)
        self.assertTrue(matches_rate(FilterState(min_rate=4, max_rate=6), worker))

    def test_half_dollar_bounds(self):
        worker = make_worker(hourly_rate_min=Decimal('1.5'), hourly_rate_max=Decimal('2'))
        self.assertTrue(matches_rate(FilterState(min_rate='2.0', max_rate='2.5'), worker))
        self.assertFalse(matches_rate(FilterState(min_rate='2.5', max_rate=10), worker))


class SkillsMatchTest(SimpleTestCase):

    def test_or_match(self):
        worker = make_worker(skills={'A', 'B'})
        self.assertTrue(matches_skills(FilterState(skills={'B', 'C'}), worker))
        self.assertFalse(matches_skills(FilterState(skills={'C', 'D'}), worker))

    def test_empty_skill_filter_passes(self):
        self.assertTrue(matches_skills(FilterState(), make_worker(skills=set())))


class MatchesTest(SimpleTestCase):

    def test_default_filter_matches_everyone(self):
        self.assertTrue(FilterState().is_default())
        self.assertTrue(matches(FilterState(), make_worker(), now=T0))

    def test_search_covers_name_headline_and_skills(self):
        worker = make_worker()
        for needle in ('maria', 'ASSISTANT', 'data ent'):
            with self.subTest(needle=needle):
                self.assertTrue(matches(FilterState(search=needle), worker, now=T0))
        self.assertFalse(matches(FilterState(search='python'), worker, now=T0))

    def test_country(self):
        worker = make_worker(country_code='PH')
        for country in ('', 'any', 'all', 'PH'):
            self.assertTrue(matches(FilterState(country=country), worker, now=T0))
        self.assertFalse(matches(FilterState(country='IN'), worker, now=T0))

    def test_hours_are_inclusive(self):
        worker = make_worker(availability_hours=6)
        self.assertTrue(matches(FilterState(min_hours=6, max_hours=6), worker, now=T0))
        self.assertFalse(matches(FilterState(min_hours=7), worker, now=T0))

    def test_verified_only(self):
        self.assertFalse(matches(FilterState(verified_only=True), make_worker(is_verified=False), now=T0))
        self.assertTrue(matches(FilterState(verified_only=True), make_worker(is_verified=True), now=T0))

    def test_last_active_windows(self):
        worker = make_worker(last_active=T0 - timedelta(days=3))
        self.assertFalse(matches(FilterState(last_active='today'), worker, now=T0))
        self.assertTrue(matches(FilterState(last_active='week'), worker, now=T0))
        self.assertTrue(matches(FilterState(last_active='month'), worker, now=T0))
        self.assertTrue(matches(FilterState(last_active='any'), worker, now=T0))

    def test_malformed_bounds_exclude_everyone(self):
        worker = make_worker()
        self.assertFalse(matches(FilterState(min_rate=5, max_rate=2), worker, now=T0))
        self.assertFalse(matches(FilterState(min_hours=10, max_hours=2), worker, now=T0))

    def test_wordpress_scenario(self):
        filters = FilterState(min_rate=4, max_rate=6, skills={'WordPress'})
        raj = make_worker('1', hourly_rate_min=3, hourly_rate_max=5, skills={'WordPress', 'SEO'})
        cheap = make_worker('2', hourly_rate_min=1, hourly_rate_max=2, skills={'WordPress'})
        self.assertTrue(matches(filters, raj, now=T0))
        self.assertFalse(matches(filters, cheap, now=T0))
