# core/tests/test_domain.py
from decimal import Decimal

from django.test import SimpleTestCase

from core.domain import Job, Message, Review, WorkerProfile, id_sort_key
from core.exceptions import InvariantViolation, MarketplaceError

from .test_base import T0


def worker(**overrides):
    fields = {
        'id': '1', 'user_id': 'u1', 'name': 'Maria Santos',
        'hourly_rate_min': 2, 'hourly_rate_max': 3,
        'availability_hours': 8, 'last_active': T0,
    }
    fields.update(overrides)
    return WorkerProfile(**fields)


class WorkerProfileInvariantTest(SimpleTestCase):

    def test_rates_are_normalised_to_decimal(self):
        profile = worker(hourly_rate_min=2.5, skills=['SEO'])
        self.assertEqual(profile.hourly_rate_min, Decimal('2.5'))
        self.assertEqual(profile.skills, frozenset({'SEO'}))

    def test_inverted_rate_range_is_fatal(self):
        with self.assertRaises(InvariantViolation):
            worker(hourly_rate_min=5, hourly_rate_max=3)

    def test_invariant_violation_is_not_recoverable_error(self):
        self.assertFalse(issubclass(InvariantViolation, MarketplaceError))

    def test_availability_hours_bounds(self):
        worker(availability_hours=1)
        worker(availability_hours=12)
        for hours in (0, 13):
            with self.assertRaises(InvariantViolation):
                worker(availability_hours=hours)

    def test_average_rating_bounds(self):
        with self.assertRaises(InvariantViolation):
            worker(average_rating='5.5')

    def test_unknown_availability_type(self):
        with self.assertRaises(InvariantViolation):
            worker(availability_type='weekends')

    def test_with_changes_rechecks_invariants(self):
        profile = worker()
        self.assertEqual(profile.with_changes(name='Maria').name, 'Maria')
        with self.assertRaises(InvariantViolation):
            profile.with_changes(hourly_rate_min=10)


class JobAndReviewInvariantTest(SimpleTestCase):

    def test_job_rate_range(self):
        with self.assertRaises(InvariantViolation):
            Job(id='1', employer_id='e1', title='t', description='d',
                hourly_rate_min=4, hourly_rate_max=2, availability_hours=8, created_at=T0)

    def test_review_rating_must_be_integer_in_range(self):
        Review(id='1', worker_id='w1', employer_id='e1', rating=5, comment='', created_at=T0)
        for rating in (0, 6, 4.5):
            with self.assertRaises(InvariantViolation):
                Review(id='1', worker_id='w1', employer_id='e1', rating=rating, comment='', created_at=T0)


class MessageOrderingTest(SimpleTestCase):

    def test_numeric_ids_sort_numerically(self):
        self.assertLess(id_sort_key('9'), id_sort_key('10'))
        self.assertLess(id_sort_key('10'), id_sort_key('abc'))

    def test_ordering_uses_created_at_then_id(self):
        a = Message(id='10', conversation_id='1', sender_id='u', content='a', created_at=T0)
        b = Message(id='9', conversation_id='1', sender_id='u', content='b', created_at=T0)
        self.assertEqual(sorted([a, b], key=lambda m: m.ordering), [b, a])
