# users/tests/test_signals.py
from decimal import Decimal

from django.test import TestCase

from core.constants import EMPLOYER, FULL_TIME, WORKER
from users.models import EmployerProfile, User, WorkerProfile


class ProfileSignalTest(TestCase):

    def test_worker_gets_default_profile(self):
        user = User.objects.create_user(email='maria@example.com', password='testpass123', user_type=WORKER)
        profile = user.worker_profile
        self.assertEqual(profile.name, 'maria')
        self.assertEqual(profile.hourly_rate_min, Decimal('1.00'))
        self.assertEqual(profile.hourly_rate_max, Decimal('3.00'))
        self.assertEqual(profile.availability_hours, 8)
        self.assertEqual(profile.availability_type, FULL_TIME)
        self.assertFalse(EmployerProfile.objects.filter(user=user).exists())

    def test_employer_gets_company_profile(self):
        user = User.objects.create_user(email='hiring@growthlabs.example.com', user_type=EMPLOYER)
        self.assertEqual(user.employer_profile.company_name, 'hiring')
        self.assertFalse(WorkerProfile.objects.filter(user=user).exists())

    def test_saving_again_creates_nothing(self):
        user = User.objects.create_user(email='maria@example.com', user_type=WORKER)
        user.save()
        self.assertEqual(WorkerProfile.objects.filter(user=user).count(), 1)
