# workers/tests/test_views.py
from decimal import Decimal

from django.urls import reverse

from core.tests.test_base import ApiTestCase
from reviews.models import Review
from users.models import User
from workers.models import SavedWorker, Skill


class WorkerSearchViewTest(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.worker.skills.set([Skill.objects.get_or_create(name='Virtual Assistant')[0]])
        self.raj = self.create_raj()
        self.url = reverse('workers:search')

    def create_raj(self):
        user = User.objects.create_user(email='raj@example.com', password='testpass123', user_type=User.WORKER)
        raj = user.worker_profile
        raj.name = 'Raj Patel'
        raj.hourly_rate_min = Decimal('3.00')
        raj.hourly_rate_max = Decimal('5.00')
        raj.save()
        raj.skills.set([Skill.objects.get_or_create(name=name)[0] for name in ('WordPress', 'SEO')])
        return raj

    def test_anonymous_search(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['count'], 2)
        self.assertFalse(data['filters_active'])
        self.assertTrue(all(worker['is_saved'] is False for worker in data['results']))

    def test_filters_are_applied(self):
        response = self.client.get(self.url, {'min_rate': '4', 'max_rate': '6', 'skills': 'WordPress'})
        data = response.json()
        self.assertTrue(data['filters_active'])
        self.assertEqual([w['name'] for w in data['results']], ['Raj Patel'])
        self.assertEqual(data['results'][0]['skills'], ['SEO', 'WordPress'])

    def test_invalid_filter_is_bad_request(self):
        response = self.client.get(self.url, {'min_rate': 'cheap'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('min_rate', response.json()['errors'])

    def test_offset_without_limit_is_bad_request(self):
        response = self.client.get(self.url, {'offset': '5'})
        self.assertEqual(response.status_code, 400)

    def test_saved_flag_for_employer(self):
        SavedWorker.objects.create(employer=self.employer, worker=self.raj)
        data = self.employer_client.get(self.url).json()
        flags = {w['name']: w['is_saved'] for w in data['results']}
        self.assertEqual(flags, {'Raj Patel': True, 'Maria Santos': False})


class WorkerDetailViewTest(ApiTestCase):

    def test_detail_includes_reviews(self):
        Review.objects.create(worker=self.worker, employer=self.employer, rating=5, comment='Excellent')
        response = self.client.get(reverse('workers:detail', args=[self.worker.pk]))
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['worker']['name'], 'Maria Santos')
        self.assertEqual(data['reviews'][0]['employer_name'], 'Growth Labs')

    def test_unknown_worker_is_404(self):
        response = self.client.get(reverse('workers:detail', args=['999999']))
        self.assertEqual(response.status_code, 404)


class SavedWorkerViewTest(ApiTestCase):

    def test_save_and_unsave(self):
        save_url = reverse('workers:save', args=[self.worker.pk])
        self.assertEqual(self.employer_client.post(save_url).status_code, 200)
        self.assertEqual(self.employer_client.post(save_url).status_code, 200)
        self.assertEqual(SavedWorker.objects.filter(employer=self.employer).count(), 1)

        saved = self.employer_client.get(reverse('workers:saved')).json()
        self.assertEqual([w['id'] for w in saved['results']], [str(self.worker.pk)])

        response = self.employer_client.delete(reverse('workers:unsave', args=[self.worker.pk]))
        self.assertEqual(response.json(), {'worker_id': str(self.worker.pk), 'is_saved': False})
        self.assertFalse(SavedWorker.objects.exists())

    def test_workers_cannot_save(self):
        response = self.worker_client.post(reverse('workers:save', args=[self.worker.pk]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], "You must be logged in as an employer")

    def test_login_required(self):
        response = self.client.post(reverse('workers:save', args=[self.worker.pk]))
        self.assertEqual(response.status_code, 401)

    def test_saving_unknown_worker_is_404(self):
        response = self.employer_client.post(reverse('workers:save', args=['999999']))
        self.assertEqual(response.status_code, 404)
