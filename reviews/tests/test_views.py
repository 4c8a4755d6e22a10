# reviews/tests/test_views.py
from django.urls import reverse

from core.tests.test_base import ApiTestCase
from reviews.models import Review


class ReviewViewTest(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.create_url = reverse('reviews:create', args=[self.worker.pk])

    def test_employer_reviews_worker(self):
        response = self.employer_client.post(
            self.create_url, data={'rating': 5, 'comment': 'Always on time.'}, content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()['review']['rating'], 5)

        listed = self.client.get(reverse('reviews:worker_reviews', args=[self.worker.pk])).json()
        self.assertEqual([r['comment'] for r in listed['results']], ['Always on time.'])

    def test_invalid_rating(self):
        response = self.employer_client.post(self.create_url, data={'rating': 9}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Review.objects.exists())

    def test_worker_cannot_review(self):
        response = self.worker_client.post(self.create_url, data={'rating': 5}, content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(Review.objects.exists())
