# core/tests/test_views.py
import json

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from django.test import RequestFactory, SimpleTestCase

from core.exceptions import ConflictError, TransientStoreError, ValidationError
from core.views import json_api, read_json


class JsonApiDecoratorTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def call(self, error):
        @json_api
        async def view(request):
            if error is not None:
                raise error
            return JsonResponse({'ok': True})

        return async_to_sync(view)(self.factory.get('/api/test/'))

    def test_success_passes_through(self):
        response = self.call(None)
        self.assertEqual(response.status_code, 200)

    def test_errors_map_to_status_codes(self):
        cases = [
            (ValidationError(errors={'title': "Title must be at least 10 characters."}), 400),
            (ConflictError(), 409),
            (TransientStoreError(detail='connection refused'), 503),
        ]
        for error, status in cases:
            with self.subTest(error=type(error).__name__):
                response = self.call(error)
                self.assertEqual(response.status_code, status)
                self.assertEqual(json.loads(response.content)['error'], error.user_message)

    def test_raw_store_detail_is_not_exposed(self):
        response = self.call(TransientStoreError(detail='connection refused'))
        self.assertNotIn('connection refused', response.content.decode())


class ReadJsonTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_empty_body_is_empty_dict(self):
        request = self.factory.post('/x/', data='', content_type='application/json')
        self.assertEqual(read_json(request), {})

    def test_object_body(self):
        request = self.factory.post('/x/', data='{"content": "hi"}', content_type='application/json')
        self.assertEqual(read_json(request), {'content': 'hi'})

    def test_invalid_bodies(self):
        for body in ('not json', '[1, 2]'):
            request = self.factory.post('/x/', data=body, content_type='application/json')
            with self.assertRaises(ValidationError):
                read_json(request)
