# core/tests/test_storage.py
from datetime import datetime, timezone as dt_timezone
from unittest.mock import patch

from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase

from core.exceptions import TransientStoreError, ValidationError
from core.storage import avatar_path, save_avatar, storage_name_from_url, validate_avatar


def image(name='avatar.png', content_type='image/png', size=128):
    return SimpleUploadedFile(name, b'\x89PNG' + b'0' * (size - 4), content_type=content_type)


class AvatarValidationTest(SimpleTestCase):

    def test_accepts_allowed_types(self):
        for content_type in ('image/jpeg', 'image/jpg', 'image/png', 'image/webp'):
            validate_avatar(image(content_type=content_type))

    def test_rejects_other_types(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_avatar(image('notes.pdf', content_type='application/pdf'))
        self.assertIn('avatar', ctx.exception.errors)

    def test_rejects_files_over_five_megabytes(self):
        with self.assertRaises(ValidationError) as ctx:
            validate_avatar(image(size=5 * 1024 * 1024 + 1))
        self.assertEqual(ctx.exception.user_message, "Image must be smaller than 5MB.")


class AvatarStorageTest(SimpleTestCase):

    def test_path_uses_user_and_millisecond_timestamp(self):
        now = datetime(2024, 5, 1, tzinfo=dt_timezone.utc)
        path = avatar_path('u1', image(content_type='image/jpeg'), now=now)
        self.assertEqual(path, f'avatars/u1-{int(now.timestamp() * 1000)}.jpg')

    def test_save_returns_public_url(self):
        url = save_avatar('u1', image())
        name = storage_name_from_url(url)
        self.addCleanup(default_storage.delete, name)
        self.assertTrue(name.startswith('avatars/u1-'))
        self.assertTrue(default_storage.exists(name))

    def test_storage_failure_is_transient(self):
        with patch.object(default_storage, 'save', side_effect=OSError('disk full')):
            with self.assertRaises(TransientStoreError):
                save_avatar('u1', image())

    def test_foreign_urls_have_no_storage_name(self):
        self.assertIsNone(storage_name_from_url('https://lh3.googleusercontent.com/a/photo.jpg'))
        self.assertIsNone(storage_name_from_url(None))
