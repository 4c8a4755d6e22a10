# core/storage.py
"""Avatar uploads through Django's storage API."""
import logging
import os

from django.core.files.storage import default_storage
from django.utils import timezone

from core.conf import marketplace_setting
from core.exceptions import TransientStoreError, ValidationError

logger = logging.getLogger(__name__)

EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/png': 'png',
    'image/webp': 'webp',
}


def validate_avatar(upload):
    """Check MIME type and size only. Image content is not inspected."""
    content_type = getattr(upload, 'content_type', None)
    if content_type not in marketplace_setting('AVATAR_CONTENT_TYPES'):
        raise ValidationError(errors={'avatar': "Please upload a JPEG, PNG or WebP image."})
    max_size = marketplace_setting('AVATAR_MAX_SIZE')
    if upload.size > max_size:
        raise ValidationError(errors={'avatar': f"Image must be smaller than {max_size // (1024 * 1024)}MB."})


def avatar_path(user_id, upload, now=None):
    now = now or timezone.now()
    ext = EXTENSIONS.get(upload.content_type) or os.path.splitext(upload.name)[1].lstrip('.').lower()
    return f"{marketplace_setting('AVATAR_UPLOAD_DIR')}/{user_id}-{int(now.timestamp() * 1000)}.{ext}"


def save_avatar(user_id, upload):
    """Validate and store an avatar, returning its public URL."""
    validate_avatar(upload)
    try:
        name = default_storage.save(avatar_path(user_id, upload), upload)
    except OSError as exc:
        logger.error(f"Failed to store avatar for user {user_id}: {exc}")
        raise TransientStoreError("Could not upload the image. Please try again.", detail=str(exc)) from exc
    logger.info(f"Stored avatar {name} for user {user_id}")
    return default_storage.url(name)


def storage_name_from_url(url):
    """Reverse of default_storage.url() for files under the avatar directory."""
    if not url:
        return None
    marker = f"{marketplace_setting('AVATAR_UPLOAD_DIR')}/"
    index = url.find(marker)
    if index < 0:
        return None
    return url[index:]
