# users/celery_tasks.py - Background tasks using Celery
import logging

from celery import shared_task
from django.core.files.storage import default_storage

from core.storage import storage_name_from_url

logger = logging.getLogger(__name__)


@shared_task
def delete_avatar_file(avatar_url):
    """Remove a replaced avatar from storage. Failures are logged, never raised."""
    name = storage_name_from_url(avatar_url)
    if not name:
        logger.info(f'Avatar {avatar_url} is not managed by this storage, skipping')
        return False
    try:
        default_storage.delete(name)
        logger.info(f'Deleted old avatar {name}')
        return True
    except Exception as e:
        logger.error(f'Failed to delete old avatar {name}: {str(e)}')
        return False
