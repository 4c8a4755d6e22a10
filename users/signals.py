# users/signals.py
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import EmployerProfile, User, WorkerProfile

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_marketplace_profile(sender, instance, created, **kwargs):
    """
    Give every new account a blank profile of its type.
    Workers start at 1-3 USD/h, 8 hours, full-time.
    """
    if not created or kwargs.get('raw'):
        return
    display_name = instance.email.split('@')[0]
    if instance.user_type == User.EMPLOYER:
        EmployerProfile.objects.get_or_create(user=instance, defaults={'company_name': display_name})
    else:
        WorkerProfile.objects.get_or_create(user=instance, defaults={'name': display_name})
    logger.info(f"Created {instance.user_type} profile for {instance.email}")
