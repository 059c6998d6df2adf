"""
ministry/signals.py

Signal handlers for:
1. Logging civil status changes on a minister
2. Simple audit logging for created/deleted records
"""
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
from .models import Church, Minister, MinistryRank, MinistrySkill
import logging

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=Minister)
def track_civil_status_change(sender, instance, **kwargs):
    """
    Keep the stored civil status on the instance before saving,
    so post_save can compare it.
    """
    if instance.pk:
        instance._old_civil_status = (
            Minister.objects.filter(pk=instance.pk)
            .values_list("civil_status", flat=True)
            .first()
        )
    else:
        instance._old_civil_status = None


@receiver(post_save, sender=Minister)
def log_minister_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"Minister registered: {instance.full_name} (#{instance.pk})")
        return

    old_status = getattr(instance, "_old_civil_status", None)
    if old_status and old_status != instance.civil_status:
        logger.info(
            f"Civil status changed: {instance.full_name} "
            f"{old_status} → {instance.civil_status}"
        )


@receiver(post_delete, sender=Minister)
def log_minister_deleted(sender, instance, **kwargs):
    logger.info(f"Minister deleted: {instance.full_name} (#{instance.pk})")


@receiver(post_save, sender=MinistryRank)
@receiver(post_save, sender=MinistrySkill)
@receiver(post_save, sender=Church)
def log_reference_saved(sender, instance, created, **kwargs):
    if created:
        logger.info(f"{sender._meta.verbose_name} added: {instance}")
