"""
farmwork/signals.py

Status bookkeeping for farm work and the hand-off to the
harvest notification sync.
"""

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone

from farmwork.models import FarmWork
from farmwork.services.harvest_work import sync_notification_with_work


# ============================================================
# PRE_SAVE: TRACK IF STATUS CHANGED
# ============================================================

@receiver(pre_save, sender=FarmWork)
def track_farmwork_status_change(sender, instance, **kwargs):
    if not instance.pk:
        instance._status_changed = True
    else:
        try:
            old_status = FarmWork.objects.values_list("status", flat=True).get(pk=instance.pk)
            instance._status_changed = (old_status != instance.status)
        except FarmWork.DoesNotExist:
            instance._status_changed = True

    if instance.status == FarmWork.Status.COMPLETED and instance.completed_at is None:
        instance.completed_at = timezone.now()


# ============================================================
# POST_SAVE: PUSH STATUS TO HARVEST NOTIFICATIONS
# ============================================================

@receiver(post_save, sender=FarmWork)
def sync_harvest_notification_status(sender, instance, created, **kwargs):
    if created:
        return

    if not getattr(instance, "_status_changed", False):
        return

    sync_notification_with_work(instance)
