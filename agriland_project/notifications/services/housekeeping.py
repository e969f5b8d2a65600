"""
notifications/services/housekeeping.py

Maintenance helpers kept apart from the harvest check itself.
"""

import logging
from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger(__name__)


def cleanup_old_notifications(days_old=30, now=None):
    """
    Delete dismissed notifications older than ``days_old`` days.
    Returns the number of notifications removed.
    """
    if days_old < 0:
        raise ValueError("days_old must not be negative")

    cutoff = (now or timezone.now()) - timedelta(days=days_old)

    deleted, _ = (
        Notification.objects
        .filter(is_dismissed=True, created_at__lt=cutoff)
        .delete()
    )

    if deleted:
        logger.info("Removed %s dismissed notifications older than %s days", deleted, days_old)

    return deleted


def notification_stats(user=None):
    """
    Per-type totals: count, unread_count and active_count
    (not dismissed), optionally for one recipient.
    """
    qs = Notification.objects.all()
    if user is not None:
        qs = qs.filter(recipient=user)

    rows = (
        qs.order_by()
        .values("type")
        .annotate(
            count=Count("id"),
            unread_count=Count("id", filter=Q(is_read=False)),
            active_count=Count("id", filter=Q(is_dismissed=False)),
        )
        .order_by("type")
    )
    return list(rows)
