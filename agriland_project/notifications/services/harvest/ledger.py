"""
notifications/services/harvest/ledger.py

Persistence gateway for harvest notifications. Every write the
harvest check makes to the notifications table goes through here.
"""

import logging

from django.core.exceptions import ValidationError
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger(__name__)


def _validate(type=None, priority=None):
    if type is not None and type not in Notification.Type.values:
        raise ValidationError(f"Unknown notification type: {type}")

    if priority is not None and priority not in Notification.Priority.values:
        raise ValidationError(f"Unknown notification priority: {priority}")


def find_active_notification(land_id, type):
    """
    The non-dismissed notification for a land/type pair, or None.
    """
    return (
        Notification.objects
        .filter(land_id=land_id, type=type, is_dismissed=False)
        .order_by("-created_at", "-id")
        .first()
    )


def create_notification(
    *,
    land_id,
    user_id,
    type,
    title,
    message,
    priority,
    metadata=None,
    farm_work=None,
):
    _validate(type=type, priority=priority)

    notification = Notification.objects.create(
        land_id=land_id,
        recipient_id=user_id,
        type=type,
        title=title,
        message=message,
        priority=priority,
        metadata=metadata or {},
        farm_work=farm_work,
    )

    logger.info(
        "Created %s notification %s for land %s (%s priority)",
        type, notification.pk, land_id, priority,
    )
    return notification.pk


def update_notification_priority(notification_id, priority, metadata=None, *, title=None, message=None):
    """
    Update priority/metadata (and optionally the text) in place.
    Read and dismissed state are left as they are.
    """
    _validate(priority=priority)

    notification = Notification.objects.get(pk=notification_id)
    notification.priority = priority

    update_fields = ["priority", "updated_at"]

    if metadata:
        notification.metadata = {**(notification.metadata or {}), **metadata}
        update_fields.append("metadata")

    if title is not None:
        notification.title = title
        update_fields.append("title")

    if message is not None:
        notification.message = message
        update_fields.append("message")

    notification.updated_at = timezone.now()
    notification.save(update_fields=update_fields)
    return notification


def refresh_for_new_cycle(notification, *, title, message, priority, metadata):
    """
    Re-target a notification left over from an earlier harvest
    cycle to the cycle being processed. It becomes unread again.
    """
    _validate(priority=priority)

    notification.title = title
    notification.message = message
    notification.priority = priority
    notification.metadata = metadata
    notification.status = Notification.Status.PENDING
    notification.is_read = False
    notification.read_at = None
    notification.farm_work = None
    notification.save(update_fields=[
        "title",
        "message",
        "priority",
        "metadata",
        "status",
        "is_read",
        "read_at",
        "farm_work",
        "updated_at",
    ])

    logger.info(
        "Moved notification %s for land %s to harvest cycle %s",
        notification.pk, notification.land_id, metadata.get("harvest_date"),
    )
    return notification


def link_farm_work(notification_id, farm_work_id):
    return (
        Notification.objects
        .filter(pk=notification_id)
        .exclude(farm_work_id=farm_work_id)
        .update(farm_work_id=farm_work_id, updated_at=timezone.now())
    )
