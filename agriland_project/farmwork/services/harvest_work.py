"""
farmwork/services/harvest_work.py

Keeps at most one harvest work item per land and harvest cycle.

A cycle is identified by the land plus the harvest date stored in
the work item's metadata, so moving a task's due date never
starts a new cycle. Once the land's next harvest date moves
forward the new cycle gets its own work item.

Status flows one way only: work status changes made by the
work-management side are copied onto the linked notification.
Reading or dismissing a notification never touches the work.
"""

import logging

from django.core.exceptions import ValidationError
from django.db.models import Q
from django.utils import timezone

from farmwork.models import FarmWork, WorkType
from notifications.models import Notification

logger = logging.getLogger(__name__)


WORK_TO_NOTIFICATION_STATUS = {
    FarmWork.Status.COMPLETED: Notification.Status.COMPLETED,
    FarmWork.Status.IN_PROGRESS: Notification.Status.IN_PROGRESS,
    FarmWork.Status.CANCELED: Notification.Status.DISMISSED,
}


# ============================================================
# LOOKUPS
# ============================================================

def find_harvest_work_type(keyword="harvest"):
    """
    First active work type whose own name, or whose category
    name, contains ``keyword``.
    """
    return (
        WorkType.objects
        .filter(is_active=True)
        .filter(Q(name__icontains=keyword) | Q(category__name__icontains=keyword))
        .select_related("category")
        .order_by("id")
        .first()
    )


def find_existing_work_for_cycle(land_id, harvest_date):
    """
    Harvest work already created for this land and cycle,
    in any status.
    """
    return (
        FarmWork.objects
        .filter(
            land_id=land_id,
            metadata__created_from=FarmWork.HARVEST_SOURCE,
            metadata__harvest_date=harvest_date.isoformat(),
        )
        .order_by("id")
        .first()
    )


# ============================================================
# CREATE
# ============================================================

def create_harvest_work(
    *,
    land_id,
    due_date,
    priority,
    creator_user_id,
    metadata=None,
    work_type=None,
    status=FarmWork.Status.CREATED,
):
    if priority not in FarmWork.Priority.values:
        raise ValidationError(f"Unknown work priority: {priority}")

    if status not in FarmWork.Status.values:
        raise ValidationError(f"Unknown work status: {status}")

    metadata = dict(metadata or {})
    land_name = metadata.get("land_name", f"Land {land_id}")
    land_code = metadata.get("land_code", "")
    crop = metadata.get("plant_type_name") or "Crop"

    metadata.update({
        "created_from": FarmWork.HARVEST_SOURCE,
        "auto_created": True,
        "harvest_date": due_date.isoformat(),
    })

    work = FarmWork.objects.create(
        title=f"Harvest {crop} - {land_name}",
        description=(
            f"Harvest {crop} from {land_name} ({land_code}) scheduled for "
            f"{due_date:%B} {due_date.day}, {due_date.year}"
        ),
        land_id=land_id,
        work_type=work_type,
        priority_level=priority,
        status=status,
        creator_id=creator_user_id,
        due_date=due_date,
        metadata=metadata,
    )

    logger.info(
        "Created harvest work %s for land %s due %s",
        work.pk, land_id, due_date.isoformat(),
    )
    return work


# ============================================================
# STATUS SYNC (WORK → NOTIFICATION)
# ============================================================

def sync_notification_with_work(work):
    """
    Copy a harvest work item's status onto its notifications.
    Returns the number of notifications changed.
    """
    if not work.is_harvest_work:
        return 0

    new_status = WORK_TO_NOTIFICATION_STATUS.get(
        work.status,
        Notification.Status.PENDING,
    )

    linked = Notification.objects.filter(farm_work=work)

    if not linked.exists() and work.land_id:
        harvest_date = (work.metadata or {}).get("harvest_date")
        linked = Notification.objects.filter(
            land_id=work.land_id,
            type__in=Notification.HARVEST_TYPES,
            metadata__harvest_date=harvest_date,
        )

    changed = (
        linked
        .exclude(status=new_status)
        .update(status=new_status, updated_at=timezone.now())
    )

    if changed:
        logger.info(
            "Synced %s notification(s) to %s from farm work %s",
            changed, new_status, work.pk,
        )

    return changed
