from .harvest_work import (
    find_harvest_work_type,
    find_existing_work_for_cycle,
    create_harvest_work,
    sync_notification_with_work,
)

__all__ = [
    "find_harvest_work_type",
    "find_existing_work_for_cycle",
    "create_harvest_work",
    "sync_notification_with_work",
]
