"""
notifications/services/harvest/policy.py

Maps "days until harvest" to what the harvest check should do.

    < 0      harvest_overdue, high
    0 or 1   harvest_due, high
    2 or 3   harvest_due, medium   (work is created at exactly 3)
    > 3      nothing
"""

from dataclasses import dataclass
from typing import Optional

from notifications.models import Notification


NOTIFY_WINDOW_DAYS = 3
WORK_TRIGGER_DAYS = 3
HIGH_PRIORITY_DAYS = 1

PRIORITY_RANK = {
    Notification.Priority.LOW: 0,
    Notification.Priority.MEDIUM: 1,
    Notification.Priority.HIGH: 2,
}


@dataclass(frozen=True)
class HarvestDecision:
    should_notify: bool
    type: Optional[str] = None
    priority: Optional[str] = None
    should_create_work: bool = False


NO_ACTION = HarvestDecision(should_notify=False)


def decide(days_until_harvest: int) -> HarvestDecision:
    if days_until_harvest < 0:
        return HarvestDecision(
            should_notify=True,
            type=Notification.Type.HARVEST_OVERDUE,
            priority=Notification.Priority.HIGH,
        )

    if days_until_harvest <= HIGH_PRIORITY_DAYS:
        return HarvestDecision(
            should_notify=True,
            type=Notification.Type.HARVEST_DUE,
            priority=Notification.Priority.HIGH,
        )

    if days_until_harvest <= NOTIFY_WINDOW_DAYS:
        return HarvestDecision(
            should_notify=True,
            type=Notification.Type.HARVEST_DUE,
            priority=Notification.Priority.MEDIUM,
            should_create_work=(days_until_harvest == WORK_TRIGGER_DAYS),
        )

    return NO_ACTION


def escalates(current_priority, new_priority) -> bool:
    """True only when ``new_priority`` ranks above ``current_priority``."""
    return PRIORITY_RANK.get(new_priority, 0) > PRIORITY_RANK.get(current_priority, 0)


# ============================================================
# IN-APP TEXT
# ============================================================

def build_title(land_name, days_until_harvest):
    if days_until_harvest < 0:
        return f"Harvest Overdue - {land_name}"
    if days_until_harvest == 0:
        return f"Harvest Due Today - {land_name}"
    if days_until_harvest == 1:
        return f"Harvest Tomorrow - {land_name}"
    return f"Harvest in {days_until_harvest} Days - {land_name}"


def build_message(*, land_name, land_code, plant_type_name, harvest_date, days_until_harvest):
    lines = [
        f"Land: {land_name} ({land_code})",
        f"Plant Type: {plant_type_name or 'Unspecified'}",
        f"Harvest Date: {harvest_date:%B} {harvest_date.day}, {harvest_date.year}",
    ]

    if days_until_harvest < 0:
        overdue = abs(days_until_harvest)
        day_word = "day" if overdue == 1 else "days"
        lines.append(f"Status: OVERDUE by {overdue} {day_word}")
        lines.append("Action Required: Please harvest immediately.")
    elif days_until_harvest == 0:
        lines.append("Status: Harvest is due today!")
        lines.append("Action Required: Harvest today.")
    elif days_until_harvest == 1:
        lines.append("Status: Harvest is tomorrow!")
        lines.append("Action Required: Prepare for harvest.")
    else:
        lines.append(f"Status: Harvest in {days_until_harvest} days")
        lines.append("Action Required: Plan harvest activities.")

    return "\n".join(lines)
