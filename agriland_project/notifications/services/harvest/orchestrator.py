"""
notifications/services/harvest/orchestrator.py

The scheduled harvest check.

For every active land with schedule data:
    compute days until harvest → apply the policy →
    create / update / skip the notification →
    create / skip the harvest work item

Each land runs in its own transaction. A failure on one land is
logged and recorded in the summary; the loop carries on. Only a
failure to list the lands aborts the run.

All writes are check-before-create, so repeated runs on the same
day with unchanged data produce no new rows.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional

from django.db import transaction

from farmwork.services.harvest_work import (
    create_harvest_work,
    find_existing_work_for_cycle,
    find_harvest_work_type,
)
from lands.services.candidates import (
    get_lands_for_harvest_check,
    store_next_harvest_date,
)
from lands.services.harvest_calendar import (
    calculate_next_harvest_date,
    days_until_harvest,
    is_schedulable,
    to_calendar_date,
)

from .config import HarvestCheckConfig
from .ledger import (
    create_notification,
    find_active_notification,
    link_farm_work,
    refresh_for_new_cycle,
    update_notification_priority,
)
from .policy import build_message, build_title, decide, escalates

logger = logging.getLogger(__name__)

NOTIFICATION_SOURCE = "harvest_check"


@dataclass
class RunSummary:
    success: bool = True
    lands_processed: int = 0
    notifications_created: int = 0
    notifications_updated: int = 0
    farm_works_created: int = 0
    errors: list = field(default_factory=list)
    error: Optional[str] = None

    def as_dict(self):
        data = asdict(self)
        if self.error is None:
            data.pop("error")
        return data


@dataclass
class LandOutcome:
    notifications_created: int = 0
    notifications_updated: int = 0
    farm_works_created: int = 0


class HarvestNotificationRunner:

    def __init__(self, config: Optional[HarvestCheckConfig] = None):
        self.config = config or HarvestCheckConfig.from_settings()

    # ========================================================
    # ENTRY
    # ========================================================
    def run(self, today=None) -> RunSummary:
        today = to_calendar_date(today) if today is not None else self.config.today()
        logger.info("Starting harvest notification check for %s", today.isoformat())

        try:
            lands = get_lands_for_harvest_check()
            work_type = find_harvest_work_type(self.config.work_type_keyword)
        except Exception as exc:
            logger.exception("Harvest check aborted: could not load lands")
            return RunSummary(success=False, error=str(exc))

        if work_type is None:
            logger.warning(
                "No work type matching %r; harvest work items will be skipped",
                self.config.work_type_keyword,
            )

        summary = RunSummary(lands_processed=len(lands))

        for land in lands:
            try:
                with transaction.atomic():
                    outcome = self.process_land(land, today, work_type=work_type)
            except Exception as exc:
                logger.exception(
                    "Error processing land %s (%s)", land.id, land.code,
                )
                summary.errors.append({
                    "land_id": land.id,
                    "land_code": land.code,
                    "error": str(exc),
                })
                continue

            summary.notifications_created += outcome.notifications_created
            summary.notifications_updated += outcome.notifications_updated
            summary.farm_works_created += outcome.farm_works_created

        logger.info(
            "Harvest check completed: %s lands, %s created, %s updated, "
            "%s farm works, %s errors",
            summary.lands_processed,
            summary.notifications_created,
            summary.notifications_updated,
            summary.farm_works_created,
            len(summary.errors),
        )
        return summary

    # ========================================================
    # ONE LAND
    # ========================================================
    def process_land(self, land, today, work_type=None) -> LandOutcome:
        outcome = LandOutcome()

        if not is_schedulable(land.previous_harvest_date, land.cycle_days):
            logger.info("Skipping land %s (%s): no harvest schedule", land.id, land.code)
            return outcome

        if land.next_harvest_date is None:
            next_date = calculate_next_harvest_date(
                land.previous_harvest_date, land.cycle_days,
            )
            store_next_harvest_date(land.id, next_date)
            land = land.with_next_harvest_date(next_date)

        harvest_date = land.next_harvest_date
        days = days_until_harvest(harvest_date, today)
        decision = decide(days)

        logger.debug("Land %s (%s): %s days until harvest", land.name, land.code, days)

        if not decision.should_notify:
            return outcome

        metadata = self._metadata(land, harvest_date, days)
        title = build_title(land.name, days)
        message = build_message(
            land_name=land.name,
            land_code=land.code,
            plant_type_name=land.plant_type_name,
            harvest_date=harvest_date,
            days_until_harvest=days,
        )

        # ----------------------------------------------------
        # NOTIFICATION (CHECK BEFORE CREATE)
        # ----------------------------------------------------
        existing = find_active_notification(land.id, decision.type)

        if existing is None:
            notification_id = create_notification(
                land_id=land.id,
                user_id=land.creator_user_id,
                type=decision.type,
                title=title,
                message=message,
                priority=decision.priority,
                metadata=metadata,
            )
            outcome.notifications_created = 1

        elif (existing.metadata or {}).get("harvest_date") != metadata["harvest_date"]:
            refresh_for_new_cycle(
                existing,
                title=title,
                message=message,
                priority=decision.priority,
                metadata=metadata,
            )
            notification_id = existing.pk
            outcome.notifications_updated = 1

        else:
            notification_id = existing.pk
            raised = escalates(existing.priority, decision.priority)
            stale = existing.metadata.get("days_until_harvest") != days

            if raised or stale:
                update_notification_priority(
                    existing.pk,
                    decision.priority if raised else existing.priority,
                    metadata,
                    title=title,
                    message=message,
                )
                outcome.notifications_updated = 1

        # ----------------------------------------------------
        # FARM WORK (ONE PER LAND PER CYCLE)
        # ----------------------------------------------------
        work = find_existing_work_for_cycle(land.id, harvest_date)

        if work is None and decision.should_create_work and work_type is None:
            logger.warning(
                "Skipping harvest work for land %s (%s): no harvest work type",
                land.id, land.code,
            )

        elif work is None and decision.should_create_work:
            work = create_harvest_work(
                land_id=land.id,
                due_date=harvest_date,
                priority=self.config.work_priority,
                creator_user_id=land.creator_user_id,
                metadata=metadata,
                work_type=work_type,
            )
            outcome.farm_works_created = 1

        if work is not None:
            link_farm_work(notification_id, work.pk)

        return outcome

    @staticmethod
    def _metadata(land, harvest_date, days):
        return {
            "created_from": NOTIFICATION_SOURCE,
            "land_name": land.name,
            "land_code": land.code,
            "plant_type_name": land.plant_type_name,
            "harvest_date": harvest_date.isoformat(),
            "days_until_harvest": days,
            "harvest_cycle_days": land.cycle_days,
        }


def run_harvest_check(today=None, config=None) -> RunSummary:
    """
    Single entry point used by the scheduler, the management
    command and the on-demand HTTP action.
    """
    return HarvestNotificationRunner(config).run(today=today)
