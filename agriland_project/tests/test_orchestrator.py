"""Tests for the harvest notification run."""

from datetime import date, timedelta
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from farmwork.models import FarmWork
from lands.models import PlantType
from notifications.models import Notification
from notifications.services.harvest import HarvestCheckConfig, run_harvest_check
from notifications.services.harvest import orchestrator

CONFIG = HarvestCheckConfig(time_zone="Asia/Bangkok")

HARVEST_DATE = date(2025, 5, 1)
THREE_DAYS_BEFORE = date(2025, 4, 28)


def run(today):
    return run_harvest_check(today=today, config=CONFIG)


def harvest_works(land):
    return FarmWork.objects.filter(land=land, metadata__created_from="harvest_notification")


@pytest.mark.django_db
@pytest.mark.usefixtures("harvest_work_type")
class TestHarvestRun:

    def test_three_days_before_creates_notification_and_work(self, make_land, harvest_work_type):
        land = make_land()

        summary = run(THREE_DAYS_BEFORE)

        assert summary.success
        assert summary.lands_processed == 1
        assert summary.notifications_created == 1
        assert summary.farm_works_created == 1

        land.refresh_from_db()
        assert land.next_harvest_date == HARVEST_DATE

        notification = Notification.objects.get(land=land)
        assert notification.type == Notification.Type.HARVEST_DUE
        assert notification.priority == Notification.Priority.MEDIUM
        assert notification.recipient == land.created_by
        assert notification.metadata["land_code"] == land.code
        assert notification.metadata["days_until_harvest"] == 3

        work = harvest_works(land).get()
        assert work.due_date == HARVEST_DATE
        assert work.status == FarmWork.Status.CREATED
        assert work.work_type == harvest_work_type
        assert notification.farm_work == work

    def test_one_day_overdue_creates_overdue_without_new_work(self, make_land):
        land = make_land()
        run(THREE_DAYS_BEFORE)

        summary = run(date(2025, 5, 2))

        assert summary.notifications_created == 1
        assert summary.farm_works_created == 0

        overdue = Notification.objects.get(land=land, type=Notification.Type.HARVEST_OVERDUE)
        assert overdue.priority == Notification.Priority.HIGH
        assert overdue.metadata["days_until_harvest"] == -1
        assert overdue.farm_work == harvest_works(land).get()

    def test_second_run_same_day_is_a_no_op(self, make_land):
        make_land()
        make_land(previous_harvest_date=date(2024, 12, 29))

        first = run(THREE_DAYS_BEFORE)
        second = run(THREE_DAYS_BEFORE)

        assert first.notifications_created == 2
        assert second.notifications_created == 0
        assert second.notifications_updated == 0
        assert second.farm_works_created == 0
        assert Notification.objects.count() == 2

    def test_single_work_item_per_cycle(self, make_land):
        land = make_land()

        for offset in range(6):
            run(THREE_DAYS_BEFORE + timedelta(days=offset))
        run(THREE_DAYS_BEFORE)

        assert harvest_works(land).count() == 1

    def test_rescheduled_work_is_not_duplicated(self, make_land):
        land = make_land()
        run(THREE_DAYS_BEFORE)
        work = harvest_works(land).get()
        work.due_date = HARVEST_DATE + timedelta(days=7)
        work.save()

        summary = run(THREE_DAYS_BEFORE)

        assert summary.farm_works_created == 0
        assert harvest_works(land).get() == work

    def test_priority_only_escalates(self, make_land):
        land = make_land()
        seen = []

        for today in (date(2025, 4, 28), date(2025, 4, 30), date(2025, 5, 1)):
            run(today)
            notification = Notification.objects.get(land=land, type=Notification.Type.HARVEST_DUE)
            seen.append(notification.priority)

        assert seen == [
            Notification.Priority.MEDIUM,
            Notification.Priority.HIGH,
            Notification.Priority.HIGH,
        ]

        run(date(2025, 5, 2))
        due = Notification.objects.get(land=land, type=Notification.Type.HARVEST_DUE)
        assert due.priority == Notification.Priority.HIGH

    def test_approaching_date_refreshes_existing_notification(self, make_land):
        land = make_land()
        run(THREE_DAYS_BEFORE)
        notification = Notification.objects.get(land=land)
        notification.mark_as_read()

        summary = run(date(2025, 4, 30))
        notification.refresh_from_db()

        assert summary.notifications_created == 0
        assert summary.notifications_updated == 1
        assert notification.title == f"Harvest Tomorrow - {land.name}"
        assert notification.metadata["days_until_harvest"] == 1
        assert notification.is_read

    def test_dismissed_notification_does_not_block_a_new_one(self, make_land):
        land = make_land()
        run(THREE_DAYS_BEFORE)
        Notification.objects.get(land=land).dismiss()

        summary = run(THREE_DAYS_BEFORE)

        assert summary.notifications_created == 1
        assert summary.farm_works_created == 0
        assert Notification.objects.filter(land=land).count() == 2
        assert Notification.objects.filter(land=land, is_dismissed=False).count() == 1

    def test_new_cycle_reuses_notification_and_creates_new_work(self, make_land):
        land = make_land()
        run(THREE_DAYS_BEFORE)
        notification = Notification.objects.get(land=land)
        notification.mark_as_read()

        land.previous_harvest_date = HARVEST_DATE
        land.next_harvest_date = HARVEST_DATE + timedelta(days=120)
        land.save()

        summary = run(land.next_harvest_date - timedelta(days=3))
        notification.refresh_from_db()

        assert summary.notifications_created == 0
        assert summary.notifications_updated == 1
        assert summary.farm_works_created == 1
        assert notification.metadata["harvest_date"] == "2025-08-29"
        assert not notification.is_read
        assert harvest_works(land).count() == 2

    def test_far_away_harvest_does_nothing(self, make_land):
        make_land()

        summary = run(date(2025, 3, 1))

        assert summary.lands_processed == 1
        assert summary.notifications_created == 0
        assert not Notification.objects.exists()

    def test_stored_next_harvest_date_is_used(self, make_land):
        land = make_land(next_harvest_date=date(2025, 6, 10))

        run(date(2025, 6, 7))

        assert Notification.objects.get(land=land).metadata["harvest_date"] == "2025-06-10"

    def test_land_cycle_override(self, make_land):
        land = make_land(harvest_cycle_days=30)

        run(date(2025, 1, 28))

        land.refresh_from_db()
        assert land.next_harvest_date == date(2025, 1, 31)
        assert Notification.objects.filter(land=land).exists()


@pytest.mark.django_db
class TestMissingWorkType:

    def test_notification_is_created_but_work_is_skipped(self, make_land):
        land = make_land()

        summary = run(THREE_DAYS_BEFORE)

        assert summary.success
        assert summary.errors == []
        assert summary.notifications_created == 1
        assert summary.farm_works_created == 0
        assert not harvest_works(land).exists()
        assert Notification.objects.get(land=land).farm_work is None

    def test_work_is_created_once_the_type_exists(self, make_land, harvest_work_type):
        land = make_land()
        harvest_work_type.is_active = False
        harvest_work_type.save()
        run(THREE_DAYS_BEFORE)

        harvest_work_type.is_active = True
        harvest_work_type.save()
        summary = run(THREE_DAYS_BEFORE)

        assert summary.farm_works_created == 1
        assert harvest_works(land).get().work_type == harvest_work_type


@pytest.mark.django_db
class TestSkippedLands:

    def test_missing_cycle_days_is_excluded(self, make_land):
        no_cycle = PlantType.objects.create(name="Wild grass")
        make_land(plant_type=no_cycle)
        make_land(plant_type=None)

        summary = run(THREE_DAYS_BEFORE)

        assert summary.success
        assert summary.lands_processed == 0
        assert summary.errors == []
        assert not Notification.objects.exists()

    def test_missing_previous_harvest_and_inactive_lands_are_excluded(self, make_land):
        make_land(previous_harvest_date=None)
        make_land(is_active=False)

        summary = run(THREE_DAYS_BEFORE)

        assert summary.lands_processed == 0
        assert not Notification.objects.exists()


@pytest.mark.django_db
@pytest.mark.usefixtures("harvest_work_type")
class TestFailures:

    def test_failure_on_one_land_does_not_stop_the_run(self, make_land):
        broken = make_land()
        healthy = make_land()
        real_create = orchestrator.create_notification

        def flaky_create(**kwargs):
            if kwargs["land_id"] == broken.id:
                raise DatabaseError("disk full")
            return real_create(**kwargs)

        with patch.object(orchestrator, "create_notification", side_effect=flaky_create):
            summary = run(THREE_DAYS_BEFORE)

        assert summary.success
        assert summary.lands_processed == 2
        assert summary.notifications_created == 1
        assert summary.farm_works_created == 1
        assert summary.errors == [
            {"land_id": broken.id, "land_code": broken.code, "error": "disk full"},
        ]

        # the broken land's partial writes were rolled back
        broken.refresh_from_db()
        assert broken.next_harvest_date is None
        assert not Notification.objects.filter(land=broken).exists()
        assert Notification.objects.filter(land=healthy).exists()

    def test_cannot_load_lands(self):
        with patch.object(
            orchestrator,
            "get_lands_for_harvest_check",
            side_effect=DatabaseError("connection refused"),
        ):
            summary = run(THREE_DAYS_BEFORE)

        assert not summary.success
        assert summary.as_dict() == {
            "success": False,
            "lands_processed": 0,
            "notifications_created": 0,
            "notifications_updated": 0,
            "farm_works_created": 0,
            "errors": [],
            "error": "connection refused",
        }

    def test_success_summary_has_no_error_key(self, make_land):
        make_land()

        data = run(THREE_DAYS_BEFORE).as_dict()

        assert data["success"] is True
        assert "error" not in data
