"""Tests for the harvest work synchronizer."""

from datetime import date

import pytest
from django.core.exceptions import ValidationError

from farmwork.models import FarmWork, WorkCategory, WorkType
from farmwork.services.harvest_work import (
    create_harvest_work,
    find_existing_work_for_cycle,
    find_harvest_work_type,
    sync_notification_with_work,
)
from notifications.models import Notification

HARVEST_DATE = date(2025, 5, 1)


def _work(land, **overrides):
    fields = {
        "land_id": land.id,
        "due_date": HARVEST_DATE,
        "priority": FarmWork.Priority.MEDIUM,
        "creator_user_id": land.created_by_id,
        "metadata": {
            "land_name": land.name,
            "land_code": land.code,
            "plant_type_name": "Durian",
        },
    }
    fields.update(overrides)
    return create_harvest_work(**fields)


def _notification(land, work=None):
    return Notification.objects.create(
        land=land,
        recipient=land.created_by,
        farm_work=work,
        type=Notification.Type.HARVEST_DUE,
        title="Harvest in 3 Days",
        message="Plan harvest activities.",
        metadata={"harvest_date": HARVEST_DATE.isoformat()},
    )


@pytest.mark.django_db
class TestWorkTypeLookup:

    def test_matches_category_name(self, harvest_work_type):
        assert find_harvest_work_type("harvest") == harvest_work_type

    def test_matches_type_name(self):
        category = WorkCategory.objects.create(name="Field Operations")
        work_type = WorkType.objects.create(name="Harvest Picking", category=category)

        assert find_harvest_work_type("HARVEST") == work_type

    def test_missing_work_type(self):
        WorkType.objects.create(name="Pruning")
        assert find_harvest_work_type("harvest") is None


@pytest.mark.django_db
class TestCreateHarvestWork:

    def test_created_work_is_tagged(self, make_land, harvest_work_type):
        land = make_land()
        work = _work(land, work_type=harvest_work_type)

        assert work.status == FarmWork.Status.CREATED
        assert work.due_date == HARVEST_DATE
        assert work.work_type == harvest_work_type
        assert work.title == f"Harvest Durian - {land.name}"
        assert work.metadata["created_from"] == "harvest_notification"
        assert work.metadata["harvest_date"] == "2025-05-01"
        assert work.metadata["auto_created"] is True
        assert work.is_harvest_work

    def test_invalid_priority(self, make_land):
        with pytest.raises(ValidationError):
            _work(make_land(), priority="critical")

    def test_existing_work_is_scoped_to_the_cycle(self, make_land):
        land = make_land()
        work = _work(land)

        assert find_existing_work_for_cycle(land.id, HARVEST_DATE) == work
        assert find_existing_work_for_cycle(land.id, date(2025, 8, 29)) is None

    def test_existing_work_found_in_any_status(self, make_land):
        land = make_land()
        work = _work(land)
        work.status = FarmWork.Status.COMPLETED
        work.save()

        assert find_existing_work_for_cycle(land.id, HARVEST_DATE) == work

    def test_invalid_status(self, make_land):
        with pytest.raises(ValidationError):
            _work(make_land(), status="archived")

        assert not FarmWork.objects.exists()

    def test_explicit_status(self, make_land):
        work = _work(make_land(), status=FarmWork.Status.ASSIGNED)

        assert work.status == FarmWork.Status.ASSIGNED

    def test_postponed_work_still_belongs_to_its_cycle(self, make_land):
        land = make_land()
        work = _work(land)
        work.due_date = date(2025, 5, 8)
        work.status = FarmWork.Status.POSTPONED
        work.save()

        assert find_existing_work_for_cycle(land.id, HARVEST_DATE) == work
        assert find_existing_work_for_cycle(land.id, date(2025, 5, 8)) is None

    def test_manual_work_is_not_harvest_work(self, make_land):
        land = make_land()
        FarmWork.objects.create(title="Manual harvest", land=land, due_date=HARVEST_DATE)

        assert find_existing_work_for_cycle(land.id, HARVEST_DATE) is None


@pytest.mark.django_db
class TestStatusSync:

    @pytest.mark.parametrize("work_status, notification_status", [
        (FarmWork.Status.IN_PROGRESS, Notification.Status.IN_PROGRESS),
        (FarmWork.Status.COMPLETED, Notification.Status.COMPLETED),
        (FarmWork.Status.CANCELED, Notification.Status.DISMISSED),
        (FarmWork.Status.POSTPONED, Notification.Status.PENDING),
    ])
    def test_work_status_flows_to_notification(self, make_land, work_status, notification_status):
        land = make_land()
        work = _work(land)
        notification = _notification(land, work)

        work.status = work_status
        work.save()
        notification.refresh_from_db()

        assert notification.status == notification_status
        # status is informational only; the inbox state is untouched
        assert not notification.is_dismissed

    def test_completion_sets_completed_at(self, make_land):
        work = _work(make_land())
        work.status = FarmWork.Status.COMPLETED
        work.save()

        assert work.completed_at is not None

    def test_unlinked_notification_matched_by_cycle(self, make_land):
        land = make_land()
        work = _work(land)
        notification = _notification(land)

        work.status = FarmWork.Status.IN_PROGRESS
        assert sync_notification_with_work(work) == 1

        notification.refresh_from_db()
        assert notification.status == Notification.Status.IN_PROGRESS

    def test_dismissing_notification_leaves_work_alone(self, make_land):
        land = make_land()
        work = _work(land)
        notification = _notification(land, work)

        notification.dismiss()
        work.refresh_from_db()

        assert work.status == FarmWork.Status.CREATED

    def test_non_harvest_work_is_ignored(self, make_land):
        land = make_land()
        work = FarmWork.objects.create(title="Weeding", land=land)
        _notification(land, work)

        assert sync_notification_with_work(work) == 0
