"""Shared fixtures for the harvest notification tests."""

import itertools
from datetime import date

import pytest

from accounts.models import User
from farmwork.models import WorkCategory, WorkType
from lands.models import Land, PlantType


@pytest.fixture
def owner(django_user_model):
    return django_user_model.objects.create_user(
        username="farmer",
        password="secret-pass-123",
        email="farmer@example.com",
        role=User.Role.CONTRIBUTOR,
    )


@pytest.fixture
def viewer(django_user_model):
    return django_user_model.objects.create_user(
        username="viewer",
        password="secret-pass-123",
        role=User.Role.VIEWER,
    )


@pytest.fixture
def manager(django_user_model):
    return django_user_model.objects.create_user(
        username="manager",
        password="secret-pass-123",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def plant_type(db):
    return PlantType.objects.create(name="Durian", harvest_cycle_days=120)


@pytest.fixture
def harvest_work_type(db):
    category = WorkCategory.objects.create(name="Harvesting")
    return WorkType.objects.create(name="Crop Harvest", category=category)


@pytest.fixture
def make_land(db, owner, plant_type):
    counter = itertools.count(1)

    def _make(**overrides):
        n = next(counter)
        fields = {
            "name": f"North Field {n}",
            "code": f"NF-{n:03d}",
            "plant_type": plant_type,
            "previous_harvest_date": date(2025, 1, 1),
            "created_by": owner,
        }
        fields.update(overrides)
        return Land.objects.create(**fields)

    return _make
