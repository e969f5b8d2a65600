"""
lands/services/candidates.py

Read side of the harvest check: active lands that carry enough
schedule data to compute a harvest date, as explicit records.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from django.db.models import F, Q
from django.db.models.functions import Coalesce
from django.utils import timezone

from lands.models import Land


@dataclass(frozen=True)
class HarvestCandidate:
    id: int
    name: str
    code: str
    previous_harvest_date: date
    next_harvest_date: Optional[date]
    cycle_days: int
    creator_user_id: Optional[int]
    plant_type_name: str = ""

    def with_next_harvest_date(self, next_harvest_date):
        return replace(self, next_harvest_date=next_harvest_date)


def get_lands_for_harvest_check():
    """
    Active lands with a previous harvest date and a positive
    cycle length, ordered by id.
    """
    rows = (
        Land.objects
        .filter(is_active=True, previous_harvest_date__isnull=False)
        .annotate(
            cycle=Coalesce("harvest_cycle_days", "plant_type__harvest_cycle_days"),
            plant_type_label=F("plant_type__name"),
        )
        .filter(Q(cycle__isnull=False) & Q(cycle__gt=0))
        .order_by("id")
        .values(
            "id",
            "name",
            "code",
            "previous_harvest_date",
            "next_harvest_date",
            "cycle",
            "created_by_id",
            "plant_type_label",
        )
    )

    return [
        HarvestCandidate(
            id=row["id"],
            name=row["name"],
            code=row["code"],
            previous_harvest_date=row["previous_harvest_date"],
            next_harvest_date=row["next_harvest_date"],
            cycle_days=row["cycle"],
            creator_user_id=row["created_by_id"],
            plant_type_name=row["plant_type_label"] or "",
        )
        for row in rows
    ]


def store_next_harvest_date(land_id, next_harvest_date):
    return Land.objects.filter(pk=land_id).update(
        next_harvest_date=next_harvest_date,
        updated_at=timezone.now(),
    )
