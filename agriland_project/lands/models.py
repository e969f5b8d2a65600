from django.db import models
from django.conf import settings


class PlantType(models.Model):
    name = models.CharField(max_length=150, unique=True)
    scientific_name = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)

    harvest_cycle_days = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Days between consecutive harvests for this crop",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Land(models.Model):
    """
    A managed crop parcel.

    The harvest schedule is driven by ``previous_harvest_date`` and
    the cycle length, taken from the land itself when set and from
    its plant type otherwise.
    """

    # =====================================================
    # IDENTITY
    # =====================================================
    name = models.CharField(max_length=200)
    code = models.CharField(max_length=50, unique=True)

    plant_type = models.ForeignKey(
        PlantType,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lands",
    )

    # =====================================================
    # HARVEST SCHEDULE
    # =====================================================
    harvest_cycle_days = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Overrides the plant type cycle length when set",
    )

    previous_harvest_date = models.DateField(null=True, blank=True)
    next_harvest_date = models.DateField(null=True, blank=True)

    # =====================================================
    # OWNERSHIP / STATE
    # =====================================================
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lands",
    )

    is_active = models.BooleanField(default=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    @property
    def cycle_days(self):
        from lands.services.harvest_calendar import effective_cycle_days
        return effective_cycle_days(self)
