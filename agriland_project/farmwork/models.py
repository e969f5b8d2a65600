from django.db import models
from django.conf import settings


class WorkCategory(models.Model):
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "work categories"

    def __str__(self):
        return self.name


class WorkType(models.Model):
    name = models.CharField(max_length=100)
    category = models.ForeignKey(
        WorkCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="work_types",
    )
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class FarmWork(models.Model):
    """
    A unit of physical labor on a land.

    Work created by the harvest check carries
    ``metadata["created_from"] == "harvest_notification"`` and
    the harvest date of the cycle it belongs to.
    """

    HARVEST_SOURCE = "harvest_notification"

    # =====================================================
    # STATUS
    # =====================================================
    class Status(models.TextChoices):
        CREATED = "created", "Created"
        ASSIGNED = "assigned", "Assigned"
        IN_PROGRESS = "in_progress", "In Progress"
        COMPLETED = "completed", "Completed"
        CANCELED = "canceled", "Canceled"
        PENDING = "pending", "Pending"
        POSTPONED = "postponed", "Postponed"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        URGENT = "urgent", "Urgent"

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    land = models.ForeignKey(
        "lands.Land",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="farm_works",
    )

    work_type = models.ForeignKey(
        WorkType,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="farm_works",
    )

    # =====================================================
    # ASSIGNMENT
    # =====================================================
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_farm_works",
    )

    assigned_team = models.ForeignKey(
        "accounts.Team",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="farm_works",
    )

    assigned_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_farm_works",
    )

    # =====================================================
    # STATE
    # =====================================================
    priority_level = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CREATED,
        db_index=True,
    )

    due_date = models.DateField(null=True, blank=True, db_index=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["land", "due_date"], name="farmwork_land_due_idx"),
            models.Index(fields=["status", "due_date"], name="farmwork_status_due_idx"),
        ]

    def __str__(self):
        return f"{self.title} [{self.get_status_display()}]"

    @property
    def is_harvest_work(self):
        return (self.metadata or {}).get("created_from") == self.HARVEST_SOURCE
