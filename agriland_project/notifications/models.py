from django.db import models
from django.db.models import Q
from django.conf import settings
from django.utils import timezone


class Notification(models.Model):
    """
    A derived, user-facing notification.
    Notifications are NOT the source of truth. They reflect
    events happening on lands and farm work.
    """

    # =====================================================
    # TYPE
    # =====================================================
    class Type(models.TextChoices):
        HARVEST_DUE = "harvest_due", "Harvest Due"
        HARVEST_OVERDUE = "harvest_overdue", "Harvest Overdue"
        MAINTENANCE_DUE = "maintenance_due", "Maintenance Due"
        COMMENT = "comment", "Comment"
        PHOTO = "photo", "Photo"
        WEATHER = "weather", "Weather"
        SYSTEM = "system", "System"
        BULK = "bulk", "Bulk"

    HARVEST_TYPES = (Type.HARVEST_DUE, Type.HARVEST_OVERDUE)

    # =====================================================
    # PRIORITY (UI + sorting)
    # =====================================================
    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    # =====================================================
    # LIFECYCLE
    # =====================================================
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        IN_PROGRESS = "in_progress", "In Progress"
        COMPLETED = "completed", "Completed"
        DISMISSED = "dismissed", "Dismissed"

    # =====================================================
    # CORE RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications",
        help_text="User who receives this notification (empty for system-wide)"
    )

    land = models.ForeignKey(
        "lands.Land",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="notifications"
    )

    farm_work = models.ForeignKey(
        "farmwork.FarmWork",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notifications"
    )

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    type = models.CharField(
        max_length=30,
        choices=Type.choices,
        db_index=True
    )

    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
        db_index=True
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING
    )

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(
        max_length=200,
        help_text="Short headline shown in notification list"
    )

    message = models.TextField(
        help_text="Detailed message shown when expanded"
    )

    metadata = models.JSONField(default=dict, blank=True)

    # =====================================================
    # STATE
    # =====================================================
    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    is_dismissed = models.BooleanField(default=False, db_index=True)
    dismissed_at = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    # =====================================================
    # DJANGO META
    # =====================================================
    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(fields=["land", "type", "is_dismissed"], name="notif_land_type_open_idx"),
        ]
        constraints = [
            # One open harvest notification per land and type.
            models.UniqueConstraint(
                fields=["land", "type"],
                condition=Q(is_dismissed=False, type__in=["harvest_due", "harvest_overdue"]),
                name="unique_open_harvest_notification",
            ),
        ]

    def __str__(self):
        return f"{self.recipient or 'all'} | {self.type.upper()} | {self.title}"

    # =====================================================
    # INSTANCE HELPERS
    # =====================================================
    def mark_as_read(self):
        """Safely mark notification as read."""
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at", "updated_at"])

    def dismiss(self):
        """
        Hide the notification from the inbox. A dismissed harvest
        notification no longer blocks a new one for the same land.
        Linked farm work is left untouched.
        """
        if not self.is_dismissed:
            self.is_dismissed = True
            self.dismissed_at = timezone.now()
            self.status = self.Status.DISMISSED
            self.save(update_fields=["is_dismissed", "dismissed_at", "status", "updated_at"])

    # =====================================================
    # BULK HELPERS
    # =====================================================
    @classmethod
    def mark_all_as_read(cls, user, type=None):
        """
        Mark all unread notifications (optionally by type)
        as read for a user.
        """
        qs = cls.objects.filter(recipient=user, is_read=False)
        if type:
            qs = qs.filter(type=type)

        now = timezone.now()
        return qs.update(is_read=True, read_at=now, updated_at=now)
