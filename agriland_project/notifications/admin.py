from django.contrib import admin
from django.utils import timezone
from django.utils.html import format_html

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """
    Admin configuration for land and system notifications.
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "land",
        "type",
        "priority",
        "colored_title",
        "status",
        "is_read",
        "is_dismissed",
        "created_at",
    )

    list_filter = (
        "type",
        "priority",
        "status",
        "is_read",
        "is_dismissed",
        "created_at",
    )

    search_fields = (
        "title",
        "message",
        "land__name",
        "land__code",
        "recipient__username",
    )

    ordering = ("-created_at",)
    list_per_page = 25

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient",),
        }),
        ("Classification", {
            "fields": ("type", "priority", "status"),
        }),
        ("Content", {
            "fields": ("title", "message", "metadata"),
        }),
        ("Context", {
            "fields": ("land", "farm_work"),
        }),
        ("State", {
            "fields": (
                "is_read",
                "read_at",
                "is_dismissed",
                "dismissed_at",
                "is_active",
                "created_at",
            ),
        }),
    )

    readonly_fields = (
        "created_at",
        "read_at",
        "dismissed_at",
    )

    # =====================================================
    # ACTIONS
    # =====================================================
    actions = (
        "mark_as_read",
        "mark_as_unread",
        "dismiss",
    )

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_title(self, obj):
        """
        Color the title based on priority for fast scanning.
        """
        color_map = {
            Notification.Priority.HIGH: "#dc2626",    # red
            Notification.Priority.MEDIUM: "#f59e0b",  # orange
            Notification.Priority.LOW: "#6b7280",     # gray
        }

        color = color_map.get(obj.priority, "#000000")

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color,
            obj.title,
        )

    colored_title.short_description = "Title"

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.update(is_read=True, read_at=timezone.now())

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False, read_at=None)

    @admin.action(description="Dismiss selected notifications")
    def dismiss(self, request, queryset):
        for notification in queryset.filter(is_dismissed=False):
            notification.dismiss()
