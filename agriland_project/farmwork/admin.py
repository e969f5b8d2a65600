from django.contrib import admin

from .models import FarmWork, WorkCategory, WorkType


@admin.register(WorkCategory)
class WorkCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "is_active")
    search_fields = ("name",)


@admin.register(WorkType)
class WorkTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("name", "category__name")


@admin.register(FarmWork)
class FarmWorkAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "title",
        "land",
        "work_type",
        "priority_level",
        "status",
        "due_date",
        "assigned_team",
        "assigned_user",
    )

    list_filter = (
        "status",
        "priority_level",
        "work_type",
        "due_date",
    )

    search_fields = (
        "title",
        "description",
        "land__name",
        "land__code",
    )

    ordering = ("due_date",)
    list_per_page = 25

    fieldsets = (
        ("Work", {
            "fields": ("title", "description", "land", "work_type", "metadata"),
        }),
        ("Assignment", {
            "fields": ("creator", "assigned_team", "assigned_user"),
        }),
        ("State", {
            "fields": ("priority_level", "status", "due_date", "completed_at"),
        }),
    )

    # save() rather than update() so the status signal fires
    @admin.action(description="Mark selected work as COMPLETED")
    def mark_completed(self, request, queryset):
        for work in queryset.exclude(status=FarmWork.Status.COMPLETED):
            work.status = FarmWork.Status.COMPLETED
            work.save()

    actions = ("mark_completed",)
