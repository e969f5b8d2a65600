from django.contrib import admin

from .models import Land, PlantType


@admin.register(PlantType)
class PlantTypeAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "scientific_name",
        "harvest_cycle_days",
    )
    search_fields = ("name", "scientific_name")


@admin.register(Land)
class LandAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "plant_type",
        "cycle_days",
        "previous_harvest_date",
        "next_harvest_date",
        "is_active",
        "created_by",
    )

    list_filter = (
        "is_active",
        "plant_type",
    )

    search_fields = (
        "name",
        "code",
    )

    autocomplete_fields = ("plant_type",)

    fieldsets = (
        ("Land", {
            "fields": ("name", "code", "plant_type", "created_by", "is_active"),
        }),
        ("Harvest Schedule", {
            "fields": (
                "harvest_cycle_days",
                "previous_harvest_date",
                "next_harvest_date",
            ),
        }),
    )
