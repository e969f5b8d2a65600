import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="PlantType",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, unique=True)),
                ("scientific_name", models.CharField(blank=True, max_length=200)),
                ("description", models.TextField(blank=True)),
                ("harvest_cycle_days", models.PositiveIntegerField(blank=True, help_text="Days between consecutive harvests for this crop", null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Land",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("code", models.CharField(max_length=50, unique=True)),
                ("harvest_cycle_days", models.PositiveIntegerField(blank=True, help_text="Overrides the plant type cycle length when set", null=True)),
                ("previous_harvest_date", models.DateField(blank=True, null=True)),
                ("next_harvest_date", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(db_index=True, default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("created_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="lands", to=settings.AUTH_USER_MODEL)),
                ("plant_type", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="lands", to="lands.planttype")),
            ],
            options={
                "ordering": ["id"],
            },
        ),
    ]
