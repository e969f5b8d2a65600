import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("farmwork", "0001_initial"),
        ("lands", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Notification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(choices=[("harvest_due", "Harvest Due"), ("harvest_overdue", "Harvest Overdue"), ("maintenance_due", "Maintenance Due"), ("comment", "Comment"), ("photo", "Photo"), ("weather", "Weather"), ("system", "System"), ("bulk", "Bulk")], db_index=True, max_length=30)),
                ("priority", models.CharField(choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")], db_index=True, default="medium", max_length=10)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("in_progress", "In Progress"), ("completed", "Completed"), ("dismissed", "Dismissed")], default="pending", max_length=20)),
                ("title", models.CharField(help_text="Short headline shown in notification list", max_length=200)),
                ("message", models.TextField(help_text="Detailed message shown when expanded")),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("is_read", models.BooleanField(db_index=True, default=False)),
                ("read_at", models.DateTimeField(blank=True, null=True)),
                ("is_dismissed", models.BooleanField(db_index=True, default=False)),
                ("dismissed_at", models.DateTimeField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("farm_work", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="notifications", to="farmwork.farmwork")),
                ("land", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to="lands.land")),
                ("recipient", models.ForeignKey(blank=True, help_text="User who receives this notification (empty for system-wide)", null=True, on_delete=django.db.models.deletion.CASCADE, related_name="notifications", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
                    models.Index(fields=["land", "type", "is_dismissed"], name="notif_land_type_open_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("is_dismissed", False), ("type__in", ["harvest_due", "harvest_overdue"])),
                        fields=("land", "type"),
                        name="unique_open_harvest_notification",
                    ),
                ],
            },
        ),
    ]
