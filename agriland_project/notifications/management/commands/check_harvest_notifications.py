"""
notifications/management/commands/check_harvest_notifications.py

Scheduled command (runs daily, see notifications/scheduler.py).

- Creates or escalates harvest notifications for every active land
- Creates one harvest work item per land per cycle (3 days ahead)
- Optionally removes old dismissed notifications

Idempotent: running it several times a day is safe.
"""

from datetime import date

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.services import (
    HarvestCheckConfig,
    cleanup_old_notifications,
    run_harvest_check,
)


class Command(BaseCommand):
    help = "Check harvest dates, create harvest notifications and harvest work"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            dest="run_date",
            help="Evaluate as if today were this date (YYYY-MM-DD)",
        )
        parser.add_argument(
            "--cleanup-days",
            type=int,
            default=None,
            help="Also delete dismissed notifications older than this many days",
        )

    def handle(self, *args, **options):
        now = timezone.now()
        config = HarvestCheckConfig.from_settings()

        run_date = None
        if options["run_date"]:
            try:
                run_date = date.fromisoformat(options["run_date"])
            except ValueError:
                raise CommandError(f"Invalid --date value: {options['run_date']}")

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting harvest notification check"
            )
        )

        summary = run_harvest_check(today=run_date, config=config)

        if not summary.success:
            raise CommandError(f"Harvest check failed: {summary.error}")

        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{summary.lands_processed} lands processed, "
                f"{summary.notifications_created} notifications created, "
                f"{summary.notifications_updated} notifications updated, "
                f"{summary.farm_works_created} farm works created"
            )
        )

        for failure in summary.errors:
            self.stderr.write(
                self.style.WARNING(
                    f"Land {failure['land_id']} ({failure['land_code']}): {failure['error']}"
                )
            )

        if options["cleanup_days"] is not None:
            removed = cleanup_old_notifications(days_old=options["cleanup_days"])
            self.stdout.write(f"Removed {removed} old dismissed notifications")
