from dataclasses import dataclass
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone


@dataclass(frozen=True)
class HarvestCheckConfig:
    """
    Everything the harvest check reads from the environment,
    resolved once and passed in explicitly.
    """

    time_zone: str = "UTC"
    work_type_keyword: str = "harvest"
    work_priority: str = "medium"
    cleanup_after_days: int = 30
    run_hour: int = 6
    run_minute: int = 0

    @classmethod
    def from_settings(cls):
        options = getattr(settings, "HARVEST_NOTIFICATIONS", {})

        return cls(
            time_zone=settings.TIME_ZONE or "UTC",
            work_type_keyword=options.get("WORK_TYPE_KEYWORD", cls.work_type_keyword),
            work_priority=options.get("WORK_PRIORITY", cls.work_priority),
            cleanup_after_days=options.get("CLEANUP_AFTER_DAYS", cls.cleanup_after_days),
            run_hour=options.get("RUN_HOUR", cls.run_hour),
            run_minute=options.get("RUN_MINUTE", cls.run_minute),
        )

    def today(self):
        return timezone.localdate(timezone=ZoneInfo(self.time_zone))
